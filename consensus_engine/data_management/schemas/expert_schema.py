"""Expert validation schemas.

A person quoted in an article is either a valid independent expert or is
excluded with a reason. Disqualification is absolute: a result with any
disqualifier set can never be a valid expert, whatever the credentials.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class DisqualificationReason(str, Enum):
    """Why a person was excluded from the expert pool."""

    ARTICLE_SUBJECT = "article_subject"  # Person the article is about
    POLITICIAN = "politician"  # Elected official or political appointee
    LOBBYIST = "lobbyist"
    ADVOCATE = "advocate"  # Works for an advocacy organization
    CORPORATE_SPOKESPERSON = "corporate_spokesperson"
    UNDISCLOSED_CONFLICT = "undisclosed_conflict"
    MISSING_CREDENTIALS = "missing_credentials"
    IRRELEVANT_FIELD = "irrelevant_field"
    NO_PUBLICATIONS = "no_publications"


class ExpertQualityTier(str, Enum):
    """Coarse standing of a valid expert."""

    TOP = "top"
    ESTABLISHED = "established"
    EMERGING = "emerging"
    UNVERIFIED = "unverified"


class PersonMention(BaseModel):
    """A person named in an article, all free text."""

    name: str = ""
    title: Optional[str] = None
    credentials: Optional[str] = None
    affiliation: Optional[str] = None
    role: Optional[str] = None
    quote: Optional[str] = None


class ExpertDisqualifiers(BaseModel):
    """Boolean disqualification flags."""

    is_article_subject: bool = False
    is_politician: bool = False
    is_lobbyist: bool = False
    is_advocate: bool = False
    is_corporate_spokesperson: bool = False
    has_undisclosed_conflict: bool = False

    def any(self) -> bool:
        """True if any flag is set."""
        return (
            self.is_article_subject
            or self.is_politician
            or self.is_lobbyist
            or self.is_advocate
            or self.is_corporate_spokesperson
            or self.has_undisclosed_conflict
        )


class ExpertQualityIndicators(BaseModel):
    """Bibliometric indicators from an academic database, when available."""

    h_index: Optional[int] = Field(None, ge=0)
    total_citations: Optional[int] = Field(None, ge=0)
    relevant_publication_count: Optional[int] = Field(None, ge=0)
    recent_publications: Optional[int] = Field(
        None, ge=0, description="Publications in the last 5 years"
    )


class ExpertValidationResult(BaseModel):
    """Verdict on one person."""

    disqualifiers: ExpertDisqualifiers = Field(default_factory=ExpertDisqualifiers)
    has_relevant_degree: bool = False
    is_at_research_institution: bool = False
    has_academic_title: bool = False
    has_relevant_publications: bool = False
    is_valid_expert: bool = False
    confidence_score: float = Field(
        0.0,
        ge=0.0,
        le=1.0,
        description="Confidence in the verdict; 1.0 for disqualifications",
    )
    validation_reason: str = ""
    disqualification_reason: Optional[DisqualificationReason] = None
    credentials_found: List[str] = Field(default_factory=list)
    affiliation_found: Optional[str] = None
    quality_indicators: Optional[ExpertQualityIndicators] = None

    @model_validator(mode="after")
    def disqualified_is_never_valid(self) -> "ExpertValidationResult":
        """Reject results that mark a disqualified person as valid."""
        if self.disqualifiers.any() and self.is_valid_expert:
            raise ValueError("a disqualified person cannot be a valid expert")
        return self


class ValidatedExpert(BaseModel):
    """A person who passed validation, ready for evidence synthesis."""

    name: str
    credentials: str = ""
    affiliation: str = ""
    domain: str
    validation: ExpertValidationResult
    quality_tier: ExpertQualityTier = ExpertQualityTier.UNVERIFIED


class ExcludedPerson(BaseModel):
    """A person excluded from the expert pool."""

    name: str
    reason: DisqualificationReason
    explanation: str


class BatchValidationResult(BaseModel):
    """Partition of a batch of persons into experts and exclusions."""

    valid_experts: List[ValidatedExpert] = Field(default_factory=list)
    excluded_persons: List[ExcludedPerson] = Field(default_factory=list)
    total_processed: int = 0
    valid_count: int = 0
    excluded_count: int = 0
