"""Rendered output schemas and the honesty check report.

RenderedClaimOutput is the structural rendering of one assessment. It is
what the honesty enforcer inspects: the presence of the debate, warnings
and values sections is part of the contract, the exact wording is not.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from consensus_engine.data_management.schemas.claim_schema import ClaimType, Domain
from consensus_engine.data_management.schemas.consensus_schema import (
    ConfidenceLevel,
    ConsensusLevel,
)

WarningType = Literal["caveat", "limitation", "domain_specific", "methodological", "values_note"]
WarningSeverity = Literal["info", "warning", "critical"]


class ConfidenceBadge(BaseModel):
    text: str
    level: ConfidenceLevel
    color_class: Literal["green", "blue", "yellow", "orange", "gray", "purple"]


class OutputHeader(BaseModel):
    symbol: str
    headline: str
    confidence_badge: ConfidenceBadge
    claim_text: str


class OutputCitation(BaseModel):
    title: str
    authors: str = Field(..., description="Display string, e.g. 'Smith et al.'")
    publication: str = ""
    year: int
    url: str = ""
    doi: Optional[str] = None
    finding: Optional[str] = None
    tier_label: str
    tier_level: int


class OutputEvidenceSummary(BaseModel):
    total_studies: int
    quality_studies: int
    meta_analysis_count: int
    systematic_review_count: int
    supporting_count: int
    opposing_count: int
    support_ratio: float
    summary_text: str


class OutputExpertVoice(BaseModel):
    name: str
    credentials: str = ""
    affiliation: str = ""
    position: Literal["supports", "opposes", "neutral"]
    quality_tier: str


class OutputDebatePosition(BaseModel):
    label: str
    summary: str
    experts: List[OutputExpertVoice] = Field(default_factory=list)
    key_evidence: List[OutputCitation] = Field(default_factory=list)
    main_arguments: List[str] = Field(default_factory=list)
    strength_label: str


class OutputDebateSection(BaseModel):
    """Both positions of an active debate."""

    position_a: OutputDebatePosition
    position_b: OutputDebatePosition
    reasons_for_disagreement: List[str] = Field(default_factory=list)
    is_genuine_debate: bool = True


class OutputEmergingTrends(BaseModel):
    direction: str
    recent_studies: List[OutputCitation] = Field(default_factory=list)
    caveats: List[str] = Field(default_factory=list)
    summary_text: str


class OutputWarning(BaseModel):
    """A caveat shown to the reader."""

    type: WarningType = "caveat"
    text: str
    severity: WarningSeverity = "info"


class OutputSourcesList(BaseModel):
    top_sources: List[OutputCitation] = Field(default_factory=list)
    total_sources_examined: int = 0
    sources_note: Optional[str] = None


class OutputValuesContent(BaseModel):
    """Explains what research can and cannot settle for a values question."""

    what_research_can_inform: List[str] = Field(default_factory=list)
    values_involved: List[str] = Field(default_factory=list)
    related_empirical_questions: List[str] = Field(default_factory=list)


class RenderedClaimOutput(BaseModel):
    """Complete structural rendering of one claim's assessment."""

    claim_id: Optional[str] = None
    claim_text: str
    claim_type: ClaimType
    domain: Domain

    header: OutputHeader
    framing_sentence: str
    detailed_explanation: str

    evidence_summary: OutputEvidenceSummary
    top_citations: List[OutputCitation] = Field(default_factory=list)

    # Conditional sections, keyed by consensus level
    debate_section: Optional[OutputDebateSection] = None
    emerging_trends: Optional[OutputEmergingTrends] = None
    values_content: Optional[OutputValuesContent] = None

    expert_voices: List[OutputExpertVoice] = Field(default_factory=list)
    warnings: List[OutputWarning] = Field(default_factory=list)
    sources: OutputSourcesList = Field(default_factory=OutputSourcesList)

    consensus_level: ConsensusLevel
    confidence_level: ConfidenceLevel
    assessed_at: datetime


class HonestyCheckResult(BaseModel):
    """Report of the honesty invariants on a rendered output."""

    is_honest: bool = True
    violations: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
