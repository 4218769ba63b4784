"""Evidence schemas: raw descriptors, tier classifications and directed evidence.

Tiers run from 1 (systematic reviews, meta-analyses) to 5 (not evidence).
Only tiers 1-2 count toward consensus; tier 3-4 are reported but never
decide a verdict.

EvidenceItem is created once per retrieved source and consumed read-only
by the consensus determiner, so it (and its Citation) are frozen.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from consensus_engine.data_management.schemas.expert_schema import PersonMention


class EvidenceCategory(str, Enum):
    """What kind of source a piece of evidence is."""

    SYSTEMATIC_REVIEW = "systematic_review"
    META_ANALYSIS = "meta_analysis"
    MAJOR_REPORT = "major_report"
    PEER_REVIEWED = "peer_reviewed"
    RCT = "rct"
    WORKING_PAPER = "working_paper"
    PREPRINT = "preprint"
    GOVERNMENT_STATS = "government_stats"
    EXPERT_OPINION = "expert_opinion"
    NOT_EVIDENCE = "not_evidence"


class SourceType(str, Enum):
    """Declared source type supplied alongside raw evidence.

    Superset of EvidenceCategory: adds the declared non-evidence types and
    expert testimony.
    """

    SYSTEMATIC_REVIEW = "systematic_review"
    META_ANALYSIS = "meta_analysis"
    MAJOR_REPORT = "major_report"
    PEER_REVIEWED = "peer_reviewed"
    RCT = "rct"
    WORKING_PAPER = "working_paper"
    PREPRINT = "preprint"
    GOVERNMENT_STATS = "government_stats"
    EXPERT_OPINION = "expert_opinion"
    EXPERT_TESTIMONY = "expert_testimony"
    POLITICIAN_STATEMENT = "politician_statement"
    ADVOCACY = "advocacy"
    ARTICLE_SUBJECT = "article_subject"
    NOT_EVIDENCE = "not_evidence"


class EvidenceDirection(str, Enum):
    """Stance of a piece of evidence toward the claim (decided upstream)."""

    SUPPORTS = "supports"
    OPPOSES = "opposes"
    NEUTRAL = "neutral"
    MIXED = "mixed"


class EvidenceDescriptor(BaseModel):
    """Raw input to the tier classifier."""

    url: str = Field("", description="Source URL")
    title: str = Field("", description="Source title")
    source_type: Optional[SourceType] = Field(
        None, description="Declared source type, if known"
    )
    is_verified_expert: bool = Field(
        False, description="Source is the opinion of a validated expert"
    )
    is_article_subject: bool = Field(
        False, description="Source is the article's own subject"
    )


class EvidenceClassification(BaseModel):
    """Output of the tier classifier."""

    tier: int = Field(..., ge=1, le=5, description="Quality tier (1 = best)")
    category: EvidenceCategory
    tier_description: str
    weight: float = Field(..., ge=0.0, le=1.0, description="Consensus weight")


class Citation(BaseModel):
    """Bibliographic reference for one source."""

    title: str
    authors: List[str] = Field(default_factory=list)
    publication: str = ""
    year: int = Field(..., description="Publication year")
    url: str = ""
    doi: Optional[str] = None
    finding: Optional[str] = Field(None, description="Short statement of the finding")

    model_config = {"frozen": True}


class EvidenceItem(BaseModel):
    """A tiered, directed piece of evidence."""

    citation: Citation
    tier: int = Field(..., ge=1, le=5)
    category: EvidenceCategory
    direction: EvidenceDirection
    key_finding: str = ""

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "citation": {
                        "title": "Vaccines and autism: a meta-analysis",
                        "authors": ["Taylor LE", "Swerdfeger AL"],
                        "publication": "Vaccine",
                        "year": 2014,
                        "url": "https://www.cochranelibrary.com/example",
                    },
                    "tier": 1,
                    "category": "meta_analysis",
                    "direction": "opposes",
                    "key_finding": "No association between vaccination and autism",
                }
            ]
        },
    }


class RawEvidence(BaseModel):
    """Candidate evidence as returned by an evidence source."""

    url: str
    title: str = ""
    snippet: str = ""
    published_date: Optional[str] = None
    authors: List[str] = Field(default_factory=list)
    direction: EvidenceDirection = EvidenceDirection.NEUTRAL
    source_type: Optional[SourceType] = None
    person: Optional[PersonMention] = Field(
        None, description="Person whose statement this evidence is, if any"
    )
