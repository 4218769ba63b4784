"""Consensus assessment schemas.

ConsensusAssessment is a tagged union on ``level``. Each variant carries
exactly the fields its level needs:

- ActiveDebateAssessment: required debate ``positions``
- EmergingResearchAssessment: required ``emerging_trends``
- SettledAssessment: every other level, no positions and no trends

An assessment whose shape contradicts its level cannot be constructed.

Usage:
    from pydantic import TypeAdapter
    adapter = TypeAdapter(ConsensusAssessment)
    assessment = adapter.validate_python({"level": "active_debate", ...})
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field, model_validator

from consensus_engine.config.settings import settings
from consensus_engine.data_management.schemas.claim_schema import ClaimType, Domain
from consensus_engine.data_management.schemas.evidence_schema import (
    Citation,
    EvidenceDirection,
    EvidenceItem,
)
from consensus_engine.data_management.schemas.expert_schema import ValidatedExpert


class ConsensusLevel(str, Enum):
    """State of expert agreement on a claim."""

    STRONG_CONSENSUS = "strong_consensus"
    MODERATE_CONSENSUS = "moderate_consensus"
    ACTIVE_DEBATE = "active_debate"
    EMERGING_RESEARCH = "emerging_research"
    INSUFFICIENT_RESEARCH = "insufficient_research"
    METHODOLOGICALLY_BLOCKED = "methodologically_blocked"  # never emitted by the determiner
    VALUES_QUESTION = "values_question"


class ConfidenceLevel(str, Enum):
    """Confidence in the assessment itself, not in the claim."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ConsensusThresholds(BaseModel):
    """Tunable thresholds for the consensus decision tree.

    Ratios are inclusive lower bounds for the supporting side; the opposing
    side mirrors them (``1 - ratio``).
    """

    strong_consensus_ratio: float = Field(0.90, ge=0.5, le=1.0)
    moderate_consensus_ratio: float = Field(0.70, ge=0.5, le=1.0)
    minimum_quality_studies: int = Field(3, ge=1)
    emerging_research_years: int = Field(3, ge=0)
    emerging_max_total: int = Field(10, ge=1)
    emerging_recent_share: float = Field(0.70, ge=0.0, le=1.0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def moderate_below_strong(self) -> "ConsensusThresholds":
        if self.moderate_consensus_ratio > self.strong_consensus_ratio:
            raise ValueError("moderate_consensus_ratio must not exceed strong_consensus_ratio")
        return self

    @classmethod
    def from_settings(cls) -> "ConsensusThresholds":
        """Build thresholds from environment-backed settings."""
        return cls(
            strong_consensus_ratio=settings.strong_consensus_ratio,
            moderate_consensus_ratio=settings.moderate_consensus_ratio,
            minimum_quality_studies=settings.minimum_quality_studies,
            emerging_research_years=settings.emerging_research_years,
        )


class EvidenceBasis(BaseModel):
    """Citations grouped by evidence category."""

    systematic_reviews: List[Citation] = Field(default_factory=list)
    meta_analyses: List[Citation] = Field(default_factory=list)
    major_reports: List[Citation] = Field(default_factory=list)
    peer_reviewed_studies: List[Citation] = Field(
        default_factory=list, description="Peer-reviewed studies including RCTs"
    )
    total_quality_studies: int = Field(0, ge=0, description="Tier 1-2 items")
    total_studies_examined: int = Field(0, ge=0, description="All items")

    model_config = {"frozen": True}


class EvidenceSummary(BaseModel):
    """Direction counts over quality (tier 1-2) evidence."""

    supporting: int = 0
    opposing: int = 0
    neutral: int = 0
    support_ratio: float = Field(0.5, ge=0.0, le=1.0, description="Weighted support ratio")

    model_config = {"frozen": True}


class DebatePosition(BaseModel):
    """One side of an active debate."""

    summary: str
    supporting_experts: List[ValidatedExpert] = Field(default_factory=list)
    key_evidence: List[Citation] = Field(default_factory=list)
    strength_of_evidence: Literal["strong", "moderate", "weak"] = "weak"
    main_arguments: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class DebatePositions(BaseModel):
    """Both sides of an active debate and why they differ."""

    position_a: DebatePosition
    position_b: DebatePosition
    reasons_for_disagreement: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class EmergingTrends(BaseModel):
    """Direction of recent research for an emerging field."""

    direction: EvidenceDirection
    recent_studies: List[Citation] = Field(default_factory=list)
    caveats: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class _AssessmentBase(BaseModel):
    """Fields shared by every assessment variant."""

    confidence: ConfidenceLevel
    basis: EvidenceBasis
    evidence_summary: EvidenceSummary
    framing_sentence: str
    detailed_explanation: str
    caveats: List[str] = Field(default_factory=list)
    domain: Domain
    claim_type: ClaimType
    assessed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {"frozen": True}


class SettledAssessment(_AssessmentBase):
    """Assessment for levels that carry no debate or trend section."""

    level: Literal[
        ConsensusLevel.STRONG_CONSENSUS,
        ConsensusLevel.MODERATE_CONSENSUS,
        ConsensusLevel.INSUFFICIENT_RESEARCH,
        ConsensusLevel.METHODOLOGICALLY_BLOCKED,
        ConsensusLevel.VALUES_QUESTION,
    ]


class ActiveDebateAssessment(_AssessmentBase):
    """Assessment for a genuinely contested question."""

    level: Literal[ConsensusLevel.ACTIVE_DEBATE] = ConsensusLevel.ACTIVE_DEBATE
    positions: DebatePositions


class EmergingResearchAssessment(_AssessmentBase):
    """Assessment for a young, mostly recent body of research."""

    level: Literal[ConsensusLevel.EMERGING_RESEARCH] = ConsensusLevel.EMERGING_RESEARCH
    emerging_trends: EmergingTrends


ConsensusAssessment = Annotated[
    Union[SettledAssessment, ActiveDebateAssessment, EmergingResearchAssessment],
    Field(discriminator="level"),
]


class ConsensusAssessmentInput(BaseModel):
    """Input to assess_consensus."""

    claim_text: str
    claim_type: ClaimType
    domain: Domain = Domain.GENERAL
    evidence: List[EvidenceItem] = Field(default_factory=list)


class SimplifiedConsensusResult(BaseModel):
    """Compact view of an assessment for display."""

    level: ConsensusLevel
    confidence: ConfidenceLevel
    headline: str
    summary: str
    evidence_count: int
    top_sources: List[Citation] = Field(default_factory=list)
    caveats: List[str] = Field(default_factory=list)
