"""Orchestration schemas: options, per-claim results and run summary."""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from consensus_engine.config.settings import settings
from consensus_engine.data_management.schemas.claim_schema import ClassifiedClaim
from consensus_engine.data_management.schemas.consensus_schema import (
    ConfidenceLevel,
    ConsensusAssessment,
    ConsensusThresholds,
)
from consensus_engine.data_management.schemas.evidence_schema import EvidenceItem
from consensus_engine.data_management.schemas.expert_schema import ExpertValidationResult
from consensus_engine.data_management.schemas.output_schema import (
    HonestyCheckResult,
    RenderedClaimOutput,
)


class PipelineOptions(BaseModel):
    """Options for one evaluate_claims run."""

    max_claims: int = Field(5, ge=1, description="Claims evaluated; the rest are dropped")
    max_search_results: int = Field(10, ge=1, description="Evidence items per claim")
    max_concurrency: int = Field(3, ge=1, description="Claims per concurrent batch")
    parallel_evaluation: bool = Field(True, description="Run a batch concurrently")
    thresholds: ConsensusThresholds = Field(default_factory=ConsensusThresholds)

    @classmethod
    def from_settings(cls) -> "PipelineOptions":
        """Build options from environment-backed settings."""
        return cls(
            max_claims=settings.max_claims,
            max_search_results=settings.max_search_results,
            max_concurrency=settings.max_concurrency,
            parallel_evaluation=settings.parallel_evaluation,
            thresholds=ConsensusThresholds.from_settings(),
        )


class EvaluatedClaim(BaseModel):
    """Everything the engine produced for one claim."""

    claim: ClassifiedClaim
    evidence: List[EvidenceItem] = Field(default_factory=list)
    source_validation: Optional[ExpertValidationResult] = Field(
        None, description="Validation of the person the claim is attributed to"
    )
    assessment: ConsensusAssessment
    rendered: RenderedClaimOutput
    honesty_check: HonestyCheckResult


class ClaimError(BaseModel):
    """A per-claim failure; never fatal to the batch."""

    claim_id: str
    error: str


class PipelineSummary(BaseModel):
    """Aggregate counts over the evaluated claims."""

    total_claims: int = 0
    claims_evaluated: int = 0
    claims_by_type: Dict[str, int] = Field(default_factory=dict)
    claims_by_domain: Dict[str, int] = Field(default_factory=dict)
    consensus_level_distribution: Dict[str, int] = Field(default_factory=dict)
    average_confidence: ConfidenceLevel = ConfidenceLevel.LOW
    values_questions_count: int = 0
    has_active_debate: bool = False


class PipelineMetadata(BaseModel):
    """Timing, warnings and errors for one run."""

    run_id: str
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None
    processing_time_ms: float = 0.0
    warnings: List[str] = Field(default_factory=list)
    errors: List[ClaimError] = Field(default_factory=list)


class PipelineResult(BaseModel):
    """Result of evaluate_claims."""

    claims: List[EvaluatedClaim] = Field(default_factory=list)
    summary: PipelineSummary = Field(default_factory=PipelineSummary)
    metadata: PipelineMetadata

    @property
    def errors(self) -> List[ClaimError]:
        return self.metadata.errors
