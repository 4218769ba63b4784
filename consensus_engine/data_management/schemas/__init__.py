"""Schema package for claims, evidence, experts, consensus and rendered output.

This package provides Pydantic models for every value that crosses a
component boundary in the engine:
- Claims arrive classified (type and domain decided upstream)
- Evidence items are immutable once tiered
- Consensus assessments are a tagged union on level
- Rendered outputs carry the sections the honesty check inspects

Primary exports:
- ClassifiedClaim: A claim ready for adjudication
- EvidenceItem: A tiered, directed piece of evidence
- ExpertValidationResult: Verdict on a quoted person
- ConsensusAssessment: Verdict on the state of expert agreement
- RenderedClaimOutput / HonestyCheckResult: Rendering and its audit

Usage:
    from consensus_engine.data_management.schemas import ClassifiedClaim, ClaimType
    claim = ClassifiedClaim(text="Vaccines cause autism", type=ClaimType.CAUSAL)
"""

# Claim schemas
from consensus_engine.data_management.schemas.claim_schema import (
    ClaimSource,
    ClaimType,
    ClassifiedClaim,
    Domain,
    SourceRole,
)

# Expert schemas
from consensus_engine.data_management.schemas.expert_schema import (
    BatchValidationResult,
    DisqualificationReason,
    ExcludedPerson,
    ExpertDisqualifiers,
    ExpertQualityIndicators,
    ExpertQualityTier,
    ExpertValidationResult,
    PersonMention,
    ValidatedExpert,
)

# Evidence schemas
from consensus_engine.data_management.schemas.evidence_schema import (
    Citation,
    EvidenceCategory,
    EvidenceClassification,
    EvidenceDescriptor,
    EvidenceDirection,
    EvidenceItem,
    RawEvidence,
    SourceType,
)

# Consensus schemas
from consensus_engine.data_management.schemas.consensus_schema import (
    ActiveDebateAssessment,
    ConfidenceLevel,
    ConsensusAssessment,
    ConsensusAssessmentInput,
    ConsensusLevel,
    ConsensusThresholds,
    DebatePosition,
    DebatePositions,
    EmergingResearchAssessment,
    EmergingTrends,
    EvidenceBasis,
    EvidenceSummary,
    SettledAssessment,
    SimplifiedConsensusResult,
)

# Output schemas
from consensus_engine.data_management.schemas.output_schema import (
    ConfidenceBadge,
    HonestyCheckResult,
    OutputCitation,
    OutputDebatePosition,
    OutputDebateSection,
    OutputEmergingTrends,
    OutputEvidenceSummary,
    OutputExpertVoice,
    OutputHeader,
    OutputSourcesList,
    OutputValuesContent,
    OutputWarning,
    RenderedClaimOutput,
)

# Pipeline schemas
from consensus_engine.data_management.schemas.pipeline_schema import (
    ClaimError,
    EvaluatedClaim,
    PipelineMetadata,
    PipelineOptions,
    PipelineResult,
    PipelineSummary,
)

__all__ = [
    # Claim
    "ClaimSource",
    "ClaimType",
    "ClassifiedClaim",
    "Domain",
    "SourceRole",
    # Expert
    "BatchValidationResult",
    "DisqualificationReason",
    "ExcludedPerson",
    "ExpertDisqualifiers",
    "ExpertQualityIndicators",
    "ExpertQualityTier",
    "ExpertValidationResult",
    "PersonMention",
    "ValidatedExpert",
    # Evidence
    "Citation",
    "EvidenceCategory",
    "EvidenceClassification",
    "EvidenceDescriptor",
    "EvidenceDirection",
    "EvidenceItem",
    "RawEvidence",
    "SourceType",
    # Consensus
    "ActiveDebateAssessment",
    "ConfidenceLevel",
    "ConsensusAssessment",
    "ConsensusAssessmentInput",
    "ConsensusLevel",
    "ConsensusThresholds",
    "DebatePosition",
    "DebatePositions",
    "EmergingResearchAssessment",
    "EmergingTrends",
    "EvidenceBasis",
    "EvidenceSummary",
    "SettledAssessment",
    "SimplifiedConsensusResult",
    # Output
    "ConfidenceBadge",
    "HonestyCheckResult",
    "OutputCitation",
    "OutputDebatePosition",
    "OutputDebateSection",
    "OutputEmergingTrends",
    "OutputEvidenceSummary",
    "OutputExpertVoice",
    "OutputHeader",
    "OutputSourcesList",
    "OutputValuesContent",
    "OutputWarning",
    "RenderedClaimOutput",
    # Pipeline
    "ClaimError",
    "EvaluatedClaim",
    "PipelineMetadata",
    "PipelineOptions",
    "PipelineResult",
    "PipelineSummary",
]
