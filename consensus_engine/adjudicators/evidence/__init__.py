"""Evidence tier classification."""

from consensus_engine.adjudicators.evidence.tier_classifier import (
    EvidenceTierClassifier,
    classify_evidence_tier,
    get_tier_description,
    get_tier_weighting,
    is_high_quality_evidence,
)

__all__ = [
    "EvidenceTierClassifier",
    "classify_evidence_tier",
    "get_tier_description",
    "get_tier_weighting",
    "is_high_quality_evidence",
]
