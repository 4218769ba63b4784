"""Claim adjudication pipeline: input normalization, evidence sources, orchestration."""

from consensus_engine.pipeline.adjudication_pipeline import (
    AdjudicationPipeline,
    evaluate_claims,
)
from consensus_engine.pipeline.evidence_source import EvidenceSource, StaticEvidenceSource
from consensus_engine.pipeline.input_normalizer import normalize_claim, normalize_claims

__all__ = [
    "AdjudicationPipeline",
    "EvidenceSource",
    "StaticEvidenceSource",
    "evaluate_claims",
    "normalize_claim",
    "normalize_claims",
]
