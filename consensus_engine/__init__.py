"""Claims adjudication engine.

Judges the state of expert consensus behind factual claims: classifies
evidence into quality tiers, screens people cited as experts, aggregates
directed evidence into a consensus level and renders it without hiding
debate or overstating certainty.

Logging is left to the host application. Call configure_logging() and
configure_structured_logging() to use the engine's JSON/console sinks.
"""

from consensus_engine.adjudicators.consensus import assess_consensus
from consensus_engine.adjudicators.evidence import classify_evidence_tier
from consensus_engine.adjudicators.experts import validate_expert, validate_experts
from consensus_engine.adjudicators.honesty import perform_honesty_check
from consensus_engine.config.logging import configure_logging
from consensus_engine.pipeline import evaluate_claims
from consensus_engine.utils.logging import configure_structured_logging

__version__ = "0.1.0"

__all__ = [
    "assess_consensus",
    "classify_evidence_tier",
    "configure_logging",
    "configure_structured_logging",
    "evaluate_claims",
    "perform_honesty_check",
    "validate_expert",
    "validate_experts",
]
