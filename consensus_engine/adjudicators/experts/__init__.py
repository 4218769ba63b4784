"""Expert validation: disqualification, qualification and quality tiers."""

from consensus_engine.adjudicators.experts.expert_validator import (
    ExpertValidator,
    get_disqualification_explanation,
    get_expert_quality_tier,
    is_article_subject,
    should_exclude_from_expert_pool,
    validate_expert,
    validate_experts,
)
from consensus_engine.adjudicators.experts.publication_lookup import (
    AcademicTitleProxy,
    PublicationLookup,
    PublicationSignal,
    StaticPublicationLookup,
)

__all__ = [
    "ExpertValidator",
    "get_disqualification_explanation",
    "get_expert_quality_tier",
    "is_article_subject",
    "should_exclude_from_expert_pool",
    "validate_expert",
    "validate_experts",
    "AcademicTitleProxy",
    "PublicationLookup",
    "PublicationSignal",
    "StaticPublicationLookup",
]
