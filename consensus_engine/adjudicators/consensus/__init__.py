"""Consensus level determination and framing."""

from consensus_engine.adjudicators.consensus.consensus_detector import (
    ConsensusDetector,
    assess_consensus,
    build_evidence_basis,
    calculate_support_ratio,
    calculate_weighted_support_ratio,
    count_evidence_by_direction,
    determine_confidence,
    determine_consensus_level,
    generate_caveats,
    generate_framing_sentence,
    get_consensus_level_description,
    get_consensus_level_display_name,
    get_direction_word,
    get_high_quality_evidence,
    get_simplified_result,
    is_emerging_research,
    is_potentially_methodologically_blocked,
    is_values_question,
)

__all__ = [
    "ConsensusDetector",
    "assess_consensus",
    "build_evidence_basis",
    "calculate_support_ratio",
    "calculate_weighted_support_ratio",
    "count_evidence_by_direction",
    "determine_confidence",
    "determine_consensus_level",
    "generate_caveats",
    "generate_framing_sentence",
    "get_consensus_level_description",
    "get_consensus_level_display_name",
    "get_direction_word",
    "get_high_quality_evidence",
    "get_simplified_result",
    "is_emerging_research",
    "is_potentially_methodologically_blocked",
    "is_values_question",
]
