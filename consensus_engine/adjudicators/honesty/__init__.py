"""Honest rendering of consensus assessments and the invariants it must hold."""

from consensus_engine.adjudicators.honesty.honesty_enforcer import (
    allows_certainty_language,
    contains_overclaiming_language,
    perform_honesty_check,
    requires_uncertainty_language,
)
from consensus_engine.adjudicators.honesty.output_renderer import (
    OutputRenderer,
    convert_citation,
    format_authors,
    generate_confidence_badge,
    generate_markdown_output,
    render_claim_output,
)

__all__ = [
    "OutputRenderer",
    "allows_certainty_language",
    "contains_overclaiming_language",
    "convert_citation",
    "format_authors",
    "generate_confidence_badge",
    "generate_markdown_output",
    "perform_honesty_check",
    "render_claim_output",
    "requires_uncertainty_language",
]
