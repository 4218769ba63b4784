"""Honesty invariants on rendered output.

Four independent checks, each producing at most one violation:

1. Never hide debate: active_debate output must carry a debate section.
2. Never overstate certainty: outside strong_consensus the framing sentence
   and detailed explanation must not use overclaiming vocabulary.
3. Always caveat uncertainty: uncertain levels need at least one warning.
4. Identify values questions: values_question output must carry the
   values content section.

Non-fatal findings (caveats cut by the renderer's cap) are reported as
warnings and do not affect is_honest.

The check is a report. It never raises and never modifies its inputs.
"""

import re

from consensus_engine.config.framing import OVERCLAIMING_TERMS
from consensus_engine.config.logging import get_logger
from consensus_engine.data_management.schemas import (
    ConsensusAssessment,
    ConsensusLevel,
    HonestyCheckResult,
    RenderedClaimOutput,
)

log = get_logger("adjudicators.honesty")

# Whole words only: "improves" must not match "proves"
OVERCLAIMING_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(term) for term in OVERCLAIMING_TERMS) + r")\b",
    re.IGNORECASE,
)

UNCERTAIN_LEVELS = frozenset(
    {
        ConsensusLevel.ACTIVE_DEBATE,
        ConsensusLevel.EMERGING_RESEARCH,
        ConsensusLevel.INSUFFICIENT_RESEARCH,
        ConsensusLevel.METHODOLOGICALLY_BLOCKED,
    }
)

HIDDEN_DEBATE_VIOLATION = (
    "Output hides legitimate scientific debate (missing debate section for active_debate)"
)
OVERCLAIMING_FRAMING_VIOLATION = "Framing sentence overstates certainty for non-strong-consensus claim"
OVERCLAIMING_EXPLANATION_VIOLATION = (
    "Detailed explanation overstates certainty for non-strong-consensus claim"
)
MISSING_CAVEATS_VIOLATION = "Output missing required caveats for uncertain consensus level"
MISSING_VALUES_VIOLATION = "Values question not properly identified with values content section"
OMITTED_CAVEATS_WARNING = "{count} caveat(s) not shown in rendered output"


def contains_overclaiming_language(text: str) -> bool:
    return OVERCLAIMING_PATTERN.search(text or "") is not None


def allows_certainty_language(level: ConsensusLevel) -> bool:
    return level == ConsensusLevel.STRONG_CONSENSUS


def requires_uncertainty_language(level: ConsensusLevel) -> bool:
    return level in UNCERTAIN_LEVELS


def perform_honesty_check(
    assessment: ConsensusAssessment, rendered: RenderedClaimOutput
) -> HonestyCheckResult:
    """
    Check a rendered output against the honesty invariants.

    Args:
        assessment: Assessment the output was rendered from
        rendered: Structural output to inspect

    Returns:
        HonestyCheckResult; is_honest is True only with zero violations
    """
    level = assessment.level
    violations = []

    if level == ConsensusLevel.ACTIVE_DEBATE and rendered.debate_section is None:
        violations.append(HIDDEN_DEBATE_VIOLATION)

    if not allows_certainty_language(level):
        if contains_overclaiming_language(rendered.framing_sentence):
            violations.append(OVERCLAIMING_FRAMING_VIOLATION)
        if contains_overclaiming_language(rendered.detailed_explanation):
            violations.append(OVERCLAIMING_EXPLANATION_VIOLATION)

    if requires_uncertainty_language(level) and not rendered.warnings:
        violations.append(MISSING_CAVEATS_VIOLATION)

    if level == ConsensusLevel.VALUES_QUESTION and rendered.values_content is None:
        violations.append(MISSING_VALUES_VIOLATION)

    shown = {w.text for w in rendered.warnings}
    omitted = [c for c in assessment.caveats if c not in shown]
    warnings = [OMITTED_CAVEATS_WARNING.format(count=len(omitted))] if omitted else []

    if violations:
        log.warning(
            f"Honesty violations for {level.value}",
            claim_id=rendered.claim_id,
            violations=violations,
        )

    return HonestyCheckResult(is_honest=not violations, violations=violations, warnings=warnings)
