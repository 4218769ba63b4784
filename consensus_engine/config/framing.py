"""Framing text for consensus assessments and rendered output.

Everything user-facing that depends only on the consensus level lives here
as lookup tables: header text, confidence badge, framing sentences, level
caveats, display names and the fixed warnings the renderer prepends.
Keys are ConsensusLevel values.
"""

from typing import Dict, List, Tuple, TypedDict


class FramingTemplate(TypedDict):
    """Presentation template for one consensus level."""

    header_symbol: str
    header_text: str
    confidence_badge: str
    body_template: str
    caveats_template: str | None


FRAMING_TEMPLATES: Dict[str, FramingTemplate] = {
    "strong_consensus": {
        "header_symbol": "✓",
        "header_text": "Research Clearly Shows",
        "confidence_badge": "HIGH CONFIDENCE",
        "body_template": "The scientific evidence strongly {direction} this claim. {summary}",
        "caveats_template": None,
    },
    "moderate_consensus": {
        "header_symbol": "◐",
        "header_text": "Most Research Suggests",
        "confidence_badge": "MODERATE CONFIDENCE",
        "body_template": "The majority of research {direction} this claim, though some debate exists. {summary}",
        "caveats_template": "Note: {caveats}",
    },
    "active_debate": {
        "header_symbol": "⟷",
        "header_text": "Experts Disagree",
        "confidence_badge": "CONTESTED",
        "body_template": "This is an area of legitimate scientific debate. Qualified experts hold different views. {summary}",
        "caveats_template": "Important: This is a genuinely contested scientific question.",
    },
    "emerging_research": {
        "header_symbol": "◔",
        "header_text": "Early Research Suggests",
        "confidence_badge": "PRELIMINARY",
        "body_template": "This is an emerging area of research. Early findings suggest {direction}, but the evidence is still developing. {summary}",
        "caveats_template": "Caution: This research is preliminary and conclusions may change.",
    },
    "insufficient_research": {
        "header_symbol": "?",
        "header_text": "Insufficient Research",
        "confidence_badge": "UNKNOWN",
        "body_template": "There is not enough peer-reviewed research to evaluate this claim. {summary}",
        "caveats_template": "Note: Absence of research does not mean the claim is false or true.",
    },
    "methodologically_blocked": {
        "header_symbol": "⊘",
        "header_text": "Cannot Be Directly Studied",
        "confidence_badge": "METHODOLOGICALLY LIMITED",
        "body_template": "This claim cannot be directly tested through randomized experiments due to ethical or practical constraints. {summary}",
        "caveats_template": "Note: Some important questions cannot be answered through controlled experiments.",
    },
    "values_question": {
        "header_symbol": "⚖",
        "header_text": "Values Question",
        "confidence_badge": "NOT EMPIRICAL",
        "body_template": "This is a values question that cannot be resolved through scientific research alone. {summary}",
        "caveats_template": "Note: Science can inform values debates but cannot resolve them.",
    },
}

# Framing sentences; strong/moderate are split by direction of the ratio
STRONG_SUPPORT_SENTENCE = "Research clearly shows that this claim is well-supported by scientific evidence."
STRONG_OPPOSE_SENTENCE = "Research clearly shows that this claim is not supported by scientific evidence."
MODERATE_SUPPORT_SENTENCE = "Most research supports this claim, though some debate exists on details."
MODERATE_OPPOSE_SENTENCE = "Most research does not support this claim, though some studies disagree."
ACTIVE_DEBATE_SENTENCE = (
    "Experts genuinely disagree on this question. Qualified researchers hold "
    "different views based on interpretation of evidence."
)
EMERGING_SENTENCE = "Early research {direction} this claim, but findings may change as more studies are conducted."
INSUFFICIENT_SENTENCE = (
    "Insufficient peer-reviewed research exists to evaluate this claim "
    "(only {count} quality studies found)."
)
BLOCKED_SENTENCE = (
    "This claim cannot be directly tested through controlled experiments "
    "due to ethical or practical constraints."
)
VALUES_SENTENCE = "This is a values question that cannot be resolved through scientific research alone."

# Level caveats; "{count}" is filled with the quality study count
LEVEL_CAVEATS: Dict[str, List[str]] = {
    "emerging_research": [
        "Research is still early-stage and conclusions may change",
        "Limited number of studies available for comprehensive analysis",
    ],
    "insufficient_research": [
        "Only {count} high-quality studies found",
        "Absence of evidence is not evidence of absence",
    ],
    "active_debate": [
        "This represents genuine scientific disagreement, not a lack of knowledge",
        "Different conclusions may stem from different methodologies or assumptions",
    ],
    "values_question": [
        "This is fundamentally a values question, not an empirical one",
        "Empirical research can inform but not determine value judgments",
        "Related empirical questions may be separately verifiable",
    ],
}

DEBATE_POSITION_SUMMARIES = {
    "supports": "Position supporting the claim",
    "opposes": "Position opposing the claim",
}

REASONS_FOR_DISAGREEMENT: List[str] = [
    "Different interpretations of the same data",
    "Methodological differences in study design",
    "Different outcome measures or definitions",
]

EMERGING_TREND_CAVEATS: List[str] = [
    "Research is ongoing and consensus may shift",
    "Early findings require replication",
]

LEVEL_DISPLAY_NAMES: Dict[str, str] = {
    "strong_consensus": "Strong Scientific Consensus",
    "moderate_consensus": "Moderate Consensus",
    "active_debate": "Active Scientific Debate",
    "emerging_research": "Emerging Research",
    "insufficient_research": "Insufficient Research",
    "methodologically_blocked": "Methodologically Limited",
    "values_question": "Values Question",
}

LEVEL_DESCRIPTIONS: Dict[str, str] = {
    "strong_consensus": "Over 90% of high-quality research agrees on this question.",
    "moderate_consensus": "Most research (70-90%) agrees, with some ongoing debate.",
    "active_debate": "Qualified experts genuinely disagree based on available evidence.",
    "emerging_research": "Research is new and consensus is still forming.",
    "insufficient_research": "Not enough quality studies exist to draw conclusions.",
    "methodologically_blocked": "This question cannot be ethically or practically studied directly.",
    "values_question": "This is a values question that science cannot resolve.",
}

# Fixed warnings the renderer prepends before caveat-derived warnings
LEVEL_WARNINGS: Dict[str, str] = {
    "active_debate": "This is a genuinely contested scientific question where qualified experts disagree.",
    "values_question": (
        "This is a values question that science cannot resolve. Empirical "
        "evidence can inform but not determine the answer."
    ),
    "insufficient_research": (
        "Insufficient peer-reviewed research exists to evaluate this claim. "
        "Absence of evidence is not evidence of absence."
    ),
}

WARNING_SEVERITY: Dict[str, str] = {
    "strong_consensus": "info",
    "moderate_consensus": "info",
    "values_question": "info",
    "active_debate": "warning",
    "emerging_research": "warning",
    "methodologically_blocked": "warning",
    "insufficient_research": "critical",
}

# Badges that replace the confidence badge for uncertain or non-empirical levels;
# values are (text, confidence, color)
LEVEL_BADGES: Dict[str, Tuple[str, str, str]] = {
    "values_question": ("NOT EMPIRICAL", "high", "purple"),
    "active_debate": ("CONTESTED", "medium", "yellow"),
    "emerging_research": ("PRELIMINARY", "low", "orange"),
    "insufficient_research": ("UNKNOWN", "low", "gray"),
    "methodologically_blocked": ("METHODOLOGICALLY LIMITED", "medium", "gray"),
}

CONFIDENCE_BADGE_TEXT: Dict[str, str] = {
    "high": "HIGH CONFIDENCE",
    "medium": "MODERATE CONFIDENCE",
    "low": "LOW CONFIDENCE",
}

LEVEL_COLORS: Dict[str, str] = {
    "strong_consensus": "green",
    "moderate_consensus": "blue",
    "active_debate": "yellow",
    "emerging_research": "orange",
    "insufficient_research": "gray",
    "methodologically_blocked": "gray",
    "values_question": "purple",
}

STRENGTH_LABELS: Dict[str, str] = {
    "strong": "Strong Evidence",
    "moderate": "Moderate Evidence",
    "weak": "Limited Evidence",
}

DIRECTION_DISPLAY_TEXT: Dict[str, str] = {
    "supports": "supports the claim",
    "opposes": "does not support the claim",
    "neutral": "is inconclusive",
    "mixed": "shows mixed results",
}

TIER_LABELS: Dict[int, str] = {
    1: "Systematic Review/Meta-Analysis",
    2: "Peer-Reviewed Study",
    3: "Working Paper/Preprint",
    4: "Expert Opinion",
    5: "Not Evidence",
}

# Values-question content section
VALUES_WHAT_RESEARCH_CAN_INFORM: List[str] = [
    "Empirical consequences of different policy approaches",
    "Factual claims embedded within the broader question",
    "Historical outcomes of similar decisions",
]
VALUES_INVOLVED: List[str] = [
    "Different conceptions of fairness and justice",
    "Competing priorities and tradeoffs",
    "Fundamental disagreements about goals",
]
VALUES_RELATED_EMPIRICAL_QUESTIONS: List[str] = [
    "Specific factual claims can be evaluated separately",
    "Data on outcomes can inform but not determine the value judgment",
]

# Overclaiming vocabulary forbidden outside strong consensus
OVERCLAIMING_TERMS: List[str] = [
    "proves",
    "proven",
    "definitely",
    "certainly",
    "absolutely",
    "undoubtedly",
    "without doubt",
    "conclusively",
    "irrefutably",
]
