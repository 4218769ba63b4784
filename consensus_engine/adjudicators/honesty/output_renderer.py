"""Structural rendering of consensus assessments.

Turns a ConsensusAssessment into a RenderedClaimOutput: header and badge,
evidence summary, top citations, the level-specific section (debate,
emerging trends or values content) and reader warnings built from the
caveats. The rendered output is what the honesty enforcer inspects.

Markdown is the only text format produced here; anything richer belongs
to the presentation layer.
"""

from typing import List, Optional, Tuple

from loguru import logger

from consensus_engine.config.framing import (
    CONFIDENCE_BADGE_TEXT,
    DIRECTION_DISPLAY_TEXT,
    FRAMING_TEMPLATES,
    LEVEL_BADGES,
    LEVEL_COLORS,
    LEVEL_WARNINGS,
    STRENGTH_LABELS,
    TIER_LABELS,
    VALUES_INVOLVED,
    VALUES_RELATED_EMPIRICAL_QUESTIONS,
    VALUES_WHAT_RESEARCH_CAN_INFORM,
    WARNING_SEVERITY,
)
from consensus_engine.data_management.schemas import (
    ActiveDebateAssessment,
    Citation,
    ConfidenceBadge,
    ConfidenceLevel,
    ConsensusAssessment,
    ConsensusLevel,
    DebatePosition,
    EmergingResearchAssessment,
    EvidenceDirection,
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

DEFAULT_MAX_CITATIONS = 5
DEFAULT_MAX_CAVEATS = 5

# Keyword -> warning type, first match wins
_WARNING_TYPE_KEYWORDS: List[Tuple[Tuple[str, ...], str]] = [
    (("values", "empirical"), "values_note"),
    (("replication", "methodology"), "methodological"),
    (("domain", "field"), "domain_specific"),
    (("limited", "insufficient"), "limitation"),
]

_LEVEL_WARNING_TYPES = {
    "active_debate": ("caveat", "warning"),
    "values_question": ("values_note", "info"),
    "insufficient_research": ("limitation", "critical"),
}

_SEVERITY_MARKERS = {"critical": "[!]", "warning": "[*]", "info": "[i]"}


def format_authors(authors: List[str]) -> str:
    """'A', 'A and B', or 'A et al.'."""
    if not authors:
        return "Unknown authors"
    if len(authors) == 1:
        return authors[0]
    if len(authors) == 2:
        return " and ".join(authors)
    return f"{authors[0]} et al."


def get_tier_label(tier: int) -> str:
    return TIER_LABELS.get(tier, "Unknown")


def convert_citation(citation: Citation, tier: int = 2) -> OutputCitation:
    return OutputCitation(
        title=citation.title,
        authors=format_authors(citation.authors),
        publication=citation.publication,
        year=citation.year,
        url=citation.url,
        doi=citation.doi,
        finding=citation.finding,
        tier_label=get_tier_label(tier),
        tier_level=tier,
    )


def classify_warning_type(caveat: str) -> str:
    lowered = caveat.lower()
    for keywords, warning_type in _WARNING_TYPE_KEYWORDS:
        if any(k in lowered for k in keywords):
            return warning_type
    return "caveat"


def generate_confidence_badge(
    level: ConsensusLevel, confidence: ConfidenceLevel
) -> ConfidenceBadge:
    """Level-specific badge where one exists, else a confidence badge in the level's color."""
    level_key = ConsensusLevel(level).value
    if level_key in LEVEL_BADGES:
        text, badge_level, color = LEVEL_BADGES[level_key]
        return ConfidenceBadge(text=text, level=badge_level, color_class=color)

    confidence = ConfidenceLevel(confidence)
    return ConfidenceBadge(
        text=CONFIDENCE_BADGE_TEXT[confidence.value],
        level=confidence,
        color_class=LEVEL_COLORS[level_key],
    )


class OutputRenderer:
    """
    Renders assessments into display-ready structures.

    Stateless; one instance can render any number of assessments.

    Attributes:
        max_citations: Cap on top citations and the sources list
        max_caveats: Cap on reader warnings
    """

    def __init__(
        self,
        max_citations: int = DEFAULT_MAX_CITATIONS,
        max_caveats: int = DEFAULT_MAX_CAVEATS,
    ):
        self.max_citations = max_citations
        self.max_caveats = max_caveats
        self.logger = logger.bind(component="OutputRenderer")

    def render(
        self,
        assessment: ConsensusAssessment,
        claim_text: str,
        claim_id: Optional[str] = None,
    ) -> RenderedClaimOutput:
        """
        Render one assessment.

        Args:
            assessment: Consensus assessment to render
            claim_text: Text of the claim shown in the header
            claim_id: Optional claim ID carried through to the output

        Returns:
            RenderedClaimOutput with the sections the level requires
        """
        sources = self.build_sources_list(assessment)
        warnings = self.build_warnings(assessment)

        rendered = RenderedClaimOutput(
            claim_id=claim_id,
            claim_text=claim_text,
            claim_type=assessment.claim_type,
            domain=assessment.domain,
            header=self.build_header(assessment, claim_text),
            framing_sentence=assessment.framing_sentence,
            detailed_explanation=assessment.detailed_explanation,
            evidence_summary=self.build_evidence_summary(assessment),
            top_citations=sources.top_sources[: self.max_citations],
            debate_section=self.build_debate_section(assessment),
            emerging_trends=self.build_emerging_trends(assessment),
            values_content=self.build_values_content(assessment),
            warnings=warnings[: self.max_caveats],
            sources=sources,
            consensus_level=assessment.level,
            confidence_level=assessment.confidence,
            assessed_at=assessment.assessed_at,
        )

        self.logger.debug(
            f"Rendered {assessment.level.value} output",
            claim_id=claim_id,
            warnings=len(rendered.warnings),
        )
        return rendered

    # ── Sections ──────────────────────────────────────────────────────

    def build_header(self, assessment: ConsensusAssessment, claim_text: str) -> OutputHeader:
        template = FRAMING_TEMPLATES[assessment.level.value]
        return OutputHeader(
            symbol=template["header_symbol"],
            headline=template["header_text"],
            confidence_badge=generate_confidence_badge(assessment.level, assessment.confidence),
            claim_text=claim_text,
        )

    def build_evidence_summary(self, assessment: ConsensusAssessment) -> OutputEvidenceSummary:
        basis = assessment.basis
        summary = assessment.evidence_summary
        quality = basis.total_quality_studies
        direction = "supporting" if summary.support_ratio >= 0.5 else "opposing"
        level = assessment.level

        if level == ConsensusLevel.VALUES_QUESTION:
            text = "This is a values question - empirical evidence cannot resolve it."
        elif level == ConsensusLevel.INSUFFICIENT_RESEARCH:
            text = f"Only {quality} high-quality studies found. More research is needed."
        elif level == ConsensusLevel.STRONG_CONSENSUS:
            text = f"{quality} high-quality studies examined, with overwhelming evidence {direction} this claim."
        elif level == ConsensusLevel.MODERATE_CONSENSUS:
            text = f"{quality} high-quality studies examined, with most evidence {direction} this claim."
        elif level == ConsensusLevel.ACTIVE_DEBATE:
            text = f"{quality} high-quality studies examined, with evidence on both sides of this debate."
        elif level == ConsensusLevel.EMERGING_RESEARCH:
            text = f"{quality} studies found, mostly recent. This is an emerging area of research."
        else:
            text = f"{quality} high-quality studies examined."

        return OutputEvidenceSummary(
            total_studies=basis.total_studies_examined,
            quality_studies=quality,
            meta_analysis_count=len(basis.meta_analyses),
            systematic_review_count=len(basis.systematic_reviews),
            supporting_count=summary.supporting,
            opposing_count=summary.opposing,
            support_ratio=summary.support_ratio,
            summary_text=text,
        )

    def build_debate_section(self, assessment: ConsensusAssessment) -> Optional[OutputDebateSection]:
        if not isinstance(assessment, ActiveDebateAssessment):
            return None
        positions = assessment.positions
        return OutputDebateSection(
            position_a=self._convert_position(positions.position_a, "Position A: Supporting", "supports"),
            position_b=self._convert_position(positions.position_b, "Position B: Opposing", "opposes"),
            reasons_for_disagreement=list(positions.reasons_for_disagreement),
            is_genuine_debate=True,
        )

    def build_emerging_trends(self, assessment: ConsensusAssessment) -> Optional[OutputEmergingTrends]:
        if not isinstance(assessment, EmergingResearchAssessment):
            return None
        trends = assessment.emerging_trends
        direction = get_direction_display_text(trends.direction)
        return OutputEmergingTrends(
            direction=direction,
            recent_studies=[convert_citation(c) for c in trends.recent_studies],
            caveats=list(trends.caveats),
            summary_text=f"Early research {direction}, but findings are preliminary.",
        )

    def build_values_content(self, assessment: ConsensusAssessment) -> Optional[OutputValuesContent]:
        if assessment.level != ConsensusLevel.VALUES_QUESTION:
            return None
        return OutputValuesContent(
            what_research_can_inform=list(VALUES_WHAT_RESEARCH_CAN_INFORM),
            values_involved=list(VALUES_INVOLVED),
            related_empirical_questions=list(VALUES_RELATED_EMPIRICAL_QUESTIONS),
        )

    def build_warnings(self, assessment: ConsensusAssessment) -> List[OutputWarning]:
        """Level warning first (if any), then one warning per caveat."""
        level_key = assessment.level.value
        severity = WARNING_SEVERITY[level_key]
        warnings = [
            OutputWarning(type=classify_warning_type(c), text=c, severity=severity)
            for c in assessment.caveats
        ]

        if level_key in LEVEL_WARNINGS:
            warning_type, level_severity = _LEVEL_WARNING_TYPES[level_key]
            warnings.insert(
                0,
                OutputWarning(type=warning_type, text=LEVEL_WARNINGS[level_key], severity=level_severity),
            )
        return warnings

    def build_sources_list(self, assessment: ConsensusAssessment) -> OutputSourcesList:
        """Highest-quality sources first: meta-analyses, reviews, reports, then studies."""
        basis = assessment.basis
        ranked = (
            [(c, 1) for c in basis.meta_analyses]
            + [(c, 1) for c in basis.systematic_reviews]
            + [(c, 1) for c in basis.major_reports]
            + [(c, 2) for c in basis.peer_reviewed_studies]
        )
        top_sources = [convert_citation(c, tier) for c, tier in ranked[: self.max_citations]]

        note = None
        if basis.total_studies_examined > self.max_citations:
            note = f"Showing {len(top_sources)} of {basis.total_studies_examined} sources examined."

        return OutputSourcesList(
            top_sources=top_sources,
            total_sources_examined=basis.total_studies_examined,
            sources_note=note,
        )

    @staticmethod
    def _convert_position(position: DebatePosition, label: str, stance: str) -> OutputDebatePosition:
        return OutputDebatePosition(
            label=label,
            summary=position.summary,
            experts=[
                OutputExpertVoice(
                    name=e.name,
                    credentials=e.credentials,
                    affiliation=e.affiliation,
                    position=stance,
                    quality_tier=e.quality_tier.value,
                )
                for e in position.supporting_experts
            ],
            key_evidence=[convert_citation(c) for c in position.key_evidence],
            main_arguments=list(position.main_arguments),
            strength_label=STRENGTH_LABELS.get(position.strength_of_evidence, "Evidence"),
        )

    # ── Markdown ──────────────────────────────────────────────────────

    def to_markdown(self, rendered: RenderedClaimOutput) -> str:
        """Plain Markdown presentation of a rendered output."""
        header = rendered.header
        lines = [
            f"## {header.symbol} {header.headline}",
            f"**[{header.confidence_badge.text}]**",
            "",
            f"> {rendered.claim_text}",
            "",
            rendered.framing_sentence,
            "",
        ]
        if rendered.detailed_explanation:
            lines.extend([rendered.detailed_explanation, ""])

        summary = rendered.evidence_summary
        lines.append("### Evidence Summary")
        lines.append(summary.summary_text)
        if summary.meta_analysis_count:
            lines.append(f"- {summary.meta_analysis_count} meta-analyses found")
        if summary.systematic_review_count:
            lines.append(f"- {summary.systematic_review_count} systematic reviews found")
        lines.append("")

        if rendered.debate_section:
            debate = rendered.debate_section
            lines.extend(["### Scientific Debate", ""])
            for position in (debate.position_a, debate.position_b):
                lines.append(f"**{position.label}**")
                lines.append(position.summary)
                lines.extend(f"- {arg}" for arg in position.main_arguments[:3])
                lines.append("")
            lines.append("**Why Experts Disagree:**")
            lines.extend(f"- {reason}" for reason in debate.reasons_for_disagreement)
            lines.append("")

        if rendered.emerging_trends:
            trends = rendered.emerging_trends
            lines.extend(["### Emerging Research", trends.summary_text, ""])
            lines.extend(f"- {caveat}" for caveat in trends.caveats)
            lines.append("")

        if rendered.values_content:
            values = rendered.values_content
            lines.extend(["### This is a Values Question", "", "**What research CAN inform:**"])
            lines.extend(f"- {item}" for item in values.what_research_can_inform)
            lines.extend(["", "**Values involved:**"])
            lines.extend(f"- {item}" for item in values.values_involved)
            lines.append("")

        if rendered.warnings:
            lines.append("### Important Notes")
            for warning in rendered.warnings:
                lines.append(f"{_SEVERITY_MARKERS[warning.severity]} {warning.text}")
            lines.append("")

        if rendered.top_citations:
            lines.append("### Key Sources")
            for citation in rendered.top_citations:
                lines.append(f"- **{citation.title}** ({citation.year})")
                lines.append(f"  {citation.authors}, *{citation.publication}*")
                if citation.finding:
                    lines.append(f"  Finding: {citation.finding}")
                lines.append(f"  [{citation.tier_label}]")
            if rendered.sources.sources_note:
                lines.extend(["", f"*{rendered.sources.sources_note}*"])

        return "\n".join(lines)


def get_direction_display_text(direction: EvidenceDirection) -> str:
    return DIRECTION_DISPLAY_TEXT.get(EvidenceDirection(direction).value, "is uncertain")


_default_renderer: Optional[OutputRenderer] = None


def _get_default_renderer() -> OutputRenderer:
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = OutputRenderer()
    return _default_renderer


def render_claim_output(
    assessment: ConsensusAssessment,
    claim_text: str,
    claim_id: Optional[str] = None,
) -> RenderedClaimOutput:
    return _get_default_renderer().render(assessment, claim_text, claim_id)


def generate_markdown_output(rendered: RenderedClaimOutput) -> str:
    return _get_default_renderer().to_markdown(rendered)
