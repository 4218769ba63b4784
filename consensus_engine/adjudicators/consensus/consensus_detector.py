"""Consensus level determination.

Aggregates tiered, directional evidence into a discrete verdict on the
state of expert agreement. Boolean decision tree, short-circuit:

| Step | Condition                                             | Level                 |
|------|-------------------------------------------------------|-----------------------|
| 1    | claim type is values / aesthetic / unfalsifiable      | values_question       |
| 2    | fewer than N quality (tier 1-2) studies               | emerging_research if some quality evidence and the body is emerging, else insufficient_research |
| 3    | weighted support ratio >= strong or <= 1 - strong     | strong_consensus      |
| 3    | weighted support ratio >= moderate or <= 1 - moderate | moderate_consensus    |
| 4    | body of evidence is emerging                          | emerging_research     |
| 5    | otherwise                                             | active_debate         |

Only tier 1-2 evidence decides the ratio. Neutral and mixed items count
toward study totals but not toward the ratio. All boundaries are
inclusive.

"Emerging" means fewer than 10 items of which at least 70% fall within
the recency window. The current year is injectable so results are
reproducible.

methodologically_blocked has templates and honesty rules but is never
produced by the tree.
"""

from datetime import date
from typing import Dict, List, Optional, Sequence

from loguru import logger

from consensus_engine.adjudicators.evidence.tier_classifier import (
    get_tier_weighting,
    is_high_quality_evidence,
)
from consensus_engine.config.domain_configs import get_domain_caveats
from consensus_engine.config.framing import (
    ACTIVE_DEBATE_SENTENCE,
    BLOCKED_SENTENCE,
    DEBATE_POSITION_SUMMARIES,
    EMERGING_SENTENCE,
    EMERGING_TREND_CAVEATS,
    FRAMING_TEMPLATES,
    INSUFFICIENT_SENTENCE,
    LEVEL_CAVEATS,
    LEVEL_DESCRIPTIONS,
    LEVEL_DISPLAY_NAMES,
    MODERATE_OPPOSE_SENTENCE,
    MODERATE_SUPPORT_SENTENCE,
    REASONS_FOR_DISAGREEMENT,
    STRONG_OPPOSE_SENTENCE,
    STRONG_SUPPORT_SENTENCE,
    VALUES_SENTENCE,
)
from consensus_engine.data_management.schemas import (
    ActiveDebateAssessment,
    ClaimType,
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
    EvidenceCategory,
    EvidenceDirection,
    EvidenceItem,
    EvidenceSummary,
    SettledAssessment,
    SimplifiedConsensusResult,
)

VALUES_CLAIM_TYPES = frozenset({ClaimType.VALUES, ClaimType.AESTHETIC, ClaimType.UNFALSIFIABLE})
POTENTIALLY_BLOCKED_CLAIM_TYPES = frozenset({ClaimType.CAUSAL, ClaimType.EFFECTIVENESS})

# Float tolerance on ratio boundaries (0.1 vs 1 - 0.9)
_RATIO_EPSILON = 1e-9

# Confidence: quality studies needed to raise confidence a notch
_MANY_QUALITY_STUDIES = 10


# ── Evidence helpers ──────────────────────────────────────────────────


def is_values_question(claim_type: ClaimType) -> bool:
    return ClaimType(claim_type) in VALUES_CLAIM_TYPES


def is_potentially_methodologically_blocked(claim_type: ClaimType) -> bool:
    """Claim types that may not be testable by controlled experiment."""
    return ClaimType(claim_type) in POTENTIALLY_BLOCKED_CLAIM_TYPES


def get_high_quality_evidence(evidence: Sequence[EvidenceItem]) -> List[EvidenceItem]:
    return [e for e in evidence if is_high_quality_evidence(e.tier)]


def count_evidence_by_direction(evidence: Sequence[EvidenceItem]) -> Dict[str, int]:
    counts = {d.value: 0 for d in EvidenceDirection}
    for item in evidence:
        counts[item.direction.value] += 1
    return counts


def calculate_support_ratio(evidence: Sequence[EvidenceItem]) -> float:
    """Unweighted supports / (supports + opposes); 0.5 with no directional evidence."""
    counts = count_evidence_by_direction(evidence)
    directional = counts["supports"] + counts["opposes"]
    if directional == 0:
        return 0.5
    return counts["supports"] / directional


def calculate_weighted_support_ratio(evidence: Sequence[EvidenceItem]) -> float:
    """Tier-weighted supports / (supports + opposes); 0.5 when the weight is zero."""
    support_weight = 0.0
    oppose_weight = 0.0
    for item in evidence:
        weight = get_tier_weighting(item.tier)
        if item.direction == EvidenceDirection.SUPPORTS:
            support_weight += weight
        elif item.direction == EvidenceDirection.OPPOSES:
            oppose_weight += weight

    total = support_weight + oppose_weight
    if total == 0:
        return 0.5
    return support_weight / total


def build_evidence_basis(evidence: Sequence[EvidenceItem]) -> EvidenceBasis:
    """Group citations by category; RCTs count as peer-reviewed studies."""
    groups: Dict[str, list] = {
        "systematic_reviews": [],
        "meta_analyses": [],
        "major_reports": [],
        "peer_reviewed_studies": [],
    }
    for item in evidence:
        if item.category == EvidenceCategory.SYSTEMATIC_REVIEW:
            groups["systematic_reviews"].append(item.citation)
        elif item.category == EvidenceCategory.META_ANALYSIS:
            groups["meta_analyses"].append(item.citation)
        elif item.category == EvidenceCategory.MAJOR_REPORT:
            groups["major_reports"].append(item.citation)
        elif item.category in (EvidenceCategory.PEER_REVIEWED, EvidenceCategory.RCT):
            groups["peer_reviewed_studies"].append(item.citation)

    return EvidenceBasis(
        **groups,
        total_quality_studies=len(get_high_quality_evidence(evidence)),
        total_studies_examined=len(evidence),
    )


def _recent(evidence: Sequence[EvidenceItem], years: int, current_year: int) -> List[EvidenceItem]:
    return [e for e in evidence if current_year - e.citation.year <= years]


def is_emerging_research(
    evidence: Sequence[EvidenceItem],
    thresholds: Optional[ConsensusThresholds] = None,
    current_year: Optional[int] = None,
) -> bool:
    """Few items, mostly within the recency window."""
    thresholds = thresholds or ConsensusThresholds.from_settings()
    current_year = current_year or date.today().year
    total = len(evidence)
    if total == 0 or total >= thresholds.emerging_max_total:
        return False
    recent = _recent(evidence, thresholds.emerging_research_years, current_year)
    return len(recent) / total >= thresholds.emerging_recent_share


# ── Framing ───────────────────────────────────────────────────────────


def get_direction_word(support_ratio: float, level: ConsensusLevel) -> str:
    if level == ConsensusLevel.VALUES_QUESTION:
        return ""
    if support_ratio >= 0.7:
        return "supports"
    if support_ratio <= 0.3:
        return "does not support"
    return "is mixed on"


def generate_framing_sentence(
    level: ConsensusLevel, support_ratio: float, quality_study_count: int
) -> str:
    """One-sentence framing of the verdict."""
    level = ConsensusLevel(level)
    if level == ConsensusLevel.STRONG_CONSENSUS:
        return STRONG_SUPPORT_SENTENCE if support_ratio >= 0.5 else STRONG_OPPOSE_SENTENCE
    if level == ConsensusLevel.MODERATE_CONSENSUS:
        return MODERATE_SUPPORT_SENTENCE if support_ratio >= 0.5 else MODERATE_OPPOSE_SENTENCE
    if level == ConsensusLevel.ACTIVE_DEBATE:
        return ACTIVE_DEBATE_SENTENCE
    if level == ConsensusLevel.EMERGING_RESEARCH:
        return EMERGING_SENTENCE.format(direction=get_direction_word(support_ratio, level))
    if level == ConsensusLevel.INSUFFICIENT_RESEARCH:
        return INSUFFICIENT_SENTENCE.format(count=quality_study_count)
    if level == ConsensusLevel.METHODOLOGICALLY_BLOCKED:
        return BLOCKED_SENTENCE
    return VALUES_SENTENCE


def generate_caveats(level: ConsensusLevel, domain: str, quality_study_count: int) -> List[str]:
    """Level caveats followed by domain caveats."""
    level_key = ConsensusLevel(level).value
    caveats = [c.format(count=quality_study_count) for c in LEVEL_CAVEATS.get(level_key, [])]
    caveats.extend(get_domain_caveats(domain))
    return caveats


def build_detailed_explanation(
    level: ConsensusLevel, basis: EvidenceBasis, counts: Dict[str, int]
) -> str:
    parts = [
        f"Based on {basis.total_studies_examined} sources examined "
        f"({basis.total_quality_studies} high-quality)."
    ]
    if basis.meta_analyses:
        parts.append(f"{len(basis.meta_analyses)} meta-analyses found.")
    if basis.systematic_reviews:
        parts.append(f"{len(basis.systematic_reviews)} systematic reviews found.")
    if level != ConsensusLevel.VALUES_QUESTION and (counts["supports"] or counts["opposes"]):
        parts.append(
            f"Of directional studies: {counts['supports']} supporting, {counts['opposes']} opposing."
        )
    return " ".join(parts)


def get_consensus_level_display_name(level: ConsensusLevel) -> str:
    return LEVEL_DISPLAY_NAMES[ConsensusLevel(level).value]


def get_consensus_level_description(level: ConsensusLevel) -> str:
    return LEVEL_DESCRIPTIONS[ConsensusLevel(level).value]


def get_simplified_result(assessment: ConsensusAssessment) -> SimplifiedConsensusResult:
    """Headline, top sources (at most 5) and the first three caveats."""
    template = FRAMING_TEMPLATES[assessment.level.value]
    basis = assessment.basis
    top_sources = (
        basis.meta_analyses[:2] + basis.systematic_reviews[:2] + basis.peer_reviewed_studies[:2]
    )[:5]
    return SimplifiedConsensusResult(
        level=assessment.level,
        confidence=assessment.confidence,
        headline=template["header_text"],
        summary=assessment.framing_sentence,
        evidence_count=basis.total_quality_studies,
        top_sources=top_sources,
        caveats=assessment.caveats[:3],
    )


# ── Detector ──────────────────────────────────────────────────────────


class ConsensusDetector:
    """
    Determines the consensus level of a claim from directed evidence.

    Usage:
        detector = ConsensusDetector()
        assessment = detector.assess(ConsensusAssessmentInput(...))

    Attributes:
        thresholds: Decision-tree thresholds
        current_year: Year used for recency; None means today
    """

    def __init__(
        self,
        thresholds: Optional[ConsensusThresholds] = None,
        current_year: Optional[int] = None,
    ):
        self.thresholds = thresholds or ConsensusThresholds.from_settings()
        self.current_year = current_year
        self.logger = logger.bind(component="ConsensusDetector")

    @property
    def year(self) -> int:
        return self.current_year or date.today().year

    def is_emerging(self, evidence: Sequence[EvidenceItem]) -> bool:
        return is_emerging_research(evidence, self.thresholds, self.year)

    def determine_level(
        self, claim_type: ClaimType, evidence: Sequence[EvidenceItem]
    ) -> ConsensusLevel:
        """Walk the decision tree."""
        if is_values_question(claim_type):
            return ConsensusLevel.VALUES_QUESTION

        quality = get_high_quality_evidence(evidence)
        if len(quality) < self.thresholds.minimum_quality_studies:
            if quality and self.is_emerging(evidence):
                return ConsensusLevel.EMERGING_RESEARCH
            return ConsensusLevel.INSUFFICIENT_RESEARCH

        ratio = calculate_weighted_support_ratio(quality)
        strong = self.thresholds.strong_consensus_ratio
        moderate = self.thresholds.moderate_consensus_ratio

        if ratio >= strong - _RATIO_EPSILON or ratio <= (1 - strong) + _RATIO_EPSILON:
            return ConsensusLevel.STRONG_CONSENSUS
        if ratio >= moderate - _RATIO_EPSILON or ratio <= (1 - moderate) + _RATIO_EPSILON:
            return ConsensusLevel.MODERATE_CONSENSUS

        if self.is_emerging(evidence):
            return ConsensusLevel.EMERGING_RESEARCH
        return ConsensusLevel.ACTIVE_DEBATE

    def determine_confidence(
        self, level: ConsensusLevel, evidence: Sequence[EvidenceItem]
    ) -> ConfidenceLevel:
        """Confidence in the assessment, by level."""
        quality_count = len(get_high_quality_evidence(evidence))

        if level == ConsensusLevel.VALUES_QUESTION:
            return ConfidenceLevel.HIGH
        if level == ConsensusLevel.STRONG_CONSENSUS:
            has_synthesis = any(
                e.category in (EvidenceCategory.META_ANALYSIS, EvidenceCategory.SYSTEMATIC_REVIEW)
                for e in evidence
            )
            if has_synthesis or quality_count >= _MANY_QUALITY_STUDIES:
                return ConfidenceLevel.HIGH
            return ConfidenceLevel.MEDIUM
        if level == ConsensusLevel.MODERATE_CONSENSUS:
            if quality_count >= _MANY_QUALITY_STUDIES:
                return ConfidenceLevel.MEDIUM
            return ConfidenceLevel.LOW
        if level == ConsensusLevel.ACTIVE_DEBATE:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW

    def build_debate_positions(self, evidence: Sequence[EvidenceItem]) -> DebatePositions:
        """Supporting vs opposing subsets of all evidence."""
        return DebatePositions(
            position_a=self._position(evidence, EvidenceDirection.SUPPORTS),
            position_b=self._position(evidence, EvidenceDirection.OPPOSES),
            reasons_for_disagreement=list(REASONS_FOR_DISAGREEMENT),
        )

    def build_emerging_trends(self, evidence: Sequence[EvidenceItem]) -> EmergingTrends:
        """Direction of recent evidence, by unweighted ratio."""
        recent = _recent(evidence, self.thresholds.emerging_research_years, self.year)
        ratio = calculate_support_ratio(recent)
        if ratio >= 0.6:
            direction = EvidenceDirection.SUPPORTS
        elif ratio <= 0.4:
            direction = EvidenceDirection.OPPOSES
        else:
            direction = EvidenceDirection.MIXED

        return EmergingTrends(
            direction=direction,
            recent_studies=[e.citation for e in recent[:5]],
            caveats=list(EMERGING_TREND_CAVEATS),
        )

    def assess(self, assessment_input: ConsensusAssessmentInput) -> ConsensusAssessment:
        """
        Produce a full consensus assessment for one claim.

        Args:
            assessment_input: Claim type, domain and directed evidence

        Returns:
            ConsensusAssessment variant matching the level
        """
        evidence = list(assessment_input.evidence)
        claim_type = assessment_input.claim_type
        domain = assessment_input.domain

        level = self.determine_level(claim_type, evidence)
        basis = build_evidence_basis(evidence)
        quality = get_high_quality_evidence(evidence)
        counts = count_evidence_by_direction(quality)
        ratio = calculate_weighted_support_ratio(quality)

        common = dict(
            confidence=self.determine_confidence(level, evidence),
            basis=basis,
            evidence_summary=EvidenceSummary(
                supporting=counts["supports"],
                opposing=counts["opposes"],
                neutral=counts["neutral"],
                support_ratio=ratio,
            ),
            framing_sentence=generate_framing_sentence(level, ratio, basis.total_quality_studies),
            detailed_explanation=build_detailed_explanation(level, basis, counts),
            caveats=generate_caveats(level, domain, basis.total_quality_studies),
            domain=domain,
            claim_type=claim_type,
        )

        self.logger.info(
            f"Consensus assessed: {level.value}",
            quality_studies=basis.total_quality_studies,
            support_ratio=round(ratio, 3),
        )

        if level == ConsensusLevel.ACTIVE_DEBATE:
            return ActiveDebateAssessment(
                positions=self.build_debate_positions(evidence),
                **common,
            )
        if level == ConsensusLevel.EMERGING_RESEARCH:
            return EmergingResearchAssessment(
                emerging_trends=self.build_emerging_trends(evidence),
                **common,
            )
        return SettledAssessment(level=level, **common)

    @staticmethod
    def _position(evidence: Sequence[EvidenceItem], direction: EvidenceDirection) -> DebatePosition:
        side = [e for e in evidence if e.direction == direction]
        return DebatePosition(
            summary=DEBATE_POSITION_SUMMARIES[direction.value],
            key_evidence=[e.citation for e in side[:3]],
            strength_of_evidence="moderate" if len(side) >= 5 else "weak",
            main_arguments=[e.key_finding for e in side[:3]],
        )


def determine_consensus_level(
    claim_type: ClaimType,
    evidence: Sequence[EvidenceItem],
    thresholds: Optional[ConsensusThresholds] = None,
    current_year: Optional[int] = None,
) -> ConsensusLevel:
    """Decision tree only, without building an assessment."""
    return ConsensusDetector(thresholds, current_year).determine_level(claim_type, evidence)


def determine_confidence(level: ConsensusLevel, evidence: Sequence[EvidenceItem]) -> ConfidenceLevel:
    return ConsensusDetector().determine_confidence(level, evidence)


def assess_consensus(
    assessment_input: ConsensusAssessmentInput,
    thresholds: Optional[ConsensusThresholds] = None,
    current_year: Optional[int] = None,
) -> ConsensusAssessment:
    """Assess consensus on one claim."""
    return ConsensusDetector(thresholds, current_year).assess(assessment_input)
