"""Claim adjudication pipeline.

Runs each claim through evidence lookup, tier classification, expert
validation, consensus assessment, rendering and the honesty check, then
aggregates a run summary.

Flow per claim:
1. Fetch raw evidence from the injected EvidenceSource
2. Classify each item's tier (validating any attached person first)
3. Validate the person the claim is attributed to
4. Assess consensus
5. Render and run the honesty check

Claims are evaluated in sequential batches of max_concurrency; a batch runs
concurrently with asyncio.gather. A failing claim becomes a ClaimError and
never stops its siblings or later batches.

Usage:
    from consensus_engine.pipeline import AdjudicationPipeline, StaticEvidenceSource

    pipeline = AdjudicationPipeline(StaticEvidenceSource({...}))
    result = await pipeline.evaluate_claims(claims, article_subjects=["Jane Doe"])
"""

import asyncio
import re
import time
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Sequence, Union
from urllib.parse import urlparse

from consensus_engine.adjudicators.consensus import ConsensusDetector
from consensus_engine.adjudicators.evidence import EvidenceTierClassifier
from consensus_engine.adjudicators.experts import ExpertValidator, is_article_subject
from consensus_engine.adjudicators.honesty import OutputRenderer, perform_honesty_check
from consensus_engine.budget import CostTracker
from consensus_engine.data_management.schemas import (
    Citation,
    ClaimError,
    ClaimSource,
    ClassifiedClaim,
    ConfidenceLevel,
    ConsensusAssessmentInput,
    ConsensusLevel,
    EvaluatedClaim,
    EvidenceDescriptor,
    EvidenceItem,
    ExpertValidationResult,
    PersonMention,
    PipelineMetadata,
    PipelineOptions,
    PipelineResult,
    PipelineSummary,
    RawEvidence,
)
from consensus_engine.pipeline.evidence_source import EvidenceSource, StaticEvidenceSource
from consensus_engine.pipeline.input_normalizer import normalize_claims
from consensus_engine.utils.logging import (
    bind_run_context,
    clear_run_context,
    get_correlation_id,
    get_structured_logger,
)

YEAR_PATTERN = re.compile(r"\b(?:19|20)\d{2}\b")
FINDING_LENGTH = 200
KEY_FINDING_LENGTH = 300

_CONFIDENCE_SCORES = {
    ConfidenceLevel.HIGH: 3,
    ConfidenceLevel.MEDIUM: 2,
    ConfidenceLevel.LOW: 1,
}

ClaimInput = Union[ClassifiedClaim, dict, str]


def extract_year(text: Optional[str], default: int) -> int:
    """First 19xx/20xx year in text, else default."""
    match = YEAR_PATTERN.search(text or "")
    return int(match.group(0)) if match else default


def publication_from_url(url: str) -> str:
    """Host without "www.", or "" when the URL cannot be parsed."""
    try:
        host = urlparse(url if "//" in url else f"//{url}").hostname or ""
    except ValueError:
        return ""
    return host[4:] if host.startswith("www.") else host


def average_confidence(levels: Sequence[ConfidenceLevel]) -> ConfidenceLevel:
    """Mean of high=3, medium=2, low=1; >= 2.5 high, >= 1.5 medium."""
    if not levels:
        return ConfidenceLevel.LOW
    mean = sum(_CONFIDENCE_SCORES[c] for c in levels) / len(levels)
    if mean >= 2.5:
        return ConfidenceLevel.HIGH
    if mean >= 1.5:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


class AdjudicationPipeline:
    """
    Evaluates classified claims end to end.

    Collaborators are injectable. Without explicit options, limits and
    thresholds come from the environment-backed settings.

    Attributes:
        evidence_source: Where raw evidence comes from
        options: Limits, concurrency and thresholds
        cost_tracker: Optional daily budget guard checked before each batch
        cost_per_lookup: Cost recorded per evidence fetch (0 disables)
    """

    def __init__(
        self,
        evidence_source: EvidenceSource,
        options: Optional[PipelineOptions] = None,
        tier_classifier: Optional[EvidenceTierClassifier] = None,
        expert_validator: Optional[ExpertValidator] = None,
        consensus_detector: Optional[ConsensusDetector] = None,
        renderer: Optional[OutputRenderer] = None,
        cost_tracker: Optional[CostTracker] = None,
        cost_per_lookup: float = 0.0,
        current_year: Optional[int] = None,
    ) -> None:
        self.evidence_source = evidence_source
        self.options = options or PipelineOptions.from_settings()
        self.tier_classifier = tier_classifier or EvidenceTierClassifier()
        self.expert_validator = expert_validator or ExpertValidator()
        self.consensus_detector = consensus_detector or ConsensusDetector(
            thresholds=self.options.thresholds, current_year=current_year
        )
        self.renderer = renderer or OutputRenderer()
        self.cost_tracker = cost_tracker
        self.cost_per_lookup = cost_per_lookup
        self._logger = get_structured_logger("pipeline", component="AdjudicationPipeline")

    async def evaluate_claims(
        self,
        claims: Iterable[ClaimInput],
        article_subjects: Iterable[str] = (),
    ) -> PipelineResult:
        """
        Evaluate a batch of claims.

        Args:
            claims: ClassifiedClaim objects or raw claim payloads
            article_subjects: Names of the people the article is about

        Returns:
            PipelineResult with evaluated claims, summary and metadata
        """
        run_id = get_correlation_id()
        bind_run_context(run_id)
        try:
            return await self._run(claims, article_subjects, PipelineMetadata(run_id=run_id))
        finally:
            clear_run_context()

    async def _run(
        self,
        claims: Iterable[ClaimInput],
        article_subjects: Iterable[str],
        metadata: PipelineMetadata,
    ) -> PipelineResult:
        start = time.perf_counter()

        all_claims = normalize_claims(claims)
        subjects = [s for s in article_subjects if s]
        max_claims = self.options.max_claims
        to_evaluate = all_claims[:max_claims]
        if len(all_claims) > max_claims:
            metadata.warnings.append(
                f"Evaluating only first {max_claims} of {len(all_claims)} claims"
            )

        self._logger.info(
            "evaluation_started",
            total_claims=len(all_claims),
            claims_to_evaluate=len(to_evaluate),
            parallel=self.options.parallel_evaluation,
        )

        batch_size = self.options.max_concurrency if self.options.parallel_evaluation else 1
        evaluated: List[EvaluatedClaim] = []

        for i in range(0, len(to_evaluate), batch_size):
            if self._over_budget():
                remaining = to_evaluate[i:]
                for claim in remaining:
                    metadata.errors.append(
                        ClaimError(
                            claim_id=claim.id,
                            error=f'Claim "{claim.id}" not evaluated: daily cost cap reached',
                        )
                    )
                self._logger.warning("budget_exhausted", skipped_claims=len(remaining))
                break

            batch = to_evaluate[i : i + batch_size]
            results = await self._process_batch(batch, subjects, metadata)
            evaluated.extend(results)

            self._logger.info(
                "batch_complete",
                batch_start=i,
                batch_size=len(batch),
                cumulative_evaluated=len(evaluated),
            )

        for item in evaluated:
            if not item.honesty_check.is_honest:
                metadata.warnings.append(
                    f'Claim "{item.claim.id}" has honesty violations: '
                    + "; ".join(item.honesty_check.violations)
                )

        metadata.completed_at = datetime.now(timezone.utc)
        metadata.processing_time_ms = (time.perf_counter() - start) * 1000

        summary = self.build_summary(len(all_claims), evaluated)
        self._logger.info(
            "evaluation_complete",
            claims_evaluated=summary.claims_evaluated,
            errors=len(metadata.errors),
            warnings=len(metadata.warnings),
            processing_time_ms=round(metadata.processing_time_ms, 1),
        )
        return PipelineResult(claims=evaluated, summary=summary, metadata=metadata)

    async def _process_batch(
        self,
        batch: List[ClassifiedClaim],
        article_subjects: List[str],
        metadata: PipelineMetadata,
    ) -> List[EvaluatedClaim]:
        """Evaluate one batch concurrently; failures become ClaimErrors.

        Results keep input order.
        """

        async def evaluate_guarded(claim: ClassifiedClaim) -> Optional[EvaluatedClaim]:
            try:
                return await self.evaluate_claim(claim, article_subjects)
            except Exception as e:
                self._logger.error("claim_evaluation_failed", claim_id=claim.id, error=str(e))
                metadata.errors.append(
                    ClaimError(claim_id=claim.id, error=f'Claim "{claim.id}" evaluation failed: {e}')
                )
                return None

        raw_results = await asyncio.gather(
            *[evaluate_guarded(c) for c in batch],
            return_exceptions=True,
        )

        results: List[EvaluatedClaim] = []
        for claim, r in zip(batch, raw_results):
            if isinstance(r, EvaluatedClaim):
                results.append(r)
            elif isinstance(r, BaseException):
                self._logger.error("batch_exception", claim_id=claim.id, error=str(r))
                metadata.errors.append(
                    ClaimError(claim_id=claim.id, error=f'Claim "{claim.id}" evaluation failed: {r}')
                )
        return results

    async def evaluate_claim(
        self,
        claim: ClassifiedClaim,
        article_subjects: Sequence[str] = (),
    ) -> EvaluatedClaim:
        """Evaluate a single claim. Exceptions propagate to the caller."""
        raw_evidence = await self.evidence_source.fetch_evidence(
            claim, self.options.max_search_results
        )
        if self.cost_tracker is not None and self.cost_per_lookup > 0:
            self.cost_tracker.record(self.cost_per_lookup)

        evidence = self.convert_evidence(raw_evidence, claim, article_subjects)
        source_validation = self.validate_claim_source(claim.source, article_subjects, claim)

        assessment = self.consensus_detector.assess(
            ConsensusAssessmentInput(
                claim_text=claim.text,
                claim_type=claim.type,
                domain=claim.domain,
                evidence=evidence,
            )
        )
        rendered = self.renderer.render(assessment, claim.text, claim_id=claim.id)
        honesty_check = perform_honesty_check(assessment, rendered)

        self._logger.info(
            "claim_evaluated",
            claim_id=claim.id,
            level=assessment.level.value,
            confidence=assessment.confidence.value,
            evidence_items=len(evidence),
            is_honest=honesty_check.is_honest,
        )
        return EvaluatedClaim(
            claim=claim,
            evidence=evidence,
            source_validation=source_validation,
            assessment=assessment,
            rendered=rendered,
            honesty_check=honesty_check,
        )

    def convert_evidence(
        self,
        raw_evidence: Iterable[RawEvidence],
        claim: ClassifiedClaim,
        article_subjects: Sequence[str],
    ) -> List[EvidenceItem]:
        """Classify and convert raw evidence, deduplicated by URL and capped."""
        items: List[EvidenceItem] = []
        seen_urls = set()
        for raw in raw_evidence:
            if raw.url and raw.url in seen_urls:
                continue
            seen_urls.add(raw.url)
            items.append(self.to_evidence_item(raw, claim, article_subjects))
            if len(items) >= self.options.max_search_results:
                break
        return items

    def to_evidence_item(
        self,
        raw: RawEvidence,
        claim: ClassifiedClaim,
        article_subjects: Sequence[str],
    ) -> EvidenceItem:
        verified_expert = False
        subject = False
        if raw.person is not None and raw.person.name:
            validation = self.expert_validator.validate(
                raw.person, article_subjects, claim.domain.value
            )
            verified_expert = validation.is_valid_expert
            subject = is_article_subject(raw.person.name, article_subjects)

        classification = self.tier_classifier.classify(
            EvidenceDescriptor(
                url=raw.url,
                title=raw.title,
                source_type=raw.source_type,
                is_verified_expert=verified_expert,
                is_article_subject=subject,
            )
        )

        year_source = raw.published_date if raw.published_date else raw.snippet
        citation = Citation(
            title=raw.title or raw.url,
            authors=list(raw.authors),
            publication=publication_from_url(raw.url),
            year=extract_year(year_source, self.consensus_detector.year),
            url=raw.url,
            finding=raw.snippet[:FINDING_LENGTH] or None,
        )
        return EvidenceItem(
            citation=citation,
            tier=classification.tier,
            category=classification.category,
            direction=raw.direction,
            key_finding=raw.snippet[:KEY_FINDING_LENGTH],
        )

    def validate_claim_source(
        self,
        source: ClaimSource,
        article_subjects: Sequence[str],
        claim: ClassifiedClaim,
    ) -> Optional[ExpertValidationResult]:
        """Validate the claim's attributed person; None when unattributed."""
        if not source.name or source.name == "Unknown":
            return None
        person = PersonMention(
            name=source.name,
            title=source.role.value,
            credentials=source.credentials,
            affiliation=source.affiliation,
            role=source.role.value,
        )
        return self.expert_validator.validate(person, article_subjects, claim.domain.value)

    @staticmethod
    def build_summary(total_claims: int, evaluated: Sequence[EvaluatedClaim]) -> PipelineSummary:
        levels = [e.assessment.level for e in evaluated]
        return PipelineSummary(
            total_claims=total_claims,
            claims_evaluated=len(evaluated),
            claims_by_type=dict(Counter(e.claim.type.value for e in evaluated)),
            claims_by_domain=dict(Counter(e.claim.domain.value for e in evaluated)),
            consensus_level_distribution=dict(Counter(level.value for level in levels)),
            average_confidence=average_confidence([e.assessment.confidence for e in evaluated]),
            values_questions_count=levels.count(ConsensusLevel.VALUES_QUESTION),
            has_active_debate=ConsensusLevel.ACTIVE_DEBATE in levels,
        )

    def _over_budget(self) -> bool:
        return self.cost_tracker is not None and self.cost_tracker.snapshot().is_over_budget


async def evaluate_claims(
    claims: Iterable[ClaimInput],
    article_subjects: Iterable[str] = (),
    options: Optional[PipelineOptions] = None,
    evidence_source: Optional[EvidenceSource] = None,
    **pipeline_kwargs: Any,
) -> PipelineResult:
    """
    Evaluate claims with a one-off pipeline.

    Without an evidence source every claim is assessed on zero evidence.
    """
    pipeline = AdjudicationPipeline(
        evidence_source or StaticEvidenceSource(),
        options=options,
        **pipeline_kwargs,
    )
    return await pipeline.evaluate_claims(claims, article_subjects)
