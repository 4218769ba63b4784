"""Evidence tier classification.

Maps a raw evidence descriptor to one of five quality tiers plus a fixed
consensus weight. First match wins, in this order:

| Step | Signal                                          | Result            |
|------|-------------------------------------------------|-------------------|
| 1    | article subject / politician / advocacy source  | tier 5            |
| 2    | expert opinion or testimony                     | tier 4 if verified expert, else 5 |
| 3    | trusted source-type tag                         | tag's tier        |
| 4    | study design named in the title                 | tier 1 or 2       |
| 5    | publisher host on an allow-list                 | tier 1, 2 or 3    |
| 6    | anything else                                   | tier 5            |

Title signals outrank URL signals: a title that names a study design is
less ambiguous than the venue that published it.

Classification is total. Unknown or malformed input is tier 5, never an
error.
"""

import re
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import urlparse

from loguru import logger
from pydantic import ValidationError

from consensus_engine.config.evidence_sources import (
    EXPERT_SOURCE_TYPES,
    NON_EVIDENCE_SOURCE_TYPES,
    SOURCE_TYPE_TIERS,
    TIER_DESCRIPTIONS,
    TIER_WEIGHTS,
    TITLE_PATTERNS,
    URL_PATTERNS,
)
from consensus_engine.data_management.schemas import (
    EvidenceCategory,
    EvidenceClassification,
    EvidenceDescriptor,
)

NOT_EVIDENCE_TIER = 5


class EvidenceTierClassifier:
    """
    Classifies evidence descriptors into quality tiers.

    Pattern tables default to consensus_engine.config.evidence_sources and
    can be replaced per instance.

    Usage:
        classifier = EvidenceTierClassifier()
        result = classifier.classify(descriptor)

    Example:
        >>> classifier = EvidenceTierClassifier()
        >>> result = classifier.classify({"url": "https://www.nejm.org/doi/x", "title": "Study"})
        >>> result.tier, result.category.value
        (2, 'peer_reviewed')
    """

    def __init__(
        self,
        title_patterns: Optional[List[Tuple[str, int, str, bool]]] = None,
        url_patterns: Optional[List[Tuple[str, int, str]]] = None,
        source_type_tiers: Optional[Dict[str, Tuple[int, str]]] = None,
    ):
        """
        Initialize classifier with pattern tables.

        Args:
            title_patterns: (regex, tier, category, case_sensitive) rows
            url_patterns: (host, tier, category) rows, in match order
            source_type_tiers: trusted source-type tag -> (tier, category)
        """
        self.title_patterns = [
            (re.compile(pattern) if case_sensitive else re.compile(pattern, re.IGNORECASE), tier, category)
            for pattern, tier, category, case_sensitive in (title_patterns or TITLE_PATTERNS)
        ]
        self.url_patterns = url_patterns or URL_PATTERNS
        self.source_type_tiers = source_type_tiers or SOURCE_TYPE_TIERS
        self.logger = logger.bind(component="EvidenceTierClassifier")

    def classify(
        self, descriptor: Union[EvidenceDescriptor, Dict[str, Any]]
    ) -> EvidenceClassification:
        """
        Classify one evidence descriptor.

        Args:
            descriptor: EvidenceDescriptor or equivalent dict

        Returns:
            EvidenceClassification with tier, category, description, weight
        """
        if not isinstance(descriptor, EvidenceDescriptor):
            try:
                descriptor = EvidenceDescriptor.model_validate(descriptor or {})
            except ValidationError as e:
                self.logger.warning(f"Malformed evidence descriptor, tier 5: {e.error_count()} errors")
                return self._build(NOT_EVIDENCE_TIER, EvidenceCategory.NOT_EVIDENCE.value)

        tier, category = self._match(descriptor)
        self.logger.debug(
            f"Classified evidence as tier {tier} ({category})",
            url=descriptor.url[:80],
        )
        return self._build(tier, category)

    def _match(self, descriptor: EvidenceDescriptor) -> Tuple[int, str]:
        """Walk the decision steps; first match wins."""
        source_type = descriptor.source_type.value if descriptor.source_type else None

        # Step 1: article subjects, politicians and advocates are claimants
        if descriptor.is_article_subject or source_type in NON_EVIDENCE_SOURCE_TYPES:
            return NOT_EVIDENCE_TIER, EvidenceCategory.NOT_EVIDENCE.value

        # Step 2: expert opinion counts only for a verified expert
        if source_type in EXPERT_SOURCE_TYPES:
            if descriptor.is_verified_expert:
                return 4, EvidenceCategory.EXPERT_OPINION.value
            return NOT_EVIDENCE_TIER, EvidenceCategory.NOT_EVIDENCE.value

        # Step 3: trusted declared type
        if source_type in self.source_type_tiers:
            return self.source_type_tiers[source_type]

        # Step 4: study design in the title
        title = descriptor.title or ""
        for pattern, tier, category in self.title_patterns:
            if pattern.search(title):
                return tier, category

        # Step 5: publisher host allow-lists, in tier order
        host = self._extract_host(descriptor.url)
        if host:
            for domain, tier, category in self.url_patterns:
                if host == domain or host.endswith("." + domain):
                    return tier, category

        return NOT_EVIDENCE_TIER, EvidenceCategory.NOT_EVIDENCE.value

    def _extract_host(self, url: str) -> Optional[str]:
        """
        Extract the host from a URL or bare domain.

        Handles:
        - Full URLs (https://www.nature.com/articles/123)
        - Scheme-less URLs and domains (nature.com/articles/123)
        - Invalid/empty strings

        Args:
            url: Source URL

        Returns:
            Lowercase host without www., or None
        """
        if not url:
            return None

        candidate = url.strip()
        if "://" not in candidate:
            candidate = "//" + candidate

        try:
            host = urlparse(candidate).hostname
        except ValueError:
            return None

        if not host:
            return None
        host = host.lower()
        if host.startswith("www."):
            host = host[4:]
        return host

    @staticmethod
    def _build(tier: int, category: str) -> EvidenceClassification:
        return EvidenceClassification(
            tier=tier,
            category=EvidenceCategory(category),
            tier_description=TIER_DESCRIPTIONS[tier],
            weight=TIER_WEIGHTS[tier],
        )


_default_classifier: Optional[EvidenceTierClassifier] = None


def _get_default_classifier() -> EvidenceTierClassifier:
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = EvidenceTierClassifier()
    return _default_classifier


def classify_evidence_tier(
    descriptor: Union[EvidenceDescriptor, Dict[str, Any]],
) -> EvidenceClassification:
    """Classify a descriptor with the default pattern tables."""
    return _get_default_classifier().classify(descriptor)


def get_tier_weighting(tier: int) -> float:
    """Consensus weight of a tier; unknown tiers weigh nothing."""
    return TIER_WEIGHTS.get(tier, 0.0)


def get_tier_description(tier: int) -> str:
    """Human-readable description of a tier."""
    return TIER_DESCRIPTIONS.get(tier, TIER_DESCRIPTIONS[NOT_EVIDENCE_TIER])


def is_high_quality_evidence(tier: int) -> bool:
    """Tier 1-2 evidence is the only evidence that decides consensus."""
    return 1 <= tier <= 2
