"""Evidence sources for the adjudication pipeline.

The engine never searches by itself: it asks an EvidenceSource for raw
evidence per claim. Implementations wrap a search API, a literature
database or a fixture file. Failures should propagate as exceptions; the
pipeline catches them per claim.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional

import structlog

from consensus_engine.data_management.schemas import ClassifiedClaim, RawEvidence


class EvidenceSource(ABC):
    """Async provider of raw evidence for one claim."""

    @abstractmethod
    async def fetch_evidence(
        self, claim: ClassifiedClaim, max_results: int
    ) -> List[RawEvidence]:
        """
        Fetch candidate evidence for a claim.

        Args:
            claim: Claim being adjudicated
            max_results: Upper bound on returned items

        Returns:
            Raw evidence items, directed relative to the claim
        """


class StaticEvidenceSource(EvidenceSource):
    """
    Serves canned evidence keyed by claim ID.

    Useful for fixtures, replaying recorded searches and tests. Claims with
    no entry get the default evidence (empty unless given).

    Usage:
        source = StaticEvidenceSource({"claim-1": [{"url": "...", ...}]})
        evidence = await source.fetch_evidence(claim, max_results=10)
    """

    def __init__(
        self,
        evidence_by_claim: Optional[Mapping[str, Iterable[Any]]] = None,
        default: Optional[Iterable[Any]] = None,
    ) -> None:
        self._evidence: Dict[str, List[RawEvidence]] = {
            claim_id: [self._coerce(e) for e in items]
            for claim_id, items in (evidence_by_claim or {}).items()
        }
        self._default = [self._coerce(e) for e in (default or [])]
        self._logger = structlog.get_logger().bind(component="StaticEvidenceSource")

    @staticmethod
    def _coerce(item: Any) -> RawEvidence:
        if isinstance(item, RawEvidence):
            return item
        return RawEvidence(**item)

    def add(self, claim_id: str, evidence: Iterable[Any]) -> None:
        self._evidence.setdefault(claim_id, []).extend(self._coerce(e) for e in evidence)

    async def fetch_evidence(
        self, claim: ClassifiedClaim, max_results: int
    ) -> List[RawEvidence]:
        items = self._evidence.get(claim.id, self._default)
        self._logger.debug(
            "static_evidence_served",
            claim_id=claim.id,
            available=len(items),
            max_results=max_results,
        )
        return list(items[:max_results])
