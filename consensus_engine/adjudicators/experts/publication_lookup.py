"""Publication signal for expert validation.

Whether a person has relevant peer-reviewed publications is the one expert
signal that cannot be read off the article text. It is pluggable:

- AcademicTitleProxy (default): an academic title at a research
  institution stands in for a publication record
- StaticPublicationLookup: bibliometric indicators keyed by name, e.g.
  loaded from an academic-database export; unknown names fall back to
  the proxy

Implement PublicationLookup to back the signal with a real bibliographic
service.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from consensus_engine.data_management.schemas import (
    ExpertQualityIndicators,
    PersonMention,
)


@dataclass
class PublicationSignal:
    """Outcome of a publication lookup.

    Attributes:
        has_relevant_publications: Person has relevant peer-reviewed work
        indicators: Bibliometric indicators when the source provides them
        source: Name of the lookup that produced the signal
    """

    has_relevant_publications: bool
    indicators: Optional[ExpertQualityIndicators] = None
    source: str = "proxy"


class PublicationLookup(ABC):
    """Interface for the publication signal."""

    @abstractmethod
    def lookup(
        self,
        person: PersonMention,
        domain: str,
        is_at_research_institution: bool,
        has_academic_title: bool,
    ) -> PublicationSignal:
        """Return the publication signal for one person."""


class AcademicTitleProxy(PublicationLookup):
    """Research institution AND academic title implies publications."""

    def lookup(
        self,
        person: PersonMention,
        domain: str,
        is_at_research_institution: bool,
        has_academic_title: bool,
    ) -> PublicationSignal:
        return PublicationSignal(
            has_relevant_publications=is_at_research_institution and has_academic_title,
            source="proxy",
        )


class StaticPublicationLookup(PublicationLookup):
    """
    Indicators from a fixed name -> indicators mapping.

    A known person has relevant publications if the record shows at least
    one relevant publication. Names are matched case-insensitively.

    Example:
        >>> lookup = StaticPublicationLookup({
        ...     "Jane Smith": ExpertQualityIndicators(h_index=42, total_citations=9000,
        ...                                           relevant_publication_count=60),
        ... })
    """

    def __init__(
        self,
        records: Dict[str, ExpertQualityIndicators],
        fallback: Optional[PublicationLookup] = None,
    ):
        self.records = {name.strip().lower(): indicators for name, indicators in records.items()}
        self.fallback = fallback or AcademicTitleProxy()

    def lookup(
        self,
        person: PersonMention,
        domain: str,
        is_at_research_institution: bool,
        has_academic_title: bool,
    ) -> PublicationSignal:
        indicators = self.records.get((person.name or "").strip().lower())
        if indicators is None:
            return self.fallback.lookup(
                person, domain, is_at_research_institution, has_academic_title
            )

        return PublicationSignal(
            has_relevant_publications=(indicators.relevant_publication_count or 0) > 0,
            indicators=indicators,
            source="static",
        )
