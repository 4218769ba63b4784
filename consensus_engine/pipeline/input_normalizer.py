"""Normalization of raw claim payloads into ClassifiedClaim.

The one place where input defaults are decided:

- missing or unknown type -> empirical
- missing or unknown domain -> general
- missing source -> "Unknown" with unknown role
- missing id -> generated
- missing is_verifiable -> True

camelCase values from JavaScript producers ("politicalScience",
"scientificConsensus") are accepted. Entries without claim text are
dropped by normalize_claims; nothing here raises on malformed input.
"""

import re
from typing import Any, Iterable, List, Mapping, Optional

from loguru import logger
from pydantic import ValidationError

from consensus_engine.data_management.schemas import (
    ClaimSource,
    ClaimType,
    ClassifiedClaim,
    Domain,
    SourceRole,
)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[\s\-]+")

# Variations seen from upstream extractors
DOMAIN_ALIASES = {
    "politics": "political_science",
    "political": "political_science",
    "health": "medicine",
    "medical": "medicine",
    "tech": "technology",
    "economy": "economics",
    "crime": "criminology",
}
ROLE_ALIASES = {
    "subject": "article_subject",
    "expert": "cited_expert",
    "author": "article_author",
}

log = logger.bind(component="InputNormalizer")


def _snake(value: str) -> str:
    """'politicalScience' / 'Political Science' -> 'political_science'."""
    value = _CAMEL_BOUNDARY.sub("_", value.strip())
    return _SEPARATORS.sub("_", value).lower()


def normalize_claim_type(value: Any) -> ClaimType:
    if isinstance(value, ClaimType):
        return value
    if isinstance(value, str):
        try:
            return ClaimType(_snake(value))
        except ValueError:
            pass
    return ClaimType.EMPIRICAL


def normalize_domain(value: Any) -> Domain:
    if isinstance(value, Domain):
        return value
    if isinstance(value, str):
        key = _snake(value)
        try:
            return Domain(DOMAIN_ALIASES.get(key, key))
        except ValueError:
            pass
    return Domain.GENERAL


def normalize_role(value: Any) -> SourceRole:
    if isinstance(value, SourceRole):
        return value
    if isinstance(value, str):
        key = _snake(value)
        try:
            return SourceRole(ROLE_ALIASES.get(key, key))
        except ValueError:
            pass
    return SourceRole.UNKNOWN


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_source(raw: Any) -> ClaimSource:
    """Claim source with per-field fallbacks."""
    if isinstance(raw, ClaimSource):
        return raw
    if isinstance(raw, str) and raw.strip():
        return ClaimSource(name=raw.strip())
    if not isinstance(raw, Mapping):
        return ClaimSource()

    name = _optional_text(raw.get("name")) or "Unknown"
    try:
        return ClaimSource(
            name=name,
            role=normalize_role(raw.get("role")),
            credentials=_optional_text(raw.get("credentials")),
            affiliation=_optional_text(raw.get("affiliation")),
        )
    except ValidationError as e:
        log.debug(f"Claim source validation failed: {e}", source_name=name)
        return ClaimSource(name=name)


def normalize_claim(raw: Any) -> Optional[ClassifiedClaim]:
    """
    Normalize one raw claim.

    Args:
        raw: ClassifiedClaim, mapping, or bare claim text

    Returns:
        ClassifiedClaim, or None when there is no claim text
    """
    if isinstance(raw, ClassifiedClaim):
        return raw
    if isinstance(raw, str):
        raw = {"text": raw}
    if not isinstance(raw, Mapping):
        return None

    text = _optional_text(raw.get("text"))
    if not text:
        return None

    verifiable = raw.get("is_verifiable", raw.get("isVerifiable", True))
    fields = {
        "text": text,
        "type": normalize_claim_type(raw.get("type")),
        "domain": normalize_domain(raw.get("domain")),
        "source": normalize_source(raw.get("source")),
        "is_verifiable": verifiable if isinstance(verifiable, bool) else True,
    }
    claim_id = _optional_text(raw.get("id"))
    if claim_id:
        fields["id"] = claim_id

    try:
        return ClassifiedClaim(**fields)
    except ValidationError as e:
        log.debug(f"Claim validation failed: {e}", claim_id=claim_id)
        return ClassifiedClaim(text=text)


def normalize_claims(raw_claims: Iterable[Any]) -> List[ClassifiedClaim]:
    """Normalize a batch, dropping entries without claim text."""
    claims: List[ClassifiedClaim] = []
    for i, raw in enumerate(raw_claims or []):
        claim = normalize_claim(raw)
        if claim is None:
            log.debug("Dropped claim without text", claim_index=i)
            continue
        claims.append(claim)
    return claims
