"""Tests for claim input normalization.

Tests cover:
- Enum coercion with camelCase, spacing and alias variants
- Fallback defaults for missing or unknown fields
- Claim source normalization from strings and mappings
- Dropping entries without claim text
"""

import pytest

from consensus_engine.data_management.schemas import (
    ClaimSource,
    ClaimType,
    ClassifiedClaim,
    Domain,
    SourceRole,
)
from consensus_engine.pipeline import normalize_claim, normalize_claims
from consensus_engine.pipeline.input_normalizer import (
    normalize_claim_type,
    normalize_domain,
    normalize_role,
    normalize_source,
)


class TestEnumCoercion:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("scientificConsensus", ClaimType.SCIENTIFIC_CONSENSUS),
            ("Scientific Consensus", ClaimType.SCIENTIFIC_CONSENSUS),
            ("causal", ClaimType.CAUSAL),
            (ClaimType.VALUES, ClaimType.VALUES),
            ("vibes", ClaimType.EMPIRICAL),
            (None, ClaimType.EMPIRICAL),
            (42, ClaimType.EMPIRICAL),
        ],
    )
    def test_claim_type(self, value, expected) -> None:
        assert normalize_claim_type(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("politicalScience", Domain.POLITICAL_SCIENCE),
            ("political-science", Domain.POLITICAL_SCIENCE),
            ("politics", Domain.POLITICAL_SCIENCE),
            ("Health", Domain.MEDICINE),
            ("economics", Domain.ECONOMICS),
            ("astrology", Domain.GENERAL),
            (None, Domain.GENERAL),
        ],
    )
    def test_domain(self, value, expected) -> None:
        assert normalize_domain(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("articleSubject", SourceRole.ARTICLE_SUBJECT),
            ("subject", SourceRole.ARTICLE_SUBJECT),
            ("expert", SourceRole.CITED_EXPERT),
            ("unknown-thing", SourceRole.UNKNOWN),
            (None, SourceRole.UNKNOWN),
        ],
    )
    def test_role(self, value, expected) -> None:
        assert normalize_role(value) == expected


class TestNormalizeSource:
    def test_string_is_name(self) -> None:
        source = normalize_source("  Dr. Ana Ruiz ")
        assert source.name == "Dr. Ana Ruiz"
        assert source.role == SourceRole.UNKNOWN

    def test_missing_is_unknown(self) -> None:
        assert normalize_source(None).name == "Unknown"
        assert normalize_source("   ").name == "Unknown"

    def test_mapping(self) -> None:
        source = normalize_source(
            {"name": "Pat Doe", "role": "articleSubject", "affiliation": " U.S. Senate "}
        )
        assert source.name == "Pat Doe"
        assert source.role == SourceRole.ARTICLE_SUBJECT
        assert source.affiliation == "U.S. Senate"
        assert source.credentials is None

    def test_existing_source_passes_through(self) -> None:
        source = ClaimSource(name="Pat Doe")
        assert normalize_source(source) is source


class TestNormalizeClaim:
    def test_bare_text(self) -> None:
        claim = normalize_claim("Minimum wage increases reduce employment")
        assert claim.text == "Minimum wage increases reduce employment"
        assert claim.type == ClaimType.EMPIRICAL
        assert claim.domain == Domain.GENERAL
        assert claim.source.name == "Unknown"
        assert claim.is_verifiable is True
        assert claim.id

    def test_mapping_with_camel_case(self) -> None:
        claim = normalize_claim(
            {
                "id": "c-7",
                "text": "Voter ID laws reduce turnout",
                "type": "causal",
                "domain": "politicalScience",
                "isVerifiable": False,
            }
        )
        assert claim.id == "c-7"
        assert claim.type == ClaimType.CAUSAL
        assert claim.domain == Domain.POLITICAL_SCIENCE
        assert claim.is_verifiable is False

    def test_non_bool_verifiable_defaults_true(self) -> None:
        claim = normalize_claim({"text": "x", "is_verifiable": "nope"})
        assert claim.is_verifiable is True

    def test_generated_ids_are_distinct(self) -> None:
        assert normalize_claim("a").id != normalize_claim("b").id

    @pytest.mark.parametrize("raw", [None, 12, {}, {"text": "   "}, ""])
    def test_no_text_is_none(self, raw) -> None:
        assert normalize_claim(raw) is None

    def test_classified_claim_passes_through(self) -> None:
        claim = ClassifiedClaim(text="x")
        assert normalize_claim(claim) is claim


class TestNormalizeClaims:
    def test_drops_entries_without_text(self) -> None:
        claims = normalize_claims(["one", {"text": ""}, None, {"text": "two"}])
        assert [c.text for c in claims] == ["one", "two"]

    def test_empty(self) -> None:
        assert normalize_claims([]) == []
        assert normalize_claims(None) == []
