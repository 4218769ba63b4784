"""Tests for ExpertValidator.

Tests cover:
- Article-subject matching (exact, substring, last name)
- Disqualification precedence (subject > politician > lobbyist > advocate > corporate)
- Credential extraction and domain relevance
- Research institution and academic title signals
- Validity rule and additive confidence
- Quality tiers with and without bibliometric indicators
- Batch partitioning and malformed entries
- Data-driven rules loaded from JSON
"""

import json

import pytest

from consensus_engine.adjudicators.experts.expert_validator import (
    ExpertValidator,
    get_disqualification_explanation,
    get_expert_quality_tier,
    is_article_subject,
    should_exclude_from_expert_pool,
    validate_expert,
    validate_experts,
)
from consensus_engine.adjudicators.experts.publication_lookup import StaticPublicationLookup
from consensus_engine.config.expert_patterns import load_disqualification_rules
from consensus_engine.data_management.schemas import (
    DisqualificationReason,
    ExpertQualityIndicators,
    ExpertQualityTier,
    ExpertValidationResult,
    PersonMention,
)


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def validator():
    return ExpertValidator()


@pytest.fixture
def professor():
    return PersonMention(
        name="Jane Roe",
        title="Professor of Epidemiology",
        credentials="PhD, MPH",
        affiliation="Johns Hopkins University",
    )


# ── Article subjects ─────────────────────────────────────────────────


class TestArticleSubject:
    """Article-subject name matching."""

    def test_exact_match_case_insensitive(self):
        assert is_article_subject("John Smith", ["john smith"])

    def test_substring_match(self):
        assert is_article_subject("Smith", ["John Smith"])
        assert is_article_subject("Sen. John Smith", ["John Smith"])

    def test_last_name_match(self):
        assert is_article_subject("Jonathan Smith", ["J. Smith"])

    def test_single_letter_last_name_ignored(self):
        assert not is_article_subject("Anna B", ["Carl B"])

    def test_no_match(self):
        assert not is_article_subject("Jane Roe", ["John Smith"])

    def test_empty_name_never_matches(self):
        assert not is_article_subject("", ["John Smith"])

    def test_empty_subject_ignored(self):
        assert not is_article_subject("Jane Roe", ["", "   "])


# ── Disqualification ─────────────────────────────────────────────────


class TestDisqualification:
    """Absolute disqualifiers and their precedence."""

    def test_article_subject_with_strong_credentials(self, validator):
        """A subject with PhD, MD on the US Senate is excluded as article_subject."""
        result = validator.validate(
            {"name": "Robert Kane", "credentials": "PhD, MD", "affiliation": "US Senate"},
            ["Robert Kane"],
            "medicine",
        )
        assert not result.is_valid_expert
        assert result.disqualification_reason == DisqualificationReason.ARTICLE_SUBJECT
        assert result.confidence_score == 1.0
        assert result.disqualifiers.is_politician

    def test_politician_outranks_academic_title(self, validator):
        result = validator.validate(
            PersonMention(
                name="Maria Lopez",
                title="Senator and Professor of Law",
                credentials="JD, PhD",
                affiliation="Georgetown University",
            ),
            [],
            "criminology",
        )
        assert not result.is_valid_expert
        assert result.disqualification_reason == DisqualificationReason.POLITICIAN

    def test_former_officeholder(self, validator):
        result = validator.validate(
            PersonMention(name="A B", title="Former Governor of Ohio"), [], "economics"
        )
        assert result.disqualification_reason == DisqualificationReason.POLITICIAN

    def test_lobbyist(self, validator):
        result = validator.validate(
            PersonMention(name="Lee Park", title="Registered lobbyist", affiliation="Park Partners"),
            [],
            "economics",
        )
        assert result.disqualification_reason == DisqualificationReason.LOBBYIST

    def test_lobbyist_outranks_advocate(self, validator):
        result = validator.validate(
            PersonMention(
                name="Lee Park",
                title="Government relations director",
                affiliation="Coalition for Clean Air",
            ),
            [],
            "climate",
        )
        assert result.disqualification_reason == DisqualificationReason.LOBBYIST
        assert result.disqualifiers.is_advocate

    def test_advocate(self, validator):
        result = validator.validate(
            PersonMention(name="Sam Hill", affiliation="Americans for Tax Fairness"),
            [],
            "economics",
        )
        assert result.disqualification_reason == DisqualificationReason.ADVOCATE

    def test_corporate_spokesperson(self, validator):
        result = validator.validate(
            PersonMention(name="Kim Ode", title="Chief Marketing Officer", credentials="MBA"),
            [],
            "technology",
        )
        assert result.disqualification_reason == DisqualificationReason.CORPORATE_SPOKESPERSON

    def test_disqualified_has_no_positive_flags(self, validator):
        result = validator.validate(
            PersonMention(name="A B", title="Mayor", credentials="PhD", affiliation="Harvard University"),
            [],
            "general",
        )
        assert not result.has_relevant_degree
        assert not result.is_at_research_institution
        assert result.validation_reason == get_disqualification_explanation("politician")

    def test_quick_exclusion(self):
        exclude, reason = should_exclude_from_expert_pool(
            {"name": "Tom Ray", "title": "Press Secretary"}, []
        )
        assert exclude
        assert reason == DisqualificationReason.POLITICIAN

    def test_quick_exclusion_passes_academic(self, professor):
        assert should_exclude_from_expert_pool(professor, ["John Smith"]) == (False, None)

    def test_disqualified_result_cannot_be_valid(self):
        with pytest.raises(ValueError):
            ExpertValidationResult(
                disqualifiers={"is_politician": True},
                is_valid_expert=True,
            )


# ── Qualification ────────────────────────────────────────────────────


class TestQualification:
    """Positive qualification signals."""

    def test_extract_credentials_dedupes_and_keeps_order(self, validator):
        found = validator.extract_credentials("Ph.D., M.D.", "Professor")
        assert found[0] == "Ph.D."
        assert "M.D." in found
        assert "Professor" in found

    def test_dr_is_case_sensitive(self, validator):
        assert "Dr." in validator.extract_credentials("Dr. Jones", None)
        assert validator.extract_credentials("dr. jones", None) == []

    def test_relevant_credentials_by_domain(self, validator):
        assert validator.has_relevant_credentials(["Ph.D."], "climate")
        assert validator.has_relevant_credentials(["RD"], "nutrition")
        assert validator.has_relevant_credentials(["MD"], "psychology")  # "MD (psychiatry)"
        assert not validator.has_relevant_credentials(["MBA"], "medicine")

    def test_unknown_domain_falls_back_to_general(self, validator):
        assert validator.has_relevant_credentials(["PhD"], "astrology")

    def test_research_institution(self, validator):
        assert validator.is_at_research_institution("Massachusetts Institute of Technology")
        assert validator.is_at_research_institution("Pew Research Center")
        assert validator.is_at_research_institution("National Institutes of Health")
        assert not validator.is_at_research_institution("Acme Corp")
        assert not validator.is_at_research_institution(None)

    def test_academic_title(self, validator):
        assert validator.has_academic_title("Associate Professor of Economics")
        assert validator.has_academic_title("Postdoctoral Fellow")
        assert not validator.has_academic_title("Consultant")


class TestValidity:
    """Validity rule and confidence scoring."""

    def test_full_profile_is_valid_with_full_confidence(self, validator, professor):
        result = validator.validate(professor, [], "medicine")
        assert result.is_valid_expert
        assert result.has_relevant_publications  # proxy: institution + title
        assert result.confidence_score == pytest.approx(1.0)
        assert result.validation_reason.startswith("Valid expert: has relevant credentials (")

    def test_degree_and_institution(self, validator):
        result = validator.validate(
            PersonMention(name="Al Ng", credentials="PhD", affiliation="Stanford University"),
            [],
            "technology",
        )
        assert result.is_valid_expert
        assert result.confidence_score == pytest.approx(0.7)

    def test_institution_and_title_without_degree(self, validator):
        result = validator.validate(
            PersonMention(name="Bo Li", title="Senior Lecturer", affiliation="University of Leeds"),
            [],
            "education",
        )
        assert result.is_valid_expert
        assert not result.has_relevant_degree
        assert result.confidence_score == pytest.approx(0.6)

    def test_degree_alone_is_not_enough(self, validator):
        result = validator.validate(
            PersonMention(name="Cy Do", credentials="PhD", affiliation="Independent consultant"),
            [],
            "economics",
        )
        assert not result.is_valid_expert
        assert result.confidence_score == pytest.approx(0.4)
        assert result.validation_reason == (
            "Not validated: Missing research institution affiliation, verified publications"
        )

    def test_degree_and_publications_via_lookup(self):
        lookup = StaticPublicationLookup(
            {"Dee Fox": ExpertQualityIndicators(h_index=20, total_citations=800, relevant_publication_count=12)}
        )
        validator = ExpertValidator(publication_lookup=lookup)
        result = validator.validate(
            PersonMention(name="Dee Fox", credentials="PhD", affiliation="Fox Analytics"),
            [],
            "economics",
        )
        assert result.is_valid_expert
        assert result.has_relevant_publications
        assert result.quality_indicators.h_index == 20
        assert get_expert_quality_tier(result) == ExpertQualityTier.ESTABLISHED


class TestQualityTier:
    """Quality tier assignment."""

    def _valid(self, confidence=1.0, indicators=None):
        return ExpertValidationResult(
            is_valid_expert=True, confidence_score=confidence, quality_indicators=indicators
        )

    def test_invalid_is_unverified(self):
        assert get_expert_quality_tier(ExpertValidationResult()) == ExpertQualityTier.UNVERIFIED

    def test_top(self):
        indicators = ExpertQualityIndicators(h_index=45, total_citations=12000)
        assert get_expert_quality_tier(self._valid(indicators=indicators)) == ExpertQualityTier.TOP

    def test_emerging_by_publications(self):
        indicators = ExpertQualityIndicators(h_index=4, total_citations=50, relevant_publication_count=3)
        assert get_expert_quality_tier(self._valid(indicators=indicators)) == ExpertQualityTier.EMERGING

    def test_fallback_on_confidence(self):
        assert get_expert_quality_tier(self._valid(0.8)) == ExpertQualityTier.ESTABLISHED
        assert get_expert_quality_tier(self._valid(0.6)) == ExpertQualityTier.EMERGING
        assert get_expert_quality_tier(self._valid(0.4)) == ExpertQualityTier.UNVERIFIED


# ── Batch ────────────────────────────────────────────────────────────


class TestBatchValidation:
    """validate_all partitions and never raises."""

    def test_partition_preserves_order(self, professor):
        persons = [
            professor,
            {"name": "Gov. Ann Lee", "title": "Governor"},
            {"name": "Cy Do", "credentials": "PhD"},
            {"name": "Al Ng", "credentials": "PhD", "affiliation": "Yale University"},
        ]
        result = validate_experts(persons, [], "medicine")

        assert result.total_processed == 4
        assert [e.name for e in result.valid_experts] == ["Jane Roe", "Al Ng"]
        assert [p.name for p in result.excluded_persons] == ["Gov. Ann Lee", "Cy Do"]
        assert result.excluded_persons[0].reason == DisqualificationReason.POLITICIAN
        assert result.excluded_persons[1].reason == DisqualificationReason.MISSING_CREDENTIALS
        assert result.excluded_persons[1].explanation.startswith("Not validated: Missing")
        assert result.valid_count == 2
        assert result.excluded_count == 2

    def test_malformed_entries(self):
        persons = [
            {"name": ""},
            {"title": "Professor"},
            {"name": "Odd", "title": 42},
            "not a person",
        ]
        result = validate_experts(persons, ["John Smith"], "general")
        assert result.total_processed == 4
        assert result.valid_count == 0
        assert result.excluded_count == 4
        assert all(
            p.reason == DisqualificationReason.MISSING_CREDENTIALS for p in result.excluded_persons
        )

    def test_valid_expert_carries_quality_tier(self, professor):
        result = validate_experts([professor], [], "medicine")
        assert result.valid_experts[0].quality_tier == ExpertQualityTier.ESTABLISHED
        assert result.valid_experts[0].domain == "medicine"

    def test_module_function(self, professor):
        assert validate_expert(professor, [], "medicine").is_valid_expert


class TestRuleLoading:
    """Disqualification rules are data."""

    def test_load_rules_from_json(self, tmp_path):
        rules_file = tmp_path / "rules.json"
        rules_file.write_text(
            json.dumps(
                [
                    {"reason": "advocate", "fields": ["affiliation"], "patterns": [r"\bthink tank\b"]},
                ]
            )
        )
        rules = load_disqualification_rules(rules_file)
        validator = ExpertValidator(disqualification_rules=rules)

        advocate = validator.validate(
            PersonMention(name="Zed", affiliation="A Think Tank"), [], "economics"
        )
        senator = validator.validate(PersonMention(name="Zed", title="Senator"), [], "economics")

        assert advocate.disqualification_reason == DisqualificationReason.ADVOCATE
        assert senator.disqualification_reason is None
