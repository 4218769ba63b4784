"""Tests for EvidenceTierClassifier.

Tests cover:
- Non-evidence sources (article subject, politician, advocacy)
- Expert opinion gated on verification
- Trusted source-type tags
- Title study-design signals and their priority over URLs
- Publisher host allow-lists (subdomains, www, scheme-less)
- Fallback to tier 5 for unknown and malformed input
- Tier weights and helpers
"""

import pytest

from consensus_engine.adjudicators.evidence.tier_classifier import (
    EvidenceTierClassifier,
    classify_evidence_tier,
    get_tier_description,
    get_tier_weighting,
    is_high_quality_evidence,
)
from consensus_engine.data_management.schemas import (
    EvidenceCategory,
    EvidenceDescriptor,
    SourceType,
)


@pytest.fixture
def classifier():
    return EvidenceTierClassifier()


class TestNonEvidence:
    """Claimants are never evidence."""

    def test_article_subject_flag_overrides_everything(self, classifier):
        result = classifier.classify(
            EvidenceDescriptor(
                url="https://www.nejm.org/doi/full/10.1056/x",
                title="A randomized controlled trial",
                source_type=SourceType.META_ANALYSIS,
                is_article_subject=True,
            )
        )
        assert result.tier == 5
        assert result.category == EvidenceCategory.NOT_EVIDENCE
        assert result.weight == 0.0

    @pytest.mark.parametrize(
        "source_type",
        [SourceType.POLITICIAN_STATEMENT, SourceType.ADVOCACY, SourceType.ARTICLE_SUBJECT],
    )
    def test_claimant_source_types(self, classifier, source_type):
        result = classifier.classify(
            EvidenceDescriptor(url="https://www.nature.com/articles/1", source_type=source_type)
        )
        assert result.tier == 5

    def test_unknown_source_is_tier_5(self, classifier):
        result = classifier.classify(
            EvidenceDescriptor(url="https://someblog.example.com/post", title="My thoughts")
        )
        assert result.tier == 5
        assert result.category == EvidenceCategory.NOT_EVIDENCE


class TestExpertOpinion:
    """Expert opinion counts only for verified experts."""

    def test_verified_expert_is_tier_4(self, classifier):
        result = classifier.classify(
            EvidenceDescriptor(source_type=SourceType.EXPERT_OPINION, is_verified_expert=True)
        )
        assert result.tier == 4
        assert result.category == EvidenceCategory.EXPERT_OPINION
        assert result.weight == 0.2

    def test_unverified_expert_is_tier_5(self, classifier):
        result = classifier.classify(EvidenceDescriptor(source_type=SourceType.EXPERT_OPINION))
        assert result.tier == 5

    def test_verified_testimony_is_tier_4(self, classifier):
        result = classifier.classify(
            EvidenceDescriptor(source_type=SourceType.EXPERT_TESTIMONY, is_verified_expert=True)
        )
        assert result.tier == 4


class TestSourceTypeTags:
    """Declared trusted source types map directly."""

    @pytest.mark.parametrize(
        "source_type,tier",
        [
            (SourceType.SYSTEMATIC_REVIEW, 1),
            (SourceType.META_ANALYSIS, 1),
            (SourceType.MAJOR_REPORT, 1),
            (SourceType.PEER_REVIEWED, 2),
            (SourceType.RCT, 2),
            (SourceType.WORKING_PAPER, 3),
            (SourceType.PREPRINT, 3),
            (SourceType.GOVERNMENT_STATS, 3),
        ],
    )
    def test_tag_tier(self, classifier, source_type, tier):
        result = classifier.classify(EvidenceDescriptor(source_type=source_type))
        assert result.tier == tier
        assert result.category.value == source_type.value


class TestTitleSignals:
    """Study design named in the title."""

    @pytest.mark.parametrize(
        "title,tier,category",
        [
            ("A meta-analysis of sugar intake", 1, "meta_analysis"),
            ("Meta analysis of sleep studies", 1, "meta_analysis"),
            ("A Systematic Review of minimum wage effects", 1, "systematic_review"),
            ("Cochrane review: exercise for depression", 1, "systematic_review"),
            ("A randomized controlled trial of vitamin D", 2, "rct"),
            ("Results from an RCT in Kenya", 2, "rct"),
            ("A double-blind study of caffeine", 2, "rct"),
            ("Placebo controlled evaluation of melatonin", 2, "rct"),
        ],
    )
    def test_title_patterns(self, classifier, title, tier, category):
        result = classifier.classify(EvidenceDescriptor(url="https://example.com", title=title))
        assert result.tier == tier
        assert result.category.value == category

    def test_rct_abbreviation_is_case_sensitive(self, classifier):
        result = classifier.classify(
            EvidenceDescriptor(url="https://example.com", title="the rct that never was")
        )
        assert result.tier == 5

    def test_title_beats_url(self, classifier):
        """A preprint host with a meta-analysis title is tier 1."""
        result = classifier.classify(
            EvidenceDescriptor(
                url="https://arxiv.org/abs/2401.00001",
                title="A meta-analysis of transformer scaling",
            )
        )
        assert result.tier == 1


class TestUrlAllowLists:
    """Publisher hosts, in tier order."""

    @pytest.mark.parametrize(
        "url,tier,category",
        [
            ("https://www.cochranelibrary.com/cdsr/doi/1", 1, "systematic_review"),
            ("https://www.ipcc.ch/report/ar6/", 1, "major_report"),
            ("https://nap.nationalacademies.org/catalog/1", 1, "major_report"),
            ("https://www.nature.com/articles/s41586", 2, "peer_reviewed"),
            ("https://jamanetwork.com/journals/jama/1", 2, "peer_reviewed"),
            ("https://www.nber.org/papers/w1", 3, "working_paper"),
            ("https://www.medrxiv.org/content/1", 3, "preprint"),
            ("https://www.bls.gov/news.release/1", 3, "government_stats"),
        ],
    )
    def test_hosts(self, classifier, url, tier, category):
        result = classifier.classify(EvidenceDescriptor(url=url, title="Findings"))
        assert result.tier == tier
        assert result.category.value == category

    def test_subdomain_matches(self, classifier):
        result = classifier.classify(EvidenceDescriptor(url="https://papers.ssrn.com/sol3/1"))
        assert result.tier == 3

    def test_scheme_less_url(self, classifier):
        result = classifier.classify(EvidenceDescriptor(url="nature.com/articles/x"))
        assert result.tier == 2

    def test_lookalike_host_does_not_match(self, classifier):
        result = classifier.classify(EvidenceDescriptor(url="https://notnature.com/articles/x"))
        assert result.tier == 5


class TestMalformedInput:
    """Classification is total."""

    def test_empty_dict(self, classifier):
        assert classifier.classify({}).tier == 5

    def test_none(self, classifier):
        assert classifier.classify(None).tier == 5

    def test_invalid_source_type(self, classifier):
        result = classifier.classify({"url": "https://nature.com", "source_type": "tabloid"})
        assert result.tier == 5

    def test_dict_input(self, classifier):
        result = classifier.classify({"url": "https://www.bmj.com/content/1", "title": "Study"})
        assert result.tier == 2


class TestHelpers:
    """Module-level helpers."""

    def test_weights(self):
        assert [get_tier_weighting(t) for t in range(1, 6)] == [1.0, 0.8, 0.4, 0.2, 0.0]

    def test_unknown_tier_weight(self):
        assert get_tier_weighting(9) == 0.0

    def test_high_quality(self):
        assert is_high_quality_evidence(1)
        assert is_high_quality_evidence(2)
        assert not is_high_quality_evidence(3)

    def test_description(self):
        assert get_tier_description(4) == "Expert opinion from verified domain experts"

    def test_default_classifier_function(self):
        result = classify_evidence_tier({"url": "https://www.thelancet.com/journals/1"})
        assert result.tier == 2
        assert result.weight == 0.8
