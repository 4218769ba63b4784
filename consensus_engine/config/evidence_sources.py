"""Evidence tier configuration for the tier classifier.

Evidence hierarchy (from strongest to weakest):
1. Systematic reviews, meta-analyses, major institutional reports: 1.0
2. Peer-reviewed research, randomized controlled trials: 0.8
3. Working papers, preprints, government statistics: 0.4
4. Opinion of a verified domain expert: 0.2
5. Not evidence (politicians, advocates, article subjects): 0.0

Tables are ordered: the classifier walks them top to bottom and the first
match wins. Title patterns are checked before URL patterns.
"""

from typing import Dict, List, Tuple

# Consensus weight per tier
TIER_WEIGHTS: Dict[int, float] = {
    1: 1.0,
    2: 0.8,
    3: 0.4,
    4: 0.2,
    5: 0.0,
}

TIER_DESCRIPTIONS: Dict[int, str] = {
    1: "Highest quality: systematic reviews, meta-analyses, major institutional reports",
    2: "High quality: peer-reviewed research, randomized controlled trials",
    3: "Moderate quality: preliminary research, working papers, government statistics",
    4: "Expert opinion from verified domain experts",
    5: "Not evidence: politicians, advocates, or article subjects",
}

# Declared source types that are never evidence
NON_EVIDENCE_SOURCE_TYPES: List[str] = [
    "politician_statement",
    "advocacy",
    "article_subject",
]

# Declared source types that count as expert opinion when the expert is verified
EXPERT_SOURCE_TYPES: List[str] = [
    "expert_opinion",
    "expert_testimony",
]

# Trusted source-type tag -> (tier, category)
SOURCE_TYPE_TIERS: Dict[str, Tuple[int, str]] = {
    "systematic_review": (1, "systematic_review"),
    "meta_analysis": (1, "meta_analysis"),
    "major_report": (1, "major_report"),
    "peer_reviewed": (2, "peer_reviewed"),
    "rct": (2, "rct"),
    "working_paper": (3, "working_paper"),
    "preprint": (3, "preprint"),
    "government_stats": (3, "government_stats"),
}

# Title patterns: (regex, tier, category, case_sensitive)
TITLE_PATTERNS: List[Tuple[str, int, str, bool]] = [
    (r"\bmeta[- ]?analysis\b", 1, "meta_analysis", False),
    (r"\bsystematic\s+review\b", 1, "systematic_review", False),
    (r"\bcochrane\s+review\b", 1, "systematic_review", False),
    (r"\brandomized\s+controlled\s+trial\b", 2, "rct", False),
    (r"\bRCT\b", 2, "rct", True),  # lowercase "rct" is too often noise
    (r"\bdouble[- ]?blind\b", 2, "rct", False),
    (r"\bplacebo[- ]?controlled\b", 2, "rct", False),
]

# URL allow-lists: (domain, tier, category), walked in tier order
URL_PATTERNS: List[Tuple[str, int, str]] = [
    # Tier 1: synthesis publishers and major institutional reports
    ("cochranelibrary.com", 1, "systematic_review"),
    ("campbellcollaboration.org", 1, "systematic_review"),
    ("nap.nationalacademies.org", 1, "major_report"),
    ("ipcc.ch", 1, "major_report"),

    # Tier 2: peer-reviewed venues
    ("nature.com", 2, "peer_reviewed"),
    ("science.org", 2, "peer_reviewed"),
    ("nejm.org", 2, "peer_reviewed"),
    ("thelancet.com", 2, "peer_reviewed"),
    ("jamanetwork.com", 2, "peer_reviewed"),
    ("bmj.com", 2, "peer_reviewed"),
    ("pubmed.gov", 2, "peer_reviewed"),
    ("cell.com", 2, "peer_reviewed"),
    ("pnas.org", 2, "peer_reviewed"),

    # Tier 3: working papers, preprints, government statistics
    ("nber.org", 3, "working_paper"),
    ("ssrn.com", 3, "working_paper"),
    ("arxiv.org", 3, "preprint"),
    ("medrxiv.org", 3, "preprint"),
    ("biorxiv.org", 3, "preprint"),
    ("bls.gov", 3, "government_stats"),
    ("census.gov", 3, "government_stats"),
    ("bea.gov", 3, "government_stats"),
    ("cdc.gov", 3, "government_stats"),
    ("fbi.gov", 3, "government_stats"),
]
