"""Domain configuration for claim adjudication.

Static, per-domain data consumed by the adjudicators:
- typical_credentials: credentials an expert in the field usually holds
  (Expert Validator relevance check)
- relevant_departments: academic departments associated with the field
- replication_concerns / politicization / rapidly_evolving: caveat flags
- consensus_caveats: domain-specific caveat strings appended to every
  consensus assessment in that domain

Unknown domains fall back to the "general" entry.
"""

from typing import Dict, List, TypedDict


class DomainConfig(TypedDict):
    """Static configuration entry for one claim domain."""

    display_name: str
    typical_credentials: List[str]
    relevant_departments: List[str]
    replication_concerns: bool
    politicization: str  # "low" | "medium" | "high"
    rapidly_evolving: bool
    consensus_caveats: List[str]


DEFAULT_DOMAIN = "general"

DOMAIN_CONFIGS: Dict[str, DomainConfig] = {
    "medicine": {
        "display_name": "Medicine & Health",
        "typical_credentials": ["MD", "PhD", "MPH", "DO"],
        "relevant_departments": [
            "medicine", "public health", "epidemiology", "pharmacology",
            "biostatistics", "immunology",
        ],
        "replication_concerns": False,
        "politicization": "medium",
        "rapidly_evolving": True,
        "consensus_caveats": [],
    },
    "climate": {
        "display_name": "Climate Science",
        "typical_credentials": ["PhD"],
        "relevant_departments": [
            "atmospheric science", "earth science", "oceanography",
            "environmental science", "geophysics",
        ],
        "replication_concerns": False,
        "politicization": "high",
        "rapidly_evolving": True,
        "consensus_caveats": [],
    },
    "economics": {
        "display_name": "Economics",
        "typical_credentials": ["PhD"],
        "relevant_departments": ["economics", "public policy", "finance"],
        "replication_concerns": True,
        "politicization": "high",
        "rapidly_evolving": False,
        "consensus_caveats": [
            "Economic predictions depend on assumptions that may vary",
        ],
    },
    "criminology": {
        "display_name": "Criminology & Criminal Justice",
        "typical_credentials": ["PhD", "JD (for legal aspects)"],
        "relevant_departments": [
            "criminology", "criminal justice", "sociology", "law",
        ],
        "replication_concerns": True,
        "politicization": "high",
        "rapidly_evolving": False,
        "consensus_caveats": [],
    },
    "psychology": {
        "display_name": "Psychology",
        "typical_credentials": ["PhD", "PsyD", "MD (psychiatry)"],
        "relevant_departments": [
            "psychology", "psychiatry", "cognitive science", "neuroscience",
        ],
        "replication_concerns": True,
        "politicization": "medium",
        "rapidly_evolving": True,
        "consensus_caveats": [
            "Replication concerns exist in this field",
        ],
    },
    "nutrition": {
        "display_name": "Nutrition",
        "typical_credentials": ["PhD", "RD", "MD"],
        "relevant_departments": [
            "nutrition", "dietetics", "food science", "public health",
        ],
        "replication_concerns": True,
        "politicization": "medium",
        "rapidly_evolving": True,
        "consensus_caveats": [
            "Nutrition research is challenging due to confounding factors",
            "Industry funding may influence some studies",
        ],
    },
    "political_science": {
        "display_name": "Political Science",
        "typical_credentials": ["PhD"],
        "relevant_departments": [
            "political science", "government", "international relations",
            "public policy",
        ],
        "replication_concerns": True,
        "politicization": "high",
        "rapidly_evolving": False,
        "consensus_caveats": [
            "Results may vary across political contexts",
        ],
    },
    "technology": {
        "display_name": "Technology",
        "typical_credentials": ["PhD"],
        "relevant_departments": [
            "computer science", "electrical engineering",
            "information science", "engineering",
        ],
        "replication_concerns": True,
        "politicization": "medium",
        "rapidly_evolving": True,
        "consensus_caveats": [
            "Rapidly evolving field; findings may become outdated",
        ],
    },
    "education": {
        "display_name": "Education",
        "typical_credentials": ["PhD", "EdD"],
        "relevant_departments": [
            "education", "educational psychology", "teacher education",
        ],
        "replication_concerns": True,
        "politicization": "high",
        "rapidly_evolving": False,
        "consensus_caveats": [],
    },
    "general": {
        "display_name": "General",
        "typical_credentials": ["PhD"],
        "relevant_departments": [],
        "replication_concerns": False,
        "politicization": "low",
        "rapidly_evolving": False,
        "consensus_caveats": [],
    },
}


def get_domain_config(domain: str) -> DomainConfig:
    """Return the configuration for a domain, falling back to general."""
    key = getattr(domain, "value", domain)
    return DOMAIN_CONFIGS.get(key, DOMAIN_CONFIGS[DEFAULT_DOMAIN])


def get_typical_credentials(domain: str) -> List[str]:
    """Return the typical credentials list for a domain."""
    return get_domain_config(domain)["typical_credentials"]


def get_domain_caveats(domain: str) -> List[str]:
    """Return the domain-specific consensus caveats for a domain."""
    return list(get_domain_config(domain)["consensus_caveats"])
