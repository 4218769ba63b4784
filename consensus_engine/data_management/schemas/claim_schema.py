"""Claim schema for adjudication input.

Claims arrive already extracted and classified by an upstream extractor:
the engine treats claim type and domain as decided and never re-derives
them. Missing or unknown values are normalized once, at the pipeline
boundary (see consensus_engine.pipeline.input_normalizer).
"""

from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field


class ClaimType(str, Enum):
    """Type of a factual claim.

    VALUES, AESTHETIC and UNFALSIFIABLE claims are values questions: no
    amount of evidence resolves them.
    """

    EMPIRICAL = "empirical"
    CAUSAL = "causal"
    STATISTICAL = "statistical"
    HISTORICAL = "historical"
    SCIENTIFIC_CONSENSUS = "scientific_consensus"
    PREDICTIVE = "predictive"
    COMPARATIVE = "comparative"
    EFFECTIVENESS = "effectiveness"
    VALUES = "values"
    AESTHETIC = "aesthetic"
    DEFINITIONAL = "definitional"
    UNFALSIFIABLE = "unfalsifiable"


class Domain(str, Enum):
    """Subject domain of a claim, keys the domain configuration table."""

    MEDICINE = "medicine"
    CLIMATE = "climate"
    ECONOMICS = "economics"
    CRIMINOLOGY = "criminology"
    PSYCHOLOGY = "psychology"
    NUTRITION = "nutrition"
    POLITICAL_SCIENCE = "political_science"
    TECHNOLOGY = "technology"
    EDUCATION = "education"
    GENERAL = "general"


class SourceRole(str, Enum):
    """Role of the person a claim is attributed to within the article."""

    ARTICLE_SUBJECT = "article_subject"
    CITED_EXPERT = "cited_expert"
    ARTICLE_AUTHOR = "article_author"
    UNKNOWN = "unknown"


class ClaimSource(BaseModel):
    """Person or entity a claim is attributed to."""

    name: str = Field("Unknown", description="Name as written in the article")
    role: SourceRole = Field(SourceRole.UNKNOWN, description="Role in the article")
    credentials: Optional[str] = Field(None, description="Free-text credentials")
    affiliation: Optional[str] = Field(None, description="Free-text affiliation")


class ClassifiedClaim(BaseModel):
    """A claim ready for adjudication."""

    id: str = Field(default_factory=lambda: f"claim-{uuid4().hex[:8]}")
    text: str = Field(..., description="Claim text as extracted from the article")
    type: ClaimType = Field(ClaimType.EMPIRICAL, description="Claim type")
    domain: Domain = Field(Domain.GENERAL, description="Claim domain")
    source: ClaimSource = Field(default_factory=ClaimSource)
    is_verifiable: bool = Field(True, description="Upstream verifiability flag")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "claim-1",
                    "text": "Vaccines cause autism",
                    "type": "causal",
                    "domain": "medicine",
                    "source": {"name": "Jane Doe", "role": "article_subject"},
                    "is_verifiable": True,
                }
            ]
        }
    }
