"""Application settings using Pydantic BaseSettings for environment variable management."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Global engine settings loaded from environment variables.

    Every field has a default so the engine runs without any configuration;
    a ``.env`` file or environment variables override them.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log output format (json for production, console for dev)
        max_claims: Maximum number of claims evaluated per request
        max_concurrency: Claims evaluated concurrently within one batch
        max_search_results: Evidence items requested per claim
        parallel_evaluation: Evaluate claims of a batch concurrently
        strong_consensus_ratio: Support ratio at or above which consensus is strong
        moderate_consensus_ratio: Support ratio at or above which consensus is moderate
        minimum_quality_studies: Tier 1-2 studies needed before judging consensus
        emerging_research_years: Recency window (years) for emerging research
        daily_cost_cap: Daily spend cap for paid evidence lookups (USD)
    """

    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: json or console"
    )
    max_claims: int = Field(
        default=5,
        ge=1,
        description="Maximum claims evaluated per request"
    )
    max_concurrency: int = Field(
        default=3,
        ge=1,
        description="Claims evaluated concurrently within one batch"
    )
    max_search_results: int = Field(
        default=10,
        ge=1,
        description="Evidence items requested per claim"
    )
    parallel_evaluation: bool = Field(
        default=True,
        description="Evaluate the claims of a batch concurrently"
    )
    strong_consensus_ratio: float = Field(
        default=0.90,
        ge=0.5,
        le=1.0,
        description="Weighted support ratio for strong consensus"
    )
    moderate_consensus_ratio: float = Field(
        default=0.70,
        ge=0.5,
        le=1.0,
        description="Weighted support ratio for moderate consensus"
    )
    minimum_quality_studies: int = Field(
        default=3,
        ge=1,
        description="Tier 1-2 studies required before a consensus verdict"
    )
    emerging_research_years: int = Field(
        default=3,
        ge=0,
        description="Recency window in years for emerging research"
    )
    daily_cost_cap: float = Field(
        default=50.0,
        ge=0.0,
        description="Daily cost cap for paid evidence lookups (USD)"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Singleton instance - import this throughout the application
settings = Settings()
