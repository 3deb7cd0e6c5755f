"""Engine configuration using Pydantic Settings.

All thresholds, bands and weights used by the analytics engine live here so
that no calculation carries its own magic numbers. Values may be overridden
through environment variables (prefix ``DEVMETRICS_``) or a ``.env`` file.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from devmetrics.exceptions import ConfigurationError


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


DEFAULT_COMPOSITE_WEIGHTS: dict[str, float] = {
    "commit_frequency": 0.10,
    "pr_velocity": 0.10,
    "code_quality_score": 0.15,
    "collaboration_score": 0.15,
    "skill_diversity": 0.10,
    "repo_stars": 0.15,
    "community_engagement": 0.10,
    "issue_resolution_rate": 0.15,
}

# Value at which a metric contributes half of its maximum composite points
DEFAULT_COMPOSITE_REFERENCES: dict[str, float] = {
    "commit_frequency": 10.0,
    "pr_velocity": 8.0,
    "code_quality_score": 50.0,
    "collaboration_score": 50.0,
    "skill_diversity": 5.0,
    "repo_stars": 100.0,
    "community_engagement": 50.0,
    "issue_resolution_rate": 50.0,
}

DEFAULT_HIGH_DEMAND_SKILLS: list[str] = [
    "typescript",
    "react",
    "python",
    "kubernetes",
    "aws",
]


class Settings(BaseSettings):
    """Engine settings with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="DEVMETRICS_",
    )

    # Application
    app_name: str = "Developer Metrics Engine"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    log_level: str = "INFO"

    # Pairwise comparison
    significance_high: float = 0.25  # relative gap, fraction of the larger value
    significance_medium: float = 0.10
    overall_tie_margin: float = 5.0
    max_recommendations: int = 5

    # Competitive positioning (percentile cut points, exclusive)
    position_top: float = 75.0
    position_above_average: float = 50.0
    position_average: float = 25.0

    # Similarity search
    matching_tolerance: float = 0.10
    default_top_n: int = 5

    # Skill trends
    rapid_growth_threshold: float = 20.0
    projection_factor: float = 1.2
    high_demand_score: float = 85.0
    default_demand_score: float = 60.0
    high_demand_skills: list[str] = Field(default=DEFAULT_HIGH_DEMAND_SKILLS)

    # Composite score
    composite_weights: dict[str, float] = Field(default=DEFAULT_COMPOSITE_WEIGHTS)
    composite_references: dict[str, float] = Field(default=DEFAULT_COMPOSITE_REFERENCES)

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        return v.lower()

    @model_validator(mode="after")
    def validate_bands(self) -> Settings:
        if not 0 <= self.significance_medium <= self.significance_high:
            raise ConfigurationError(
                "significance_medium must be between 0 and significance_high",
                details={
                    "significance_medium": self.significance_medium,
                    "significance_high": self.significance_high,
                },
            )
        if not self.position_average <= self.position_above_average <= self.position_top:
            raise ConfigurationError("position cut points must be non-decreasing")
        if sum(w for w in self.composite_weights.values() if w > 0) <= 0:
            raise ConfigurationError("composite_weights must contain a positive weight")
        missing = set(self.composite_weights) - set(self.composite_references)
        if missing:
            raise ConfigurationError(
                "composite_references is missing weighted metrics",
                details={"missing": sorted(missing)},
            )
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Get cached engine settings."""
    return Settings()
