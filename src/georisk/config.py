"""
GeoRisk configuration management using pydantic-settings.

Scoring weights, thresholds and boosters are validated once when the
settings are constructed. A bad configuration fails at startup.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed drift when checking that the global weights sum to 1.0
WEIGHT_SUM_TOLERANCE = 0.01


class ScoringWeights(BaseModel):
    """Global weights applied to each component score."""

    direct_match: float = Field(default=0.35, ge=0.0)
    industry: float = Field(default=0.25, ge=0.0)
    geographic: float = Field(default=0.20, ge=0.0)
    business_unit: float = Field(default=0.15, ge=0.0)
    risk_correlation: float = Field(default=0.05, ge=0.0)

    @property
    def total(self) -> float:
        return (
            self.direct_match
            + self.industry
            + self.geographic
            + self.business_unit
            + self.risk_correlation
        )

    @model_validator(mode="after")
    def validate_sum(self) -> "ScoringWeights":
        """Weights must add up to 1.0."""
        if abs(self.total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(
                f"Scoring weights must sum to 1.0 (got {self.total:.4f})"
            )
        return self


class ScoringThresholds(BaseModel):
    """Score thresholds for filtering and bucketing."""

    minimum_score: float = Field(
        default=0.05,
        description="Minimum boosted score for an event to be kept",
    )
    medium_relevance: float = Field(
        default=0.4,
        description="Lower bound of the medium relevance bucket",
    )
    high_relevance: float = Field(
        default=0.7,
        description="Lower bound of the high relevance bucket",
    )

    @model_validator(mode="after")
    def validate_order(self) -> "ScoringThresholds":
        """Thresholds must be strictly increasing and within [0, 1]."""
        if not (
            0.0 <= self.minimum_score
            < self.medium_relevance
            < self.high_relevance
            <= 1.0
        ):
            raise ValueError(
                "Thresholds must satisfy 0 <= minimum_score < medium_relevance "
                f"< high_relevance <= 1.0 (got {self.minimum_score}, "
                f"{self.medium_relevance}, {self.high_relevance})"
            )
        return self


class BoosterConfig(BaseModel):
    """Multipliers applied after combination."""

    severity: dict[str, float] = Field(
        default_factory=lambda: {
            "critical": 1.5,
            "high": 1.3,
            "medium": 1.0,
            "low": 0.7,
        }
    )
    recency: dict[str, float] = Field(
        default_factory=lambda: {
            "immediate": 1.4,
            "short-term": 1.2,
            "medium-term": 1.0,
            "long-term": 0.8,
        }
    )

    @field_validator("severity", "recency")
    @classmethod
    def validate_multipliers(cls, v: dict[str, float]) -> dict[str, float]:
        """Multipliers must be positive; keys are matched lower-cased."""
        for key, value in v.items():
            if value <= 0:
                raise ValueError(f"Multiplier for '{key}' must be positive")
        return {key.lower(): value for key, value in v.items()}


class ScoringConfig(BaseModel):
    """Complete configuration for the relevance engine."""

    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    thresholds: ScoringThresholds = Field(default_factory=ScoringThresholds)
    boosters: BoosterConfig = Field(default_factory=BoosterConfig)

    matching_mode: Literal["substring", "word_boundary"] = Field(
        default="substring",
        description="Keyword matching against event text",
    )
    max_workers: Optional[int] = Field(
        default=None,
        ge=1,
        description="Thread pool size for batch scoring (None = sequential)",
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GEORISK_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production",
    )

    # Application Settings
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # Scoring engine
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    intelligence_tables_path: Optional[Path] = Field(
        default=None,
        description="JSON file replacing the built-in intelligence tables",
    )

    # Stores
    seed_data_path: Optional[Path] = Field(
        default=None,
        description="JSON file with profiles and events for the in-memory stores",
    )

    # API
    default_relevance_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Caller threshold applied on top of the engine floor",
    )
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Ensure critical settings are configured in production."""
        if self.environment == "production" and self.debug:
            raise ValueError("DEBUG must be False in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


# Global settings instance
settings = Settings()
