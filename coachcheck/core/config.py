"""Application configuration using pydantic-settings.

Every setting can be overridden with a ``COACHCHECK_``-prefixed environment
variable (``COACHCHECK_DEFAULT_SCORING_PROFILE=lifestyle``) or a ``.env``
file in the working directory.
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ScoringProfileKey = Literal["lifestyle", "high-performance", "moderate", "custom"]


class Settings(BaseSettings):
    """Service settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="COACHCHECK_",
        case_sensitive=False,
        extra="ignore",
    )

    env: Literal["dev", "test", "staging", "prod"] = "dev"
    log_level: str = "INFO"

    # Traffic light profile for clients without one of their own
    default_scoring_profile: ScoringProfileKey = "moderate"

    # Change from the historical mean needed to call a trend (points / kg)
    score_trend_delta: float = Field(5.0, ge=0)
    body_weight_trend_delta: float = Field(0.5, ge=0)

    insights_enabled: bool = True
    insight_model_id: str = "gpt-4o-mini"
    insight_model_version: str = "2024-07-18"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def is_dev(self) -> bool:
        """Check if running in development mode."""
        return self.env == "dev"

    @property
    def is_prod(self) -> bool:
        """Check if running in production mode."""
        return self.env == "prod"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
