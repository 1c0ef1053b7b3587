"""
Application settings using Pydantic.

Loads configuration from environment variables with validation and type coercion.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ModelSettings(BaseSettings):
    """Prediction engine defaults and grid sizes."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="MODEL_", extra="ignore")

    rho: float = Field(
        default=-0.13,
        description="Dixon-Coles low-score correlation parameter",
    )
    goal_line: float = Field(
        default=2.5,
        description="Default bookmaker total goals line",
    )
    btts_odds: float = Field(
        default=1.80,
        description="Default bookmaker odds for BTTS yes",
    )
    matrix_size: int = Field(
        default=6,
        ge=1,
        description="Scoreline grid size (goals 0..N-1 per side)",
    )
    goal_line_max_total: int = Field(
        default=15,
        ge=0,
        description="Highest match total included in over/under sums",
    )
    btts_max_goals: int = Field(
        default=10,
        ge=0,
        description="Highest opponent goal count included in blank sums",
    )
    min_expected_goals: float = Field(
        default=0.1,
        gt=0,
        description="Floor applied to both expected-goal values",
    )
    value_min_edge: float = Field(
        default=0.05,
        description="Minimum edge for 1X2 value selections (0.05 = 5%)",
    )


class DataSettings(BaseSettings):
    """football-data.co.uk provider settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DATA_", extra="ignore")

    season: str = Field(
        default="2526",
        description="Season folder on football-data.co.uk (e.g. 2526)",
    )
    cache_hours: int = Field(
        default=6,
        description="How long to cache league data",
    )
    timeout: float = Field(
        default=30.0,
        description="HTTP timeout in seconds",
    )
    history_length: int = Field(
        default=6,
        ge=0,
        description="Number of recent matches used for form analysis",
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(
        default=None,
        alias="LOG_FILE",
        description="Optional log file path",
    )
    log_json: bool = Field(
        default=False,
        alias="LOG_JSON",
        description="Render logs as JSON instead of console output",
    )

    # Sub-settings (loaded from same .env)
    model: ModelSettings = Field(default_factory=ModelSettings)
    data: DataSettings = Field(default_factory=DataSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper


# Global settings instance - import this
settings = Settings()
