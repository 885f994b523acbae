"""Engine settings using Pydantic Settings.

Centralized runtime configuration for the form graph. Tax-law figures do
not live here; see calculator.tax_year_config for those.
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class EngineSettings(BaseSettings):
    """Form graph engine settings."""

    model_config = SettingsConfigDict(
        env_prefix="FORMGRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Tax year configuration
    default_tax_year: int = Field(default=2025, description="Tax year used when input does not say")

    # Line evaluation
    max_line_depth: int = Field(
        default=200,
        ge=20,
        description="Maximum nesting of line evaluations before the pass is aborted"
    )
    trace_dependencies: bool = Field(
        default=False,
        description="Log every line-to-line edge at DEBUG while evaluating"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(default=False, description="Emit JSON formatted logs")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> EngineSettings:
    """
    Get cached engine settings instance.

    Returns:
        EngineSettings: Cached settings loaded from environment.
    """
    return EngineSettings()
