# moderation/service/config.py

"""Application configuration using Pydantic Settings.

Manages environment variables, defaults, and validation rules.
"""

from pathlib import Path
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from moderation.core.definitions import Severity


class Settings(BaseSettings):
    """Global application settings.

    Loads values from environment variables (prefix 'MODERATION_') or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MODERATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Core Settings
    log_level: str = Field(default="INFO", description="Root logging level.")

    rules_path: Optional[Path] = Field(
        default=None,
        description="Alternative rule catalogue; the bundled rules.yaml when unset.",
    )

    # Description formatting
    bullet_max_length: int = Field(
        default=100,
        gt=0,
        description="Paragraphs at or above this length are never turned into bullets.",
    )

    bullet_min_items: int = Field(
        default=3,
        ge=2,
        description="Minimum comma-separated items for a paragraph to become a list.",
    )

    # Audit
    snippet_length: int = Field(
        default=100,
        gt=0,
        description="Characters of flagged text kept in audit entries.",
    )

    default_severity: str = Field(
        default=Severity.MEDIUM,
        description="Severity assigned to flagged content when the caller gives none.",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the level is one logging understands."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("default_severity")
    @classmethod
    def validate_severity(cls, v: str) -> str:
        """Ensure severity is one of low/medium/high."""
        severity = v.strip().lower()
        if severity not in Severity.ALL:
            raise ValueError(f"Severity must be one of {Severity.ALL}")
        return severity


# Singleton settings instance
settings = Settings()
