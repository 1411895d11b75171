# src/editorprefs/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for cache, remote-config, template and logging settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from editorprefs.cache.models import DEFAULT_EVICTION_LADDER, ONE_DAY_MS


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Local cache ===
    cache_backend: Literal["memory", "sqlite", "json"] = "sqlite"
    cache_root: Path = Path("~/.editorprefs/cache")
    cache_quota_bytes: int = 5 * 1024 * 1024
    cache_max_safe_attempts: int = len(DEFAULT_EVICTION_LADDER)

    # === Remote configuration ===
    remote_config_backend: Literal["json", "memory"] = "json"
    remote_config_root: Path = Path("~/.scriptedrc")
    platform_override: str = ""

    # === Content assist templates ===
    templates_file: str = ""
    templates_max_age_ms: int = ONE_DAY_MS

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: str = ""
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("platform_override")
    @classmethod
    def normalize_platform(cls, v: str) -> str:  # noqa: N805
        return v.strip().lower()

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_quota_bytes <= 0:
            errors.append("CACHE_QUOTA_BYTES must be > 0")

        ladder_size = len(DEFAULT_EVICTION_LADDER)
        if not 0 <= self.cache_max_safe_attempts <= ladder_size:
            errors.append(
                f"CACHE_MAX_SAFE_ATTEMPTS must be between 0 and {ladder_size}"
            )

        if self.templates_max_age_ms <= 0:
            errors.append("TEMPLATES_MAX_AGE_MS must be > 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or one-off CLI runs).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
