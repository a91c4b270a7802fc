# src/config/settings.py — v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings: cache backend,
report computation limits, object storage location and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Report cache ===
    cache_backend: Literal["memory", "redis"] = "memory"
    cache_ttl_s: float | None = 300.0
    cache_redis_url: str = ""
    cache_namespace: str = "filepanel"
    cache_single_flight: bool = True

    # === Report computation ===
    report_timeout_s: float = 30.0

    # === Object storage ===
    storage_backend: Literal["s3"] = "s3"
    storage_bucket: str = ""
    storage_prefix: str = "files/"
    storage_region: str = ""
    storage_endpoint_url: str = ""

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("report_timeout_s")
    @classmethod
    def validate_report_timeout(cls, v: float) -> float:  # noqa: N805
        if v <= 0:
            raise ValueError("report_timeout_s must be > 0")
        return v

    @field_validator("cache_ttl_s")
    @classmethod
    def validate_cache_ttl(cls, v: float | None) -> float | None:  # noqa: N805
        """A TTL of None disables expiry; zero or negative TTLs are rejected."""
        if v is not None and v <= 0:
            raise ValueError("cache_ttl_s must be > 0 or unset")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_BACKEND=redis requires CACHE_REDIS_URL")

        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def normalized_storage_prefix(self) -> str:
        """Storage prefix with exactly one trailing slash, or empty."""
        prefix = self.storage_prefix.strip("/")
        return f"{prefix}/" if prefix else ""


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or one-off commands).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
