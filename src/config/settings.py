# src/config/settings.py — v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings: the AI provider,
the key-value cache backend and its TTL tiers, free-plan usage limits, and
logging.
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

    # === LLM PROVIDER ===
    llm_default_provider: str = "google"
    llm_default_model: str = "gemini-2.0-flash-001"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 8192
    google_api_key: str = ""

    # Per-task LLM assignment ("provider:model"), highest priority
    llm_analysis: str = ""
    llm_rewrite: str = ""
    llm_job_match: str = ""

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["none", "memory", "redis"] = "redis"
    cache_redis_url: str = ""
    fingerprint_length: int = 32

    # TTL tiers (seconds)
    cache_ttl_analysis: int = 7 * 24 * 60 * 60
    cache_ttl_extracted_text: int = 30 * 24 * 60 * 60
    cache_ttl_fixes: int = 7 * 24 * 60 * 60
    cache_ttl_resume_record: int = 30 * 24 * 60 * 60
    cache_ttl_user_profile: int = 5 * 60
    cache_ttl_interview_feedback: int = 7 * 24 * 60 * 60

    # === Usage limits (free and starter plans) ===
    usage_counter_ttl: int = 32 * 24 * 60 * 60
    usage_limit_resume_analysis: int = 5
    usage_limit_cover_letter: int = 3
    usage_limit_mock_interview: int = 2
    usage_limit_study_plan: int = 3

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("fingerprint_length")
    @classmethod
    def validate_fingerprint_length(cls, v: int) -> int:
        """Fingerprint prefix must fit inside a SHA-256 hex digest."""
        if not 8 <= v <= 64:
            raise ValueError("fingerprint_length must be between 8 and 64")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        ttl_fields = [name for name in type(self).model_fields if name.startswith("cache_ttl_")]
        for name in ttl_fields + ["usage_counter_ttl"]:
            if getattr(self, name) <= 0:
                errors.append(f"{name.upper()} must be > 0")

        limit_fields = [name for name in type(self).model_fields if name.startswith("usage_limit_")]
        for name in limit_fields:
            if getattr(self, name) < 0:
                errors.append(f"{name.upper()} must be >= 0")

        # Counters must outlive the month they count.
        if self.usage_counter_ttl < 31 * 24 * 60 * 60:
            errors.append("USAGE_COUNTER_TTL must cover a full calendar month")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def cache_configured(self) -> bool:
        """Whether a cache backend can be built from these settings."""
        if not self.cache_enabled or self.cache_backend == "none":
            return False
        if self.cache_backend == "redis":
            return bool(self.cache_redis_url)
        return True


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-request config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
