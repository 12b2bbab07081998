# src/config/settings.py — v3
"""Typed configuration loaded from the environment / .env via pydantic-settings.

Single source of truth for construction-time resolver options. Environment
variables use the ``SYMRESOLVE_`` prefix (e.g. ``SYMRESOLVE_CACHE_MODE=file``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from symresolve.cache.models import DEFAULT_CACHE_KEY, DEFAULT_TTL_SECONDS, CacheMode
from symresolve.logging.logger import parse_size


class ConfigurationError(Exception):
    """Raised when the resolver is configured with a value it cannot honour."""


class UnsupportedCacheModeError(ConfigurationError):
    """Raised when the cache mode is not one of the known backends."""

    def __init__(self, mode: object) -> None:
        super().__init__(
            f"Unsupported cache mode {mode!r}. "
            f"Expected one of: {', '.join(CacheMode.values())}"
        )
        self.mode = mode


def parse_cache_mode(value: object) -> CacheMode:
    """Coerce a raw value to CacheMode.

    Raises:
        UnsupportedCacheModeError: If the value names no known backend.
    """
    if isinstance(value, CacheMode):
        return value
    if isinstance(value, str):
        try:
            return CacheMode(value.strip().lower())
        except ValueError:
            pass
    raise UnsupportedCacheModeError(value)


class Settings(BaseSettings):
    """Resolver settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SYMRESOLVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Cache ===
    cache_mode: CacheMode = CacheMode.MEMORY
    cache_path: Path | None = None
    cache_root: Path | None = None
    cache_key: str = DEFAULT_CACHE_KEY
    cache_ttl_seconds: int = DEFAULT_TTL_SECONDS
    cache_redis_url: str = ""

    # === Resolution ===
    stop_if_not_found: bool = False
    verify_cached_paths: bool = False
    file_extension: str = ".py"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("cache_mode", mode="before")
    @classmethod
    def validate_cache_mode(cls, v: object) -> CacheMode:
        # UnsupportedCacheModeError is not a ValueError, so pydantic lets it
        # propagate unwrapped.
        return parse_cache_mode(v)

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache_ttl_seconds must be > 0")
        return v

    @field_validator("cache_key")
    @classmethod
    def validate_cache_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("cache_key must not be empty")
        return v

    @field_validator("file_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        if v and not v.startswith("."):
            v = f".{v}"
        return v

    @model_validator(mode="after")
    def validate_logging(self) -> Settings:
        """Collect logging option errors into one ConfigurationError."""
        errors: list[str] = []

        try:
            parse_size(self.log_rotation)
        except ValueError as e:
            errors.append(f"log_rotation: {e}")

        if self.log_retention < 0:
            errors.append("log_retention must be >= 0")

        if self.log_file is not None and self.log_file.is_dir():
            errors.append(f"log_file {self.log_file} is a directory")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or embedding hosts).

    Returns:
        Validated Settings instance.

    Raises:
        UnsupportedCacheModeError: If the cache mode is unknown.
        ConfigurationError: If the logging options are inconsistent.
        pydantic.ValidationError: If a field value is out of range.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
