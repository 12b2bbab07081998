# src/cache/models.py — v1
"""Cache domain models: CacheMode and backend defaults."""

from __future__ import annotations

from enum import Enum

DEFAULT_CACHE_KEY = "symresolve_identifier_map"
DEFAULT_TTL_SECONDS = 604_800  # one week


class CacheMode(str, Enum):
    """Closed set of cache backends selectable through configuration."""

    NONE = "none"
    MEMORY = "memory"
    FILE = "file"
    SHARED = "shared"
    AUTO = "auto"

    @classmethod
    def values(cls) -> list[str]:
        return [m.value for m in cls]
