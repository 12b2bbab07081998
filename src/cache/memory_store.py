# src/cache/memory_store.py — v1
"""Process-local in-memory cache store (CACHE_MODE=memory).

Lost when the process exits. No serialization and no TTL.
"""

from __future__ import annotations

import logging

from symresolve.cache.base_cache_store import BaseCacheStore

logger = logging.getLogger(__name__)


class MemoryCacheStore(BaseCacheStore):
    """Plain dict-backed cache store."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, str]] = {}

    def get(self, key: str) -> dict[str, str] | None:
        """Retrieve the mapping stored under key."""
        return self._data.get(key)

    def put(self, key: str, value: dict[str, str], ttl: int | None = None) -> None:
        """Store a mapping (last write wins, ttl ignored)."""
        self._data[key] = value

    def delete(self, key: str) -> None:
        """Remove a mapping."""
        self._data.pop(key, None)

    def exists(self, key: str) -> bool:
        return key in self._data
