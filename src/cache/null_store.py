# src/cache/null_store.py — v1
"""Disabled cache store (CACHE_MODE=none).

Holds nothing: every lookup is a guaranteed miss and writes are discarded.
"""

from __future__ import annotations

from symresolve.cache.base_cache_store import BaseCacheStore


class DisabledCacheStore(BaseCacheStore):
    """No-op cache store."""

    enabled = False

    def get(self, key: str) -> dict[str, str] | None:
        return None

    def put(self, key: str, value: dict[str, str], ttl: int | None = None) -> None:
        return None

    def delete(self, key: str) -> None:
        return None

    def exists(self, key: str) -> bool:
        return False
