# src/cache/base_cache_store.py — v2
"""Abstract cache store interface.

Every backend stores one identifier→path mapping per key. Reads return
``None`` for "not found"; writes never raise on I/O failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends."""

    #: False for backends that never hold anything.
    enabled: bool = True

    @abstractmethod
    def get(self, key: str) -> dict[str, str] | None:
        """Retrieve the mapping stored under key, or None on a miss."""

    @abstractmethod
    def put(self, key: str, value: dict[str, str], ttl: int | None = None) -> None:
        """Store the whole mapping under key."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove everything stored under key."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True when key currently holds a mapping."""

    @property
    def backend_name(self) -> str:
        """Short name used in log records."""
        return type(self).__name__.removesuffix("CacheStore").lower()
