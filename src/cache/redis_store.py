# src/cache/redis_store.py — v2
"""Redis-based cache store (CACHE_MODE=shared).

Requires 'redis' package: pip install redis.
Lets several resolver processes share one mapping. Each write stores the
whole mapping with a TTL that restarts on every write; once it lapses the
store reports a miss and the next access regenerates.
"""

from __future__ import annotations

import json
import logging

from symresolve.cache.base_cache_store import BaseCacheStore
from symresolve.cache.models import DEFAULT_TTL_SECONDS

logger = logging.getLogger(__name__)

_KEY_PREFIX = "symresolve:"


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store for multi-process deployments."""

    def __init__(
        self, redis_url: str, ttl_seconds: int = DEFAULT_TTL_SECONDS
    ) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)
        self._ttl = ttl_seconds

    def get(self, key: str) -> dict[str, str] | None:
        """Retrieve the mapping; any failure is reported as a miss."""
        try:
            data = self._client.get(f"{_KEY_PREFIX}{key}")
        except Exception as e:
            logger.warning("Redis read failed for %s, treating as miss: %s", key, e)
            return None
        if data is None:
            return None
        try:
            value = json.loads(data)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None
        if not isinstance(value, dict):
            logger.warning("Cache entry %s is not a mapping, ignoring", key)
            return None
        return value

    def put(self, key: str, value: dict[str, str], ttl: int | None = None) -> None:
        """Store the mapping and restart its TTL."""
        try:
            self._client.set(
                f"{_KEY_PREFIX}{key}",
                json.dumps(value, sort_keys=True),
                ex=ttl or self._ttl,
            )
        except Exception as e:
            logger.warning("Redis write failed for %s: %s", key, e)

    def delete(self, key: str) -> None:
        """Remove the mapping."""
        try:
            self._client.delete(f"{_KEY_PREFIX}{key}")
        except Exception as e:
            logger.warning("Redis delete failed for %s: %s", key, e)

    def exists(self, key: str) -> bool:
        try:
            return bool(self._client.exists(f"{_KEY_PREFIX}{key}"))
        except Exception as e:
            logger.warning("Redis exists check failed for %s: %s", key, e)
            return False

    def ping(self) -> bool:
        """Return True when the server answers."""
        try:
            return bool(self._client.ping())
        except Exception:
            return False

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
