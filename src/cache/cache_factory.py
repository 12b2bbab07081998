# src/cache/cache_factory.py — v3
"""Factory for cache store instantiation.

One backend per CacheMode; ``auto`` prefers the shared Redis store and falls
back to the persistent file store.
"""

from __future__ import annotations

import logging

from symresolve.cache.base_cache_store import BaseCacheStore
from symresolve.cache.models import CacheMode
from symresolve.config.settings import ConfigurationError, Settings, parse_cache_mode

logger = logging.getLogger(__name__)


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Resolver settings. Defaults to the in-memory backend.

    Returns:
        Configured BaseCacheStore implementation.

    Raises:
        UnsupportedCacheModeError: If the mode is not a known backend.
        ConfigurationError: If the shared backend is requested without a URL.
    """
    mode = CacheMode.MEMORY if settings is None else parse_cache_mode(settings.cache_mode)

    if mode is CacheMode.NONE:
        from symresolve.cache.null_store import DisabledCacheStore
        return DisabledCacheStore()

    if mode is CacheMode.MEMORY:
        from symresolve.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore()

    if mode is CacheMode.FILE:
        return _file_store(settings)

    if mode is CacheMode.SHARED:
        if not settings.cache_redis_url:
            raise ConfigurationError(
                "SYMRESOLVE_CACHE_REDIS_URL must be set when SYMRESOLVE_CACHE_MODE=shared"
            )
        from symresolve.cache.redis_store import RedisCacheStore
        return RedisCacheStore(
            redis_url=settings.cache_redis_url,
            ttl_seconds=settings.cache_ttl_seconds,
        )

    # CacheMode.AUTO
    store = _shared_store_if_available(settings)
    if store is not None:
        logger.info("Cache mode auto: using shared Redis store")
        return store
    logger.info("Cache mode auto: shared store unavailable, using file store")
    return _file_store(settings)


def _file_store(settings: Settings) -> BaseCacheStore:
    from symresolve.cache.file_store import FileCacheStore
    return FileCacheStore(path=settings.cache_path, cache_root=settings.cache_root)


def _shared_store_if_available(settings: Settings) -> BaseCacheStore | None:
    """Return a Redis store when one is configured, installed and reachable."""
    if not settings.cache_redis_url:
        return None
    try:
        from symresolve.cache.redis_store import RedisCacheStore
        store = RedisCacheStore(
            redis_url=settings.cache_redis_url,
            ttl_seconds=settings.cache_ttl_seconds,
        )
    except ImportError:
        logger.debug("redis package not installed")
        return None
    except ValueError as e:
        logger.warning("Invalid Redis URL %r: %s", settings.cache_redis_url, e)
        return None
    if not store.ping():
        logger.debug("Redis at %s did not answer PING", settings.cache_redis_url)
        store.close()
        return None
    return store
