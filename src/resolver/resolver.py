# src/resolver/resolver.py — v1
"""Identifier resolver: cache first, prefix rules on a miss.

Resolution flow:
    1. Look the identifier up in the cached mapping (generated on cold start
       when a generator is configured).
    2. On a miss, stop if configured to, otherwise try every candidate rule
       until a derived path is an existing file.
    3. Write a successful fallback back to the cache so the next lookup hits.

Absence is an expected outcome and is reported as ``None``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from typing import TYPE_CHECKING

from symresolve.cache.base_cache_store import BaseCacheStore
from symresolve.cache.memory_store import MemoryCacheStore
from symresolve.cache.models import DEFAULT_CACHE_KEY
from symresolve.logging.context import resolution_context
from symresolve.resolver.models import Rule, Strategy
from symresolve.resolver.pruner import prune_mapping
from symresolve.resolver.registry import Registry

if TYPE_CHECKING:
    from symresolve.config.settings import Settings
    from symresolve.generator.base_generator import BaseMapGenerator

logger = logging.getLogger(__name__)


class Resolver:
    """Owns a rule registry and a cache store handle.

    The resolver is the only writer of the cached mapping. It does no
    locking: one caller resolves one identifier at a time per instance.
    """

    def __init__(
        self,
        registry: Registry | None = None,
        cache_store: BaseCacheStore | None = None,
        generator: BaseMapGenerator | None = None,
        cache_key: str = DEFAULT_CACHE_KEY,
        ttl_seconds: int | None = None,
        stop_if_not_found: bool = False,
        verify_cached_paths: bool = False,
    ) -> None:
        self._registry = registry if registry is not None else Registry()
        self._store = cache_store if cache_store is not None else MemoryCacheStore()
        self._generator = generator
        self._key = cache_key
        self._ttl = ttl_seconds
        self._stop_if_not_found = stop_if_not_found
        self._verify_cached_paths = verify_cached_paths

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        generator: BaseMapGenerator | None = None,
    ) -> Resolver:
        """Build a resolver and its cache backend from settings.

        Raises:
            ConfigurationError: If the cache configuration is invalid.
        """
        from symresolve.cache.cache_factory import create_cache_store
        from symresolve.config.settings import Settings

        settings = settings if settings is not None else Settings()
        return cls(
            registry=Registry(extension=settings.file_extension),
            cache_store=create_cache_store(settings),
            generator=generator,
            cache_key=settings.cache_key,
            ttl_seconds=settings.cache_ttl_seconds,
            stop_if_not_found=settings.stop_if_not_found,
            verify_cached_paths=settings.verify_cached_paths,
        )

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def cache_store(self) -> BaseCacheStore:
        return self._store

    @property
    def mapping(self) -> dict[str, str]:
        """Copy of the currently cached identifier→path mapping."""
        return dict(self._load_map())

    def add_rule(
        self,
        prefix: str,
        base_path: str | os.PathLike[str],
        strategy: str | Strategy = Strategy.HIERARCHICAL,
    ) -> Rule:
        """Register a prefix rule. See Registry.add_rule."""
        return self._registry.add_rule(prefix, base_path, strategy)

    def resolve(self, identifier: str) -> str | None:
        """Resolve identifier to an absolute file path, or None if absent."""
        with resolution_context(identifier, self._store.backend_name):
            mapping = self._load_map()

            cached = mapping.get(identifier)
            stale = False
            if cached is not None:
                if not self._verify_cached_paths or os.path.isfile(cached):
                    logger.debug("Cache hit: %s", cached)
                    return cached
                logger.debug("Cached path vanished, re-resolving: %s", cached)
                stale = True

            path = None
            if self._stop_if_not_found:
                logger.debug("Not in cache and stop_if_not_found is set")
            else:
                path = self._resolve_from_rules(identifier)

            if path is not None:
                self._remember(mapping, identifier, path)
            elif stale:
                self._forget(mapping, identifier)
            else:
                logger.debug("No rule resolved identifier")
            return path

    def resolve_many(self, identifiers: Iterable[str]) -> dict[str, str | None]:
        """Resolve several identifiers, preserving input order."""
        return {identifier: self.resolve(identifier) for identifier in identifiers}

    def warm(self) -> int:
        """Load the cached mapping, generating it on a cold start.

        Returns:
            Number of cached entries.
        """
        return len(self._load_map())

    def reset_cache(self) -> None:
        """Drop everything the backend holds; the next access is a cold start."""
        self._store.delete(self._key)
        logger.info("Cache reset (%s)", self._store.backend_name)

    def prune(self) -> int:
        """Evict cached entries whose file no longer exists.

        Returns:
            Number of entries removed.
        """
        mapping = self._store.get(self._key)
        if not mapping:
            return 0
        kept, removed = prune_mapping(mapping)
        if removed:
            self._store.put(self._key, kept, ttl=self._ttl)
        logger.info("Pruned %d stale entries", len(removed))
        return len(removed)

    def _load_map(self) -> dict[str, str]:
        mapping = self._store.get(self._key)
        if mapping is not None:
            return mapping
        if self._generator is None or not self._store.enabled:
            return {}

        logger.info("Cold start: generating identifier map")
        mapping = dict(self._generator.scan(self._registry.rules()))
        self._store.put(self._key, mapping, ttl=self._ttl)
        return mapping

    def _resolve_from_rules(self, identifier: str) -> str | None:
        for rule in self._registry.candidates(identifier):
            path = self._registry.derive_path(rule, identifier)
            if os.path.isfile(path):
                logger.debug("Resolved via %s rule %r: %s", rule.strategy.value, rule.prefix, path)
                return path
        return None

    def _remember(self, mapping: dict[str, str], identifier: str, path: str) -> None:
        if not self._store.enabled:
            return
        mapping[identifier] = path
        self._store.put(self._key, mapping, ttl=self._ttl)

    def _forget(self, mapping: dict[str, str], identifier: str) -> None:
        mapping.pop(identifier, None)
        self._store.put(self._key, mapping, ttl=self._ttl)
