# tests/unit/cache/test_cache_factory.py — v4
"""Tests for cache/cache_factory.py."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from symresolve.cache.cache_factory import create_cache_store
from symresolve.cache.file_store import FileCacheStore
from symresolve.cache.memory_store import MemoryCacheStore
from symresolve.cache.null_store import DisabledCacheStore
from symresolve.config.settings import ConfigurationError, Settings, UnsupportedCacheModeError


class TestCreateCacheStore:
    def test_default_memory(self):
        assert isinstance(create_cache_store(), MemoryCacheStore)

    def test_none_backend(self):
        s = Settings(_env_file=None, cache_mode="none")
        assert isinstance(create_cache_store(s), DisabledCacheStore)

    def test_file_backend_with_path(self, tmp_path):
        s = Settings(_env_file=None, cache_mode="file", cache_path=tmp_path / "map.py")
        store = create_cache_store(s)
        assert isinstance(store, FileCacheStore)
        assert store.path_for(s.cache_key) == tmp_path / "map.py"

    def test_file_backend_generated_path(self, tmp_path):
        s = Settings(_env_file=None, cache_mode="file", cache_root=tmp_path)
        store = create_cache_store(s)
        assert store.path_for(s.cache_key).parent == tmp_path

    def test_shared_missing_url(self):
        s = Settings(_env_file=None, cache_mode="shared", cache_redis_url="")
        with pytest.raises(ConfigurationError, match="REDIS_URL"):
            create_cache_store(s)

    def test_shared_backend(self):
        from symresolve.cache.redis_store import RedisCacheStore
        s = Settings(
            _env_file=None, cache_mode="shared",
            cache_redis_url="redis://localhost:6379/0", cache_ttl_seconds=30,
        )
        store = create_cache_store(s)
        assert isinstance(store, RedisCacheStore)
        assert store._ttl == 30

    def test_auto_without_url_uses_file(self, tmp_path):
        s = Settings(_env_file=None, cache_mode="auto", cache_root=tmp_path)
        assert isinstance(create_cache_store(s), FileCacheStore)

    def test_auto_uses_redis_when_reachable(self):
        from symresolve.cache.redis_store import RedisCacheStore
        s = Settings(_env_file=None, cache_mode="auto", cache_redis_url="redis://localhost:6379/0")
        with patch.object(RedisCacheStore, "ping", return_value=True):
            assert isinstance(create_cache_store(s), RedisCacheStore)

    def test_auto_falls_back_when_unreachable(self, tmp_path):
        from symresolve.cache.redis_store import RedisCacheStore
        s = Settings(
            _env_file=None, cache_mode="auto",
            cache_redis_url="redis://localhost:6379/0", cache_root=tmp_path,
        )
        with patch.object(RedisCacheStore, "ping", return_value=False):
            assert isinstance(create_cache_store(s), FileCacheStore)

    def test_unsupported_mode(self):
        """Settings validation rejects unknown modes before the factory is reached."""
        with pytest.raises(UnsupportedCacheModeError):
            Settings(_env_file=None, cache_mode="apcu")

    def test_unsupported_mode_bypassing_validation(self):
        s = Settings.model_construct(cache_mode="invalid")
        with pytest.raises(UnsupportedCacheModeError, match="invalid"):
            create_cache_store(s)
