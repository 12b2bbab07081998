# tests/unit/cache/test_unit_file_store.py — v1
"""Tests for cache/file_store.py — generated-module persistence."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from symresolve.cache.file_store import MAP_VARIABLE, FileCacheStore, parse_map, render_map


@pytest.fixture
def cache_file(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "identifier_map.py"


class TestRenderAndParse:
    def test_render_contains_single_literal(self):
        source = render_map({"B": "/b.py", "A": "/a.py"})
        assert f"{MAP_VARIABLE} = " in source
        assert source.index("'A'") < source.index("'B'")

    def test_parse_rendered(self):
        mapping = {"Namespace1.Class1": "/base/Namespace1/Class1.py", "X": "C:\\x.py"}
        assert parse_map(render_map(mapping)) == mapping

    def test_parse_empty(self):
        assert parse_map(render_map({})) == {}

    def test_parse_rejects_missing_assignment(self):
        with pytest.raises(ValueError, match=MAP_VARIABLE):
            parse_map("OTHER = {}\n")

    def test_parse_rejects_non_string_values(self):
        with pytest.raises(ValueError):
            parse_map(f"{MAP_VARIABLE} = {{'a': 1}}\n")

    def test_parse_does_not_execute_code(self):
        with pytest.raises(ValueError):
            parse_map(f"{MAP_VARIABLE} = __import__('os').getcwd()\n")


class TestFileCacheStore:
    def test_get_missing_file(self, cache_file):
        store = FileCacheStore(path=cache_file)
        assert store.get("k") is None
        assert not store.exists("k")

    def test_put_writes_file(self, cache_file):
        store = FileCacheStore(path=cache_file)
        store.put("k", {"A": "/a.py"})
        assert cache_file.is_file()
        assert parse_map(cache_file.read_text(encoding="utf-8")) == {"A": "/a.py"}
        assert store.exists("k")

    def test_survives_new_instance(self, cache_file):
        FileCacheStore(path=cache_file).put("k", {"A": "/a.py"})
        assert FileCacheStore(path=cache_file).get("k") == {"A": "/a.py"}

    def test_loads_file_once(self, cache_file):
        FileCacheStore(path=cache_file).put("k", {"A": "/a.py"})
        store = FileCacheStore(path=cache_file)
        assert store.get("k") == {"A": "/a.py"}
        cache_file.write_text(render_map({"B": "/b.py"}), encoding="utf-8")
        assert store.get("k") == {"A": "/a.py"}

    def test_put_rewrites_whole_mapping(self, cache_file):
        store = FileCacheStore(path=cache_file)
        store.put("k", {"A": "/a.py"})
        store.put("k", {"B": "/b.py"})
        assert parse_map(cache_file.read_text(encoding="utf-8")) == {"B": "/b.py"}

    def test_no_temp_files_left_behind(self, cache_file):
        store = FileCacheStore(path=cache_file)
        store.put("k", {"A": "/a.py"})
        assert [p.name for p in cache_file.parent.iterdir()] == [cache_file.name]

    def test_delete_removes_file(self, cache_file):
        store = FileCacheStore(path=cache_file)
        store.put("k", {"A": "/a.py"})
        store.delete("k")
        assert not cache_file.exists()
        assert store.get("k") is None

    def test_delete_missing_file(self, cache_file):
        FileCacheStore(path=cache_file).delete("k")

    def test_corrupt_file_is_a_miss(self, cache_file):
        cache_file.parent.mkdir(parents=True)
        cache_file.write_text("this is not python {", encoding="utf-8")
        assert FileCacheStore(path=cache_file).get("k") is None

    def test_write_failure_is_swallowed(self, cache_file):
        store = FileCacheStore(path=cache_file)
        with patch("symresolve.cache.file_store._atomic_write", side_effect=OSError("disk full")):
            store.put("k", {"A": "/a.py"})
        assert store.get("k") == {"A": "/a.py"}
        assert not cache_file.exists()

    def test_path_generated_from_key(self, tmp_path):
        store = FileCacheStore(cache_root=tmp_path)
        assert store.path_for("my:key") == tmp_path / "my_key.py"
        store.put("my:key", {"A": "/a.py"})
        assert (tmp_path / "my_key.py").is_file()
