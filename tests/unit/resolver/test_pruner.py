# tests/unit/resolver/test_pruner.py — v1
"""Tests for resolver/pruner.py — stale entry detection."""

from __future__ import annotations

from symresolve.resolver.pruner import find_stale_entries, prune_mapping


class TestPruneMapping:
    def test_keeps_existing_files(self, touch, tmp_path):
        a = touch(tmp_path / "a.py")
        kept, removed = prune_mapping({"A": str(a)})
        assert kept == {"A": str(a)}
        assert removed == []

    def test_removes_missing_files(self, touch, tmp_path):
        a = touch(tmp_path / "a.py")
        mapping = {"A": str(a), "B": str(tmp_path / "b.py"), "C": str(tmp_path / "c.py")}
        kept, removed = prune_mapping(mapping)
        assert kept == {"A": str(a)}
        assert removed == ["B", "C"]

    def test_directory_is_stale(self, tmp_path):
        assert find_stale_entries({"D": str(tmp_path)}) == ["D"]

    def test_input_not_modified(self, tmp_path):
        mapping = {"B": str(tmp_path / "b.py")}
        prune_mapping(mapping)
        assert mapping == {"B": str(tmp_path / "b.py")}
