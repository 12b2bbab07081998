# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Builds small source trees on disk under tmp_path. No external services.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from symresolve.cache.memory_store import MemoryCacheStore
from symresolve.resolver.registry import Registry
from symresolve.resolver.resolver import Resolver


def _touch(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content or f"# {path.stem}\n", encoding="utf-8")
    return path


# === FIXTURES: Source trees ===


@pytest.fixture
def classes_dir(tmp_path: Path) -> Path:
    """Tree with a hierarchical (PSR4) and a flat (PSR0) base directory.

    PSR4/Class1.py, PSR4/Class2.py, PSR4/Namespace1/Class1.py
    PSR0/Test/Class1.py
    """
    root = tmp_path / "Classes"
    _touch(root / "PSR4" / "Class1.py")
    _touch(root / "PSR4" / "Class2.py")
    _touch(root / "PSR4" / "Namespace1" / "Class1.py")
    _touch(root / "PSR0" / "Test" / "Class1.py")
    return root


@pytest.fixture
def psr4_dir(classes_dir: Path) -> Path:
    return classes_dir / "PSR4"


@pytest.fixture
def psr0_dir(classes_dir: Path) -> Path:
    return classes_dir / "PSR0"


@pytest.fixture
def touch():
    """Create a file (and its parents) and return its path."""
    return _touch


# === FIXTURES: Resolvers ===


@pytest.fixture
def memory_store() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def resolver(psr0_dir: Path, psr4_dir: Path, memory_store: MemoryCacheStore) -> Resolver:
    """Resolver with a flat and a hierarchical wildcard rule, in-memory cache."""
    r = Resolver(registry=Registry(), cache_store=memory_store)
    r.add_rule("", psr0_dir, "flat")
    r.add_rule("", psr4_dir)
    return r
