# src/cache/file_store.py — v1
"""Persistent file cache store (CACHE_MODE=file).

The mapping is written as a generated Python module holding a single
``IDENTIFIER_MAP`` dict literal. The file is read back with
``ast.literal_eval`` and is never executed. It is a point-in-time snapshot:
every write replaces it wholesale, and it may be deleted at any time.
"""

from __future__ import annotations

import ast
import logging
import os
import tempfile
from pathlib import Path
from pprint import pformat

from symresolve.cache.base_cache_store import BaseCacheStore

logger = logging.getLogger(__name__)

MAP_VARIABLE = "IDENTIFIER_MAP"

_HEADER = (
    "# Generated by symresolve. Do not edit.\n"
    "# Safe to delete: it is rebuilt on the next cold start.\n"
)


class FileCacheStore(BaseCacheStore):
    """File-backed cache store, loaded once per process and memoized."""

    def __init__(
        self,
        path: Path | str | None = None,
        cache_root: Path | str | None = None,
    ) -> None:
        self._path = Path(path).expanduser() if path else None
        root = cache_root if cache_root else tempfile.gettempdir()
        self._root = Path(root).expanduser()
        self._loaded: dict[str, dict[str, str] | None] = {}

    def get(self, key: str) -> dict[str, str] | None:
        """Retrieve the mapping, reading the file on first access only."""
        if key not in self._loaded:
            self._loaded[key] = self._read(self._entry_path(key))
        return self._loaded[key]

    def put(self, key: str, value: dict[str, str], ttl: int | None = None) -> None:
        """Replace the mapping and rewrite the whole file.

        A failed write is logged and swallowed; the in-process copy is kept.
        """
        self._loaded[key] = value
        path = self._entry_path(key)
        try:
            _atomic_write(path, render_map(value))
        except OSError as e:
            logger.warning("Failed to write cache file %s: %s", path, e)

    def delete(self, key: str) -> None:
        """Remove the cache file and forget the loaded copy."""
        self._loaded.pop(key, None)
        path = self._entry_path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to remove cache file %s: %s", path, e)

    def exists(self, key: str) -> bool:
        if self._loaded.get(key) is not None:
            return True
        return self._entry_path(key).is_file()

    def path_for(self, key: str) -> Path:
        """Return the file a key is persisted to."""
        return self._entry_path(key)

    def _entry_path(self, key: str) -> Path:
        if self._path is not None:
            return self._path
        safe_key = "".join(c if c.isalnum() or c in "-_" else "_" for c in key)
        return self._root / f"{safe_key}.py"

    def _read(self, path: Path) -> dict[str, str] | None:
        if not path.is_file():
            return None
        try:
            return parse_map(path.read_text(encoding="utf-8"))
        except (OSError, SyntaxError, ValueError) as e:
            logger.warning("Ignoring unreadable cache file %s: %s", path, e)
            return None


def render_map(mapping: dict[str, str]) -> str:
    """Render a mapping as the source of a generated module."""
    body = pformat(dict(sorted(mapping.items())), indent=4, width=100, sort_dicts=False)
    return f"{_HEADER}\n{MAP_VARIABLE} = {body}\n"


def parse_map(source: str) -> dict[str, str]:
    """Extract the mapping literal from generated module source.

    Raises:
        ValueError: If the source holds no valid string→string mapping.
        SyntaxError: If the source is not valid Python.
    """
    tree = ast.parse(source)
    for node in tree.body:
        if (
            isinstance(node, ast.Assign)
            and len(node.targets) == 1
            and isinstance(node.targets[0], ast.Name)
            and node.targets[0].id == MAP_VARIABLE
        ):
            value = ast.literal_eval(node.value)
            if not isinstance(value, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in value.items()
            ):
                raise ValueError(f"{MAP_VARIABLE} is not a str→str mapping")
            return value
    raise ValueError(f"No {MAP_VARIABLE} assignment found")


def _atomic_write(path: Path, content: str) -> None:
    """Write to a sibling temp file, then rename over the target."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=str(path.parent), prefix=f".{path.stem}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        os.replace(tmp_name, path)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise
