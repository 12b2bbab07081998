# src/resolver/pruner.py — v1
"""Stale entry detection for cached identifier maps.

An entry is stale once the file it points to is no longer a regular file.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def find_stale_entries(mapping: dict[str, str]) -> list[str]:
    """Return identifiers whose cached path no longer exists, in map order."""
    return [identifier for identifier, path in mapping.items() if not Path(path).is_file()]


def prune_mapping(mapping: dict[str, str]) -> tuple[dict[str, str], list[str]]:
    """Split a mapping into its still-valid entries and the removed identifiers.

    The input mapping is not modified.
    """
    stale = set(find_stale_entries(mapping))
    kept = {k: v for k, v in mapping.items() if k not in stale}
    removed = [k for k in mapping if k in stale]
    for identifier in removed:
        logger.debug("Pruning stale entry %s -> %s", identifier, mapping[identifier])
    return kept, removed
