# src/generator/scanner.py — v2
"""Directory scanner: default full-scan generator.

Walks each rule's base path and records, for every file with the configured
extension, the identifier that rule would resolve to it. A file is kept only
when deriving the path back from that identifier lands on the same file, so
names the rule cannot express (e.g. underscores under a flat rule) are left
to on-demand resolution.

Under a flat rule a file is reachable both with underscores and with dots
(`F/Name/x.py` is `Name_x` and `Name.x`), so both spellings are recorded.
Mixed spellings such as `A.B_c` are not enumerated and resolve on demand.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Sequence
from pathlib import Path

from symresolve.generator.base_generator import BaseMapGenerator
from symresolve.resolver.models import Rule, Strategy
from symresolve.resolver.registry import FLAT_SEPARATOR, NAMESPACE_SEPARATOR, derive_path

logger = logging.getLogger(__name__)

SKIPPED_DIRECTORIES = frozenset({"__pycache__"})


class DirectoryScanGenerator(BaseMapGenerator):
    """Build the identifier map by walking the registered base paths.

    Rules are scanned in reverse try order, so when two rules yield the same
    identifier the later write, which wins, is the one resolution would pick.
    """

    def __init__(self, extension: str = ".py") -> None:
        self._extension = extension

    def scan(self, rules: Sequence[Rule]) -> dict[str, str]:
        """Scan all base paths and return the identifier→path mapping."""
        t0 = time.perf_counter()
        mapping: dict[str, str] = {}
        for rule in reversed(list(rules)):
            mapping.update(self.scan_rule(rule))

        logger.info(
            "Scanned %d rule(s): %d identifiers in %.3fs",
            len(rules), len(mapping), time.perf_counter() - t0,
        )
        return mapping

    def scan_rule(self, rule: Rule) -> dict[str, str]:
        """Discover every identifier reachable through a single rule."""
        root = Path(rule.base_path)
        if not root.is_dir():
            logger.warning("Base path is not a directory, skipping: %s", root)
            return {}

        found: dict[str, str] = {}
        for path in sorted(root.rglob(f"*{self._extension}")):
            if not path.is_file():
                continue
            relative = path.relative_to(root)
            if SKIPPED_DIRECTORIES.intersection(relative.parts):
                continue
            identifiers = [
                identifier for identifier in self.identifiers_for(rule, relative)
                if os.path.normpath(derive_path(rule, identifier, self._extension))
                == os.path.normpath(str(path))
            ]
            if not identifiers:
                logger.debug("Skipping %s: not addressable under %r", path, rule.prefix)
            for identifier in identifiers:
                found[identifier] = str(path)
        return found

    def identifiers_for(self, rule: Rule, relative: Path) -> list[str]:
        """Every spelling a path relative to the base path can be reached by."""
        joiners = [NAMESPACE_SEPARATOR]
        if rule.strategy is Strategy.FLAT:
            joiners.insert(0, FLAT_SEPARATOR)
        spellings = (self.identifier_for(rule, relative, joiner) for joiner in joiners)
        return list(dict.fromkeys(s for s in spellings if s is not None))

    def identifier_for(
        self, rule: Rule, relative: Path, joiner: str | None = None,
    ) -> str | None:
        """Return the identifier a path relative to the base path maps to.

        The rule's own separator is used unless joiner is given.
        """
        if not relative.name.endswith(self._extension):
            return None
        parts = list(relative.parts)
        parts[-1] = parts[-1][: len(parts[-1]) - len(self._extension)]
        if not all(parts):
            return None

        if joiner is None:
            joiner = FLAT_SEPARATOR if rule.strategy is Strategy.FLAT else NAMESPACE_SEPARATOR
        remainder = joiner.join(parts)
        if rule.prefix and not rule.prefix.endswith((NAMESPACE_SEPARATOR, FLAT_SEPARATOR)):
            remainder = joiner + remainder
        return rule.prefix + remainder
