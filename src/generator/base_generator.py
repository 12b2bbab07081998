# src/generator/base_generator.py — v1
"""Full-scan generator interface.

A generator builds a complete identifier→path mapping from scratch. The
resolver only calls it on a cold start (no cached mapping) or after an
explicit reset, and merges whatever it returns into the cache store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from symresolve.resolver.models import Rule


class BaseMapGenerator(ABC):
    """Produces a complete, deduplicated identifier→path mapping."""

    @abstractmethod
    def scan(self, rules: Sequence[Rule]) -> dict[str, str]:
        """Scan every rule's base path.

        On duplicate identifiers the most recently scanned path wins.
        """


class CallableGenerator(BaseMapGenerator):
    """Adapt a plain ``rules -> mapping`` function to the generator interface."""

    def __init__(self, func: Callable[[Sequence[Rule]], dict[str, str]]) -> None:
        self._func = func

    def scan(self, rules: Sequence[Rule]) -> dict[str, str]:
        return dict(self._func(rules))
