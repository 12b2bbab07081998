# src/resolver/registry.py — v2
"""Prefix rule registry and identifier→path derivation.

Rules are kept per strategy in registration order. Candidate order is
total and deterministic: every matching flat rule first, then every matching
hierarchical rule. No longest-prefix priority is applied.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

from symresolve.config.settings import ConfigurationError
from symresolve.resolver.models import STRATEGY_ALIASES, Rule, Strategy

logger = logging.getLogger(__name__)

NAMESPACE_SEPARATOR = "."
FLAT_SEPARATOR = "_"

# Flat rules are tried before hierarchical ones.
STRATEGY_ORDER: tuple[Strategy, ...] = (Strategy.FLAT, Strategy.HIERARCHICAL)


class InvalidStrategyError(ConfigurationError):
    """Raised when a rule is registered with an unknown strategy."""

    def __init__(self, strategy: object) -> None:
        super().__init__(
            f"Unknown resolution strategy {strategy!r}. "
            f"Expected one of: {', '.join(sorted(STRATEGY_ALIASES))}"
        )
        self.strategy = strategy


def parse_strategy(value: str | Strategy) -> Strategy:
    """Coerce a strategy name (case-insensitive, psr0/psr4 accepted)."""
    if isinstance(value, Strategy):
        return value
    if isinstance(value, str):
        strategy = STRATEGY_ALIASES.get(value.strip().lower())
        if strategy is not None:
            return strategy
    raise InvalidStrategyError(value)


def normalize_base_path(path: str | os.PathLike[str]) -> str:
    """Strip trailing separators; the filesystem root is kept as is."""
    text = os.fspath(path)
    stripped = text.rstrip("/" + os.sep)
    return stripped or text[:1]


def derive_path(rule: Rule, identifier: str, extension: str = ".py") -> str:
    """Map an identifier to the file it would live in under rule.

    Exactly ``len(rule.prefix)`` characters are stripped from the identifier.
    In the remainder, namespace separators (and, for flat rules, underscores)
    become path separators; the result is joined to the rule's base path.
    """
    remainder = identifier[len(rule.prefix):]
    if rule.strategy is Strategy.FLAT:
        remainder = remainder.replace(FLAT_SEPARATOR, os.sep)
    remainder = remainder.replace(NAMESPACE_SEPARATOR, os.sep) + extension
    if not remainder.startswith(os.sep):
        remainder = os.sep + remainder
    return rule.base_path.rstrip(os.sep) + remainder


class Registry:
    """Ordered collections of prefix rules, partitioned by strategy."""

    def __init__(self, extension: str = ".py") -> None:
        self._extension = extension
        self._rules: dict[Strategy, list[Rule]] = {strategy: [] for strategy in STRATEGY_ORDER}
        self._ordered: list[Rule] | None = None

    @property
    def extension(self) -> str:
        return self._extension

    def add_rule(
        self,
        prefix: str,
        base_path: str | os.PathLike[str],
        strategy: str | Strategy = Strategy.HIERARCHICAL,
    ) -> Rule:
        """Register a base path for a prefix.

        Args:
            prefix: Literal identifier prefix; "" applies to every identifier.
            base_path: Directory to look in. Trailing separators are stripped.
            strategy: "hierarchical" (default) or "flat"; psr4/psr0 accepted.

        Returns:
            The stored Rule.

        Raises:
            InvalidStrategyError: If strategy is not recognised.
        """
        parsed = parse_strategy(strategy)
        path = normalize_base_path(base_path)
        rule = Rule(prefix=prefix, base_path=path, strategy=parsed)
        self._rules[parsed].append(rule)
        self._ordered = None
        logger.debug("Registered %s rule %r -> %s", parsed.value, prefix, path)
        return rule

    def rules(self) -> list[Rule]:
        """All rules, in candidate order."""
        if self._ordered is None:
            self._ordered = [rule for strategy in STRATEGY_ORDER for rule in self._rules[strategy]]
        return list(self._ordered)

    def base_paths(self) -> list[str]:
        """Distinct base paths, in candidate order."""
        return list(dict.fromkeys(rule.base_path for rule in self.rules()))

    def candidates(self, identifier: str) -> Iterator[Rule]:
        """Yield every rule whose prefix matches identifier, in try order."""
        for rule in self._ordered or self.rules():
            if rule.matches(identifier):
                yield rule

    def derive_path(self, rule: Rule, identifier: str) -> str:
        """Map an identifier to the file it would live in under rule."""
        return derive_path(rule, identifier, self._extension)

    def __len__(self) -> int:
        return sum(len(rules) for rules in self._rules.values())
