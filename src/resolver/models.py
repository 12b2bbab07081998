# src/resolver/models.py — v1
"""Resolver domain models: Strategy, Rule."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Strategy(str, Enum):
    """Path-derivation algorithm attached to a rule."""

    HIERARCHICAL = "hierarchical"  # PSR-4: namespace separators become directories
    FLAT = "flat"  # PSR-0: underscores in the remainder become directories too


STRATEGY_ALIASES: dict[str, Strategy] = {
    "hierarchical": Strategy.HIERARCHICAL,
    "psr4": Strategy.HIERARCHICAL,
    "flat": Strategy.FLAT,
    "psr0": Strategy.FLAT,
}


class Rule(BaseModel):
    """A registered (prefix, base_path, strategy) triple."""

    model_config = ConfigDict(frozen=True)

    prefix: str
    base_path: str
    strategy: Strategy = Strategy.HIERARCHICAL

    def matches(self, identifier: str) -> bool:
        """Literal, character-wise prefix test. The empty prefix matches all."""
        return identifier.startswith(self.prefix)
