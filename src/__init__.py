# src/__init__.py — v1
"""symresolve: resolve symbolic identifiers to files through prefix rules,
with a pluggable, self-healing resolution cache."""

from __future__ import annotations

from symresolve.config.settings import ConfigurationError, Settings, UnsupportedCacheModeError
from symresolve.resolver.models import Rule, Strategy
from symresolve.resolver.registry import InvalidStrategyError, Registry
from symresolve.resolver.resolver import Resolver
from symresolve.version import __version__

__all__ = [
    "ConfigurationError",
    "InvalidStrategyError",
    "Registry",
    "Resolver",
    "Rule",
    "Settings",
    "Strategy",
    "UnsupportedCacheModeError",
    "__version__",
]
