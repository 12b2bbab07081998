# tests/unit/resolver/test_resolver_models.py — v1
"""Tests for resolver/models.py."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from symresolve.resolver.models import Rule, Strategy


class TestRule:
    def test_empty_prefix_matches_everything(self):
        rule = Rule(prefix="", base_path="/base")
        assert rule.matches("Anything.At.All")
        assert rule.matches("")

    def test_literal_prefix(self):
        rule = Rule(prefix="App.", base_path="/base")
        assert rule.matches("App.User")
        assert not rule.matches("Application")

    def test_frozen(self):
        rule = Rule(prefix="", base_path="/base")
        with pytest.raises(ValidationError):
            rule.prefix = "x"  # type: ignore[misc]

    def test_strategy_from_string(self):
        assert Rule(prefix="", base_path="/b", strategy="flat").strategy is Strategy.FLAT
