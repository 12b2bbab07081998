# tests/unit/logging/test_context.py — v2
"""Tests for logging/context.py — resolution context variables."""

from __future__ import annotations

import pytest

from symresolve.logging.context import LogContext, clear_context, get_context, resolution_context


class TestResolutionContext:
    def setup_method(self):
        clear_context()

    def test_empty_by_default(self):
        assert get_context() == LogContext()
        assert get_context().as_dict() == {}

    def test_bound_inside_block(self):
        with resolution_context("A.B", "redis"):
            ctx = get_context()
            assert ctx.identifier == "A.B"
            assert ctx.backend == "redis"
        assert get_context().identifier is None

    def test_nested_blocks_restore_outer(self):
        with resolution_context("Outer", "memory"):
            with resolution_context("Inner"):
                assert get_context().as_dict() == {"identifier": "Inner"}
            assert get_context().identifier == "Outer"

    def test_restored_after_exception(self):
        with pytest.raises(RuntimeError):
            with resolution_context("A.B"):
                raise RuntimeError("boom")
        assert get_context().identifier is None
