# src/logging/context.py — v2
"""Contextual logging support: attach the identifier being resolved and the
active cache backend to log records."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

_identifier: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "identifier", default=None
)
_backend: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "backend", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    identifier: str | None = None
    backend: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(identifier=_identifier.get(), backend=_backend.get())


@contextmanager
def resolution_context(identifier: str, backend: str | None = None) -> Iterator[None]:
    """Bind identifier (and backend) for the duration of one resolution."""
    id_token = _identifier.set(identifier)
    backend_token = _backend.set(backend)
    try:
        yield
    finally:
        _backend.reset(backend_token)
        _identifier.reset(id_token)


def clear_context() -> None:
    """Reset all context variables."""
    _identifier.set(None)
    _backend.set(None)
