# src/logging/context.py — v1
"""Contextual logging support — attach operation and pid to log records.

A forked child inherits its parent's context variables, so the child
branch calls ``set_process_context`` right after fork to record its own pid.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)
_pid: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "pid", default=None
)
_target: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "target", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    operation: str | None = None
    pid: int | None = None
    target: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        operation=_operation.get(),
        pid=_pid.get(),
        target=_target.get(),
    )


def set_operation_context(operation: str) -> None:
    """Set the workflow name (watch, copy, demo)."""
    _operation.set(operation)


def set_process_context(pid: int, target: str | None = None) -> None:
    """Set per-process context (called in a child right after fork)."""
    _pid.set(pid)
    _target.set(target)


def clear_context() -> None:
    """Reset all context variables."""
    _operation.set(None)
    _pid.set(None)
    _target.set(None)
