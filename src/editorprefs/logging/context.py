# src/editorprefs/logging/context.py — v1
"""Contextual logging support — attach session_id, config_name, operation to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per editor session.
_session_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "session_id", default=None
)
_config_name: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "config_name", default=None
)
_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    session_id: str | None = None
    config_name: str | None = None
    operation: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        session_id=_session_id.get(),
        config_name=_config_name.get(),
        operation=_operation.get(),
    )


def set_session_context(session_id: str, config_name: str | None = None) -> None:
    """Set session-level context (called once per coordinator)."""
    _session_id.set(session_id)
    _config_name.set(config_name)


def set_operation_context(operation: str | None) -> None:
    """Set the sync operation currently running (install, persist, ...)."""
    _operation.set(operation)


def clear_context() -> None:
    """Reset all context variables."""
    _session_id.set(None)
    _config_name.set(None)
    _operation.set(None)
