# src/logging/context.py — v2
"""Contextual logging support: attach owner_id and report_type to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per report computation.
_owner_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "owner_id", default=None
)
_report_type: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "report_type", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    owner_id: str | None = None
    report_type: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        owner_id=_owner_id.get(),
        report_type=_report_type.get(),
    )


def set_report_context(owner_id: str, report_type: str) -> None:
    """Set report-level context (called once per report computation)."""
    _owner_id.set(owner_id)
    _report_type.set(report_type)


def clear_context() -> None:
    """Reset all context variables."""
    _owner_id.set(None)
    _report_type.set(None)
