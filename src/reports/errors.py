# src/reports/errors.py — v1
"""Report computation errors."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for report errors."""


class TransientComputeError(ReportError):
    """Enumeration failed or the computation timed out.

    Surfaced to the caller. Nothing is cached, so a retry recomputes.
    """

    def __init__(self, report_type: str, owner_id: str, reason: str):
        self.report_type = report_type
        self.owner_id = owner_id
        self.reason = reason
        super().__init__(
            f"Failed to compute '{report_type}' report for owner '{owner_id}': {reason}"
        )


class PartialItemError(ReportError):
    """Detail fetch failed for a single item; the item is left out."""

    def __init__(self, item_id: str, cause: Exception):
        self.item_id = item_id
        self.cause = cause
        super().__init__(f"Detail fetch failed for item '{item_id}': {cause}")
