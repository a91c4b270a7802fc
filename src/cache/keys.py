# src/cache/keys.py — v1
"""Cache key scheme for per-owner reports.

Keys look like ``reports/<owner>/<report_type>``. The owner id is
percent-quoted with no safe characters, so it never contains ``/`` and one
owner's prefix cannot match keys of another owner.
"""

from __future__ import annotations

from urllib.parse import quote

_ROOT = "reports/"


def owner_prefix(owner_id: str) -> str:
    """Prefix shared by every report key of one owner."""
    return f"{_ROOT}{quote(owner_id, safe='')}/"


def report_key(report_type: str, owner_id: str) -> str:
    """Cache key of one report for one owner."""
    return f"{owner_prefix(owner_id)}{report_type}"
