# src/reports/aggregator.py — v1
"""Report aggregation: one enumeration call, N concurrent detail calls.

compute_report() enumerates an owner's items, fetches the detail of every
item concurrently, waits for all of them and then reduces the surviving
records into the requested report. A failed detail fetch only drops that
item; a failed enumeration or an overall timeout fails the report.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from typing import Callable

from filepanel.logging.context import clear_context, set_report_context
from filepanel.reports.errors import PartialItemError, TransientComputeError
from filepanel.reports.formats import resolve_format
from filepanel.reports.models import (
    REPORT_MODELS,
    FileListing,
    FileListingEntry,
    FormatBreakdown,
    Report,
    StatisticsSummary,
)
from filepanel.sources.base_item_source import BaseItemSource
from filepanel.sources.models import ItemRecord, ItemRef

logger = logging.getLogger(__name__)


def build_statistics(owner_id: str, records: list[ItemRecord]) -> StatisticsSummary:
    """Count files and sum their sizes. Items without a size add 0 bytes."""
    total_bytes = 0
    for record in records:
        if record.size_bytes is None:
            logger.warning("No size metadata for item %s", record.id)
            continue
        total_bytes += record.size_bytes
    return StatisticsSummary(
        owner_id=owner_id,
        total_files=len(records),
        total_used_bytes=total_bytes,
    )


def build_format_breakdown(owner_id: str, records: list[ItemRecord]) -> FormatBreakdown:
    """Count items per format key; items with no usable content type are skipped."""
    counts: Counter[str] = Counter()
    for record in records:
        fmt = resolve_format(record.content_type)
        if fmt is None:
            logger.warning(
                "Skipping item %s with unusable content type %r",
                record.id, record.content_type,
            )
            continue
        counts[fmt] += 1
    return FormatBreakdown(owner_id=owner_id, formats=dict(counts))


def build_listing(owner_id: str, records: list[ItemRecord]) -> FileListing:
    return FileListing(
        owner_id=owner_id,
        files=[
            FileListingEntry(
                id=r.id,
                owner_id=r.owner_id,
                storage_path=r.storage_path,
                file_name=r.file_name,
                content_type=r.content_type,
                size_bytes=r.size_bytes,
                upload_date=r.upload_date,
            )
            for r in records
        ],
    )


_REDUCERS: dict[str, Callable[[str, list[ItemRecord]], Report]] = {
    "listing": build_listing,
    "statistics": build_statistics,
    "formats": build_format_breakdown,
}


class ReportAggregator:
    """Compute reports from an item source.

    Args:
        source: Item collection source.
        timeout_s: Bound on enumeration plus fan-out, None to disable.
    """

    def __init__(self, source: BaseItemSource, timeout_s: float | None = 30.0) -> None:
        if timeout_s is not None and timeout_s <= 0:
            raise ValueError("timeout_s must be > 0 or None")
        self._source = source
        self._timeout_s = timeout_s

    async def compute_report(self, report_type: str, owner_id: str) -> Report:
        """Compute one report for one owner.

        Raises:
            ValueError: Unknown report type.
            TransientComputeError: Enumeration failed or timed out.
        """
        if report_type not in REPORT_MODELS:
            raise ValueError(f"Unsupported report type: {report_type!r}")

        set_report_context(owner_id, report_type)
        try:
            try:
                records = await asyncio.wait_for(
                    self._collect(report_type, owner_id), timeout=self._timeout_s
                )
            except asyncio.TimeoutError as e:
                logger.error("Report computation timed out after %ss", self._timeout_s)
                raise TransientComputeError(
                    report_type, owner_id, f"timed out after {self._timeout_s}s"
                ) from e

            report = _REDUCERS[report_type](owner_id, records)
            logger.debug("Computed report from %d items", len(records))
            return report
        finally:
            clear_context()

    async def _collect(self, report_type: str, owner_id: str) -> list[ItemRecord]:
        """Enumerate, then fetch all details concurrently."""
        try:
            refs = await self._source.list_items(owner_id)
        except Exception as e:
            logger.error("Item enumeration failed: %s", e)
            raise TransientComputeError(
                report_type, owner_id, f"enumeration failed: {e}"
            ) from e

        if not refs:
            return []

        results = await asyncio.gather(*(self._fetch_record(ref) for ref in refs))
        records = [r for r in results if r is not None]
        dropped = len(refs) - len(records)
        if dropped:
            logger.warning("%d of %d items excluded from report", dropped, len(refs))
        return records

    async def _fetch_record(self, ref: ItemRef) -> ItemRecord | None:
        try:
            detail = await self._source.get_item_detail(ref)
        except Exception as e:
            logger.error("%s", PartialItemError(ref.id, e))
            return None
        return ItemRecord.from_parts(ref, detail)
