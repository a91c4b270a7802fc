# src/reports/service.py — v2
"""Read-through report service.

Usage:
    service = ReportService.from_settings(settings, source)
    stats = await service.get_statistics("alice")
    ...
    await source.put_item("alice", "notes.txt", b"...", "text/plain")
    await service.coordinator.on_item_created("alice")

A read asks the cache first; on a miss the aggregator computes the report,
the serialized result is stored with the configured TTL and returned. A
failed computation is never cached.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from filepanel.cache.keys import report_key
from filepanel.reports.aggregator import ReportAggregator
from filepanel.reports.invalidation import InvalidationCoordinator
from filepanel.reports.models import (
    REPORT_MODELS,
    FileListing,
    FormatBreakdown,
    Report,
    StatisticsSummary,
    deserialize_report,
    serialize_report,
)

if TYPE_CHECKING:
    from filepanel.cache.base_cache_store import BaseCacheStore
    from filepanel.config.settings import Settings
    from filepanel.sources.base_item_source import BaseItemSource

logger = logging.getLogger(__name__)


class ReportService:
    """Serve reports through the cache, computing them on a miss.

    Args:
        cache_store: Backend holding serialized reports.
        aggregator: Computes reports on a miss.
        ttl_s: Lifetime of cached reports in seconds, None for no expiry.
        single_flight: Serialize concurrent misses on the same key so the
            report is computed once.
        coordinator: Invalidation coordinator sharing `cache_store`. Created
            when not given.
    """

    def __init__(
        self,
        cache_store: BaseCacheStore,
        aggregator: ReportAggregator,
        ttl_s: float | None = None,
        single_flight: bool = True,
        coordinator: InvalidationCoordinator | None = None,
    ) -> None:
        self._cache = cache_store
        self._aggregator = aggregator
        self._ttl_s = ttl_s
        self._single_flight = single_flight
        self.coordinator = coordinator or InvalidationCoordinator(cache_store)
        self._inflight: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    @classmethod
    def from_settings(
        cls, settings: Settings, source: BaseItemSource
    ) -> ReportService:
        """Wire cache store, aggregator and service from configuration."""
        from filepanel.cache.cache_factory import create_cache_store

        return cls(
            cache_store=create_cache_store(settings),
            aggregator=ReportAggregator(source, timeout_s=settings.report_timeout_s),
            ttl_s=settings.cache_ttl_s,
            single_flight=settings.cache_single_flight,
        )

    async def get_report(self, report_type: str, owner_id: str) -> Report:
        """Return a report, from cache when possible.

        Raises:
            ValueError: Unknown report type.
            TransientComputeError: The report could not be computed.
        """
        if report_type not in REPORT_MODELS:
            raise ValueError(f"Unsupported report type: {report_type!r}")

        key = report_key(report_type, owner_id)
        cached = await self._read(report_type, key)
        if cached is not None:
            return cached

        if not self._single_flight:
            return await self._compute_and_store(report_type, owner_id, key)

        lock = self._inflight.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                # Another caller may have filled the entry while we waited
                cached = await self._read(report_type, key)
                if cached is not None:
                    return cached
                return await self._compute_and_store(report_type, owner_id, key)
        finally:
            # Drop the lock with its last user so the table holds only
            # keys with a read in progress
            self._waiters[key] -= 1
            if not self._waiters[key]:
                del self._waiters[key]
                del self._inflight[key]

    async def get_listing(self, owner_id: str) -> FileListing:
        return await self.get_report("listing", owner_id)  # type: ignore[return-value]

    async def get_statistics(self, owner_id: str) -> StatisticsSummary:
        return await self.get_report("statistics", owner_id)  # type: ignore[return-value]

    async def get_formats(self, owner_id: str) -> FormatBreakdown:
        return await self.get_report("formats", owner_id)  # type: ignore[return-value]

    async def _read(self, report_type: str, key: str) -> Report | None:
        data = await self._cache.get(key)
        if data is None:
            logger.debug("Cache miss: %s", key)
            return None
        try:
            report = deserialize_report(report_type, data)
        except ValueError as e:
            logger.warning("Dropping unreadable cache entry %s: %s", key, e)
            await self._cache.invalidate(key)
            return None
        logger.debug("Cache hit: %s", key)
        return report

    async def _compute_and_store(
        self, report_type: str, owner_id: str, key: str
    ) -> Report:
        generation = self.coordinator.generation(owner_id)
        report = await self._aggregator.compute_report(report_type, owner_id)
        if self.coordinator.generation(owner_id) != generation:
            # Invalidated mid-computation: serve the result but don't cache it
            logger.info("Not caching %s: owner changed during computation", key)
            return report
        await self._cache.set(key, serialize_report(report), ttl=self._ttl_s)
        return report
