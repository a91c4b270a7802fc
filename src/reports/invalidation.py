# src/reports/invalidation.py — v1
"""Invalidate cached reports after an owner's files change."""

from __future__ import annotations

import logging
import threading

from filepanel.cache.base_cache_store import BaseCacheStore
from filepanel.cache.keys import owner_prefix

logger = logging.getLogger(__name__)


class InvalidationCoordinator:
    """Clear every cached report of an owner on create/delete.

    Invalidation is coarse: all reports depend on the same size, type and
    count fields, so any change drops listing, statistics and formats
    together and the next read recomputes them.

    Each invalidation also bumps a per-owner generation. A computation that
    started before the bump must not write its result back (see
    ReportService), otherwise a slow recompute could re-cache data the
    mutation just made stale.
    """

    def __init__(self, cache_store: BaseCacheStore) -> None:
        self._cache = cache_store
        self._generations: dict[str, int] = {}
        self._lock = threading.Lock()

    def generation(self, owner_id: str) -> int:
        with self._lock:
            return self._generations.get(owner_id, 0)

    async def on_item_created(self, owner_id: str) -> None:
        await self._invalidate_owner(owner_id, "created")

    async def on_item_deleted(self, owner_id: str) -> None:
        await self._invalidate_owner(owner_id, "deleted")

    async def _invalidate_owner(self, owner_id: str, event: str) -> None:
        with self._lock:
            self._generations[owner_id] = self._generations.get(owner_id, 0) + 1
        try:
            removed = await self._cache.invalidate_all(prefix=owner_prefix(owner_id))
        except Exception:
            # Entries that survive here still expire with their TTL
            logger.exception("Cache invalidation failed for owner %s", owner_id)
            return
        logger.info(
            "Item %s for owner %s: invalidated %d cached reports",
            event, owner_id, removed,
        )
