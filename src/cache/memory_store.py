# src/cache/memory_store.py — v1
"""In-process cache store (CACHE_BACKEND=memory, default).

A dict of immutable CacheEntry objects guarded by a lock. Expired entries are
dropped lazily on read. Contents are lost on restart, which is fine for a
cache of recomputable reports.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable

from filepanel.cache.base_cache_store import BaseCacheStore, key_matches, validate_ttl
from filepanel.cache.models import CacheEntry

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryCacheStore(BaseCacheStore):
    """Thread-safe in-memory cache store with optional per-entry TTL."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock

    async def get(self, key: str) -> bytes | None:
        """Return the value for `key`, dropping it first if expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                logger.debug("Cache entry expired: %s", key)
                return None
            return entry.value

    async def set(self, key: str, value: bytes, ttl: float | None = None) -> None:
        validate_ttl(ttl)
        entry = CacheEntry.create(key, value, ttl, self._clock())
        with self._lock:
            self._entries[key] = entry

    async def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    async def invalidate_all(
        self,
        prefix: str | None = None,
        predicate: Callable[[str], bool] | None = None,
    ) -> int:
        with self._lock:
            doomed = [k for k in self._entries if key_matches(k, prefix, predicate)]
            for key in doomed:
                del self._entries[key]
        return len(doomed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
