# src/cache/redis_store.py — v3
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Lets several backend processes share one report cache. Expiry is delegated
to Redis; prefix invalidation walks the namespace with SCAN.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from filepanel.cache.base_cache_store import BaseCacheStore, key_matches, validate_ttl

logger = logging.getLogger(__name__)

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store for multi-instance deployments."""

    def __init__(self, redis_url: str, namespace: str = "filepanel") -> None:
        if not namespace:
            # An unscoped store would let invalidate_all() wipe the whole DB
            raise ValueError("Redis cache namespace must be non-empty")
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url)
        self._ns = f"{namespace}:"

    def _k(self, key: str) -> str:
        return f"{self._ns}{key}"

    async def get(self, key: str) -> bytes | None:
        return self._client.get(self._k(key))

    async def set(self, key: str, value: bytes, ttl: float | None = None) -> None:
        validate_ttl(ttl)
        if ttl is None:
            self._client.set(self._k(key), value)
        else:
            # PX keeps sub-second TTLs; Redis rejects 0 so round up to 1ms
            self._client.set(self._k(key), value, px=max(1, int(ttl * 1000)))

    async def invalidate(self, key: str) -> None:
        self._client.delete(self._k(key))

    async def invalidate_all(
        self,
        prefix: str | None = None,
        predicate: Callable[[str], bool] | None = None,
    ) -> int:
        pattern = self._ns + _GLOB_SPECIAL.sub(r"\\\1", prefix or "") + "*"
        doomed: list[str] = []
        for raw in self._client.scan_iter(match=pattern):
            name = raw.decode("utf-8") if isinstance(raw, bytes) else raw
            key = name[len(self._ns):]
            if key_matches(key, prefix, predicate):
                doomed.append(name)
        if doomed:
            self._client.delete(*doomed)
        logger.debug("Redis invalidation removed %d keys (pattern=%s)", len(doomed), pattern)
        return len(doomed)

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
