# src/cache/base_cache_store.py — v2
"""Abstract cache store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable


class BaseCacheStore(ABC):
    """Unified interface for report cache backends.

    Values are opaque serialized bytes. Stores never raise on a missing key:
    `get` returns None and invalidation of an absent key is a no-op.
    """

    @abstractmethod
    async def get(self, key: str) -> bytes | None:
        """Return the stored value, or None if absent or expired."""

    @abstractmethod
    async def set(self, key: str, value: bytes, ttl: float | None = None) -> None:
        """Atomically replace the entry for `key`.

        Args:
            key: Cache key.
            value: Serialized value.
            ttl: Lifetime in seconds, None for no expiry.

        Raises:
            ValueError: If ttl is zero or negative.
        """

    @abstractmethod
    async def invalidate(self, key: str) -> None:
        """Remove the entry for `key` if present."""

    @abstractmethod
    async def invalidate_all(
        self,
        prefix: str | None = None,
        predicate: Callable[[str], bool] | None = None,
    ) -> int:
        """Remove every entry matching `prefix` and `predicate`.

        With neither filter given the whole store is cleared.

        Returns:
            Number of removed entries.
        """


def validate_ttl(ttl: float | None) -> float | None:
    """Reject non-positive TTLs; None means no expiry."""
    if ttl is not None and ttl <= 0:
        raise ValueError(f"ttl must be > 0 seconds or None, got {ttl!r}")
    return ttl


def key_matches(
    key: str,
    prefix: str | None,
    predicate: Callable[[str], bool] | None,
) -> bool:
    """Shared filter semantics for invalidate_all implementations."""
    if prefix is not None and not key.startswith(prefix):
        return False
    if predicate is not None and not predicate(key):
        return False
    return True
