# src/cache/models.py — v2
"""Cache domain model: CacheEntry."""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict


class CacheEntry(BaseModel):
    """Single serialized report held by a cache store.

    Entries are immutable: a write replaces the whole entry, so readers never
    observe a half-written value.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    value: bytes
    expires_at: datetime | None = None

    @classmethod
    def create(
        cls, key: str, value: bytes, ttl: float | None, now: datetime
    ) -> CacheEntry:
        """Build an entry whose expiry is `ttl` seconds after `now`."""
        expires_at = None if ttl is None else now + timedelta(seconds=ttl)
        return cls(key=key, value=value, expires_at=expires_at)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now >= self.expires_at
