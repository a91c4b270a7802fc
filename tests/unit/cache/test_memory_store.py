# tests/unit/cache/test_memory_store.py — v1
"""Tests for cache/memory_store.py — in-process store with TTL."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from filepanel.cache.memory_store import MemoryCacheStore


class TestMemoryCacheStore:
    @pytest.mark.asyncio
    async def test_get_missing(self):
        store = MemoryCacheStore()
        assert await store.get("nope") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self):
        store = MemoryCacheStore()
        await store.set("k", b"value")
        assert await store.get("k") == b"value"

    @pytest.mark.asyncio
    async def test_last_write_wins(self):
        store = MemoryCacheStore()
        await store.set("k", b"first")
        await store.set("k", b"second")
        assert await store.get("k") == b"second"
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_no_ttl_survives_time(self, fake_clock):
        store = MemoryCacheStore(clock=fake_clock)
        await store.set("k", b"v")
        fake_clock.advance(10 * 365 * 86400)
        assert await store.get("k") == b"v"

    @pytest.mark.asyncio
    async def test_ttl_expiry_is_a_miss(self, fake_clock):
        store = MemoryCacheStore(clock=fake_clock)
        await store.set("k", b"v", ttl=30)
        fake_clock.advance(29)
        assert await store.get("k") == b"v"
        fake_clock.advance(2)
        assert await store.get("k") is None

    @pytest.mark.asyncio
    async def test_expired_entry_dropped_lazily(self, fake_clock):
        store = MemoryCacheStore(clock=fake_clock)
        await store.set("k", b"v", ttl=1)
        fake_clock.advance(5)
        assert len(store) == 1
        await store.get("k")
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_set_refreshes_ttl(self, fake_clock):
        store = MemoryCacheStore(clock=fake_clock)
        await store.set("k", b"v1", ttl=10)
        fake_clock.advance(8)
        await store.set("k", b"v2", ttl=10)
        fake_clock.advance(8)
        assert await store.get("k") == b"v2"

    @pytest.mark.asyncio
    async def test_invalid_ttl(self):
        store = MemoryCacheStore()
        with pytest.raises(ValueError):
            await store.set("k", b"v", ttl=0)
        assert await store.get("k") is None

    @pytest.mark.asyncio
    async def test_invalidate(self):
        store = MemoryCacheStore()
        await store.set("k", b"v")
        await store.invalidate("k")
        assert await store.get("k") is None

    @pytest.mark.asyncio
    async def test_invalidate_missing_is_noop(self):
        store = MemoryCacheStore()
        await store.invalidate("never-set")

    @pytest.mark.asyncio
    async def test_invalidate_all_prefix(self):
        store = MemoryCacheStore()
        await store.set("reports/alice/listing", b"1")
        await store.set("reports/alice/statistics", b"2")
        await store.set("reports/bob/listing", b"3")
        removed = await store.invalidate_all(prefix="reports/alice/")
        assert removed == 2
        assert await store.get("reports/alice/listing") is None
        assert await store.get("reports/bob/listing") == b"3"

    @pytest.mark.asyncio
    async def test_invalidate_all_predicate(self):
        store = MemoryCacheStore()
        await store.set("a", b"1")
        await store.set("bb", b"2")
        removed = await store.invalidate_all(predicate=lambda k: len(k) > 1)
        assert removed == 1
        assert await store.get("a") == b"1"

    @pytest.mark.asyncio
    async def test_invalidate_all_clears_everything(self):
        store = MemoryCacheStore()
        await store.set("a", b"1")
        await store.set("b", b"2")
        assert await store.invalidate_all() == 2
        assert len(store) == 0

    def test_threaded_writers_leave_one_complete_value(self):
        store = MemoryCacheStore()
        values = {f"v{i}".encode() for i in range(50)}

        def write(i: int) -> None:
            asyncio.run(store.set("shared", f"v{i}".encode()))

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(write, range(50)))

        assert asyncio.run(store.get("shared")) in values
        assert len(store) == 1
