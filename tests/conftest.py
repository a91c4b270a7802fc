# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides an in-memory fake item source, a controllable clock and sample
items. No external services: S3 and Redis clients are mocked per test.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from filepanel.sources.base_item_source import BaseItemSource
from filepanel.sources.models import ItemDetail, ItemRef


class FakeItemSource(BaseItemSource):
    """In-memory item source with injectable failures and latency."""

    def __init__(self) -> None:
        self.items: dict[str, list[tuple[ItemRef, ItemDetail | Exception]]] = {}
        self.list_error: Exception | None = None
        self.detail_delay_s: float = 0.0
        self.list_delay_s: float = 0.0
        self.list_calls: int = 0
        self.detail_calls: int = 0
        self.in_flight: int = 0
        self.max_in_flight: int = 0

    def add(
        self,
        owner_id: str,
        name: str,
        size: int | None = None,
        content_type: str | None = None,
        error: Exception | None = None,
    ) -> ItemRef:
        path = f"files/{owner_id}/{name}"
        ref = ItemRef(
            id=path,
            owner_id=owner_id,
            storage_path=path,
            upload_date=datetime(2026, 10, 1, tzinfo=timezone.utc),
        )
        detail: ItemDetail | Exception = (
            error if error is not None
            else ItemDetail(size_bytes=size, content_type=content_type)
        )
        self.items.setdefault(owner_id, []).append((ref, detail))
        return ref

    def remove(self, owner_id: str, name: str) -> None:
        self.items[owner_id] = [
            (ref, d) for ref, d in self.items.get(owner_id, [])
            if ref.file_name != name
        ]

    async def list_items(self, owner_id: str) -> list[ItemRef]:
        self.list_calls += 1
        if self.list_delay_s:
            await asyncio.sleep(self.list_delay_s)
        if self.list_error is not None:
            raise self.list_error
        return [ref for ref, _ in self.items.get(owner_id, [])]

    async def get_item_detail(self, ref: ItemRef) -> ItemDetail:
        self.detail_calls += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.detail_delay_s:
                await asyncio.sleep(self.detail_delay_s)
            for candidate, detail in self.items.get(ref.owner_id, []):
                if candidate.id == ref.id:
                    if isinstance(detail, Exception):
                        raise detail
                    return detail
            raise KeyError(ref.id)
        finally:
            self.in_flight -= 1


class FakeClock:
    """Manually advanced UTC clock for TTL tests."""

    def __init__(self) -> None:
        self.now = datetime(2026, 10, 16, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


# === FIXTURES: Sources ===


@pytest.fixture
def fake_source() -> FakeItemSource:
    """Empty fake item source."""
    return FakeItemSource()


@pytest.fixture
def sample_source(fake_source: FakeItemSource) -> FakeItemSource:
    """Fake source holding three files for alice and one for bob."""
    fake_source.add("alice", "a.png", size=10, content_type="image/png")
    fake_source.add("alice", "b.png", size=20, content_type="image/png")
    fake_source.add("alice", "c.bin", size=5, content_type="application/x-unknown")
    fake_source.add("bob", "report.pdf", size=1000, content_type="application/pdf")
    return fake_source


# === FIXTURES: Time ===


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()

