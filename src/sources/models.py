# src/sources/models.py — v1
"""Item collection models: ItemRef, ItemDetail, ItemRecord."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ItemRef(BaseModel):
    """One stored file as returned by enumeration."""

    id: str
    owner_id: str
    storage_path: str
    upload_date: datetime | None = None

    @property
    def file_name(self) -> str:
        return self.storage_path.rsplit("/", 1)[-1]


class ItemDetail(BaseModel):
    """Per-item metadata fetched with one detail call."""

    size_bytes: int | None = None
    content_type: str | None = None


class ItemRecord(BaseModel):
    """Joined view of a stored file (ref + detail). Read-only for the cache."""

    id: str
    owner_id: str
    storage_path: str
    content_type: str | None = None
    size_bytes: int | None = None
    upload_date: datetime | None = None

    @classmethod
    def from_parts(cls, ref: ItemRef, detail: ItemDetail) -> ItemRecord:
        return cls(
            id=ref.id,
            owner_id=ref.owner_id,
            storage_path=ref.storage_path,
            content_type=detail.content_type,
            size_bytes=detail.size_bytes,
            upload_date=ref.upload_date,
        )

    @property
    def file_name(self) -> str:
        return self.storage_path.rsplit("/", 1)[-1]
