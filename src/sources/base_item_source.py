# src/sources/base_item_source.py — v2
"""Abstract item collection source.

The report core reads stored files only through this interface, so tests can
substitute an in-memory fake for the real object store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from filepanel.sources.models import ItemDetail, ItemRef


class BaseItemSource(ABC):
    """Access to the stored files of one owner.

    Reports only need the two abstract read methods. Content download and
    mutations are optional; callers must notify the InvalidationCoordinator
    after a successful mutation.
    """

    @abstractmethod
    async def list_items(self, owner_id: str) -> list[ItemRef]:
        """Enumerate every item stored for `owner_id`."""

    @abstractmethod
    async def get_item_detail(self, ref: ItemRef) -> ItemDetail:
        """Fetch size and content type of one item."""

    async def put_item(
        self,
        owner_id: str,
        file_name: str,
        body: bytes,
        content_type: str | None = None,
    ) -> ItemRef:
        """Store a file. Read-only sources leave this unimplemented."""
        raise NotImplementedError(f"{type(self).__name__} is read-only")

    async def delete_item(self, owner_id: str, file_name: str) -> bool:
        """Delete a file, returning False if absent."""
        raise NotImplementedError(f"{type(self).__name__} is read-only")

    async def get_item(self, owner_id: str, file_name: str) -> bytes | None:
        """Read a file's content, returning None if absent."""
        raise NotImplementedError(f"{type(self).__name__} does not serve content")
