# src/sources/s3_source.py — v2
"""S3-compatible item source (STORAGE_BACKEND=s3).

Supports AWS S3, MinIO, and other S3-compatible storage.
Requires 'boto3' package: pip install boto3.

Objects are laid out as ``<prefix><owner>/<file name>`` with the owner id
percent-quoted. boto3 is blocking, so every call runs in a worker thread and
the per-item HEAD requests of one report really overlap.
"""

from __future__ import annotations

import asyncio
import logging
from urllib.parse import quote

from filepanel.sources.base_item_source import BaseItemSource
from filepanel.sources.models import ItemDetail, ItemRef

logger = logging.getLogger(__name__)

# HEAD answers a bare "404"; GET answers "NoSuchKey"
_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def _is_not_found(error: Exception) -> bool:
    """True if a botocore ClientError reports a missing object."""
    response = getattr(error, "response", None) or {}
    return str(response.get("Error", {}).get("Code", "")) in _NOT_FOUND_CODES


class S3ItemSource(BaseItemSource):
    """Read and write stored files in an S3 bucket."""

    def __init__(
        self,
        bucket: str,
        prefix: str = "files/",
        region: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        """Initialize S3 source.

        Args:
            bucket: S3 bucket name.
            prefix: Key prefix for all stored files (e.g. "files/").
            region: AWS region (optional, uses boto3 default if not set).
            endpoint_url: Custom endpoint for MinIO/compatible storage.
        """
        try:
            import boto3
        except ImportError as e:
            raise ImportError(
                "boto3 package required for S3 source: pip install boto3"
            ) from e

        kwargs: dict = {}
        if region:
            kwargs["region_name"] = region
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url

        self._s3 = boto3.client("s3", **kwargs)
        self._bucket = bucket
        self._prefix = prefix.rstrip("/") + "/" if prefix else ""

    def _owner_prefix(self, owner_id: str) -> str:
        return f"{self._prefix}{quote(owner_id, safe='')}/"

    def _item_key(self, owner_id: str, file_name: str) -> str:
        return f"{self._owner_prefix(owner_id)}{file_name}"

    async def list_items(self, owner_id: str) -> list[ItemRef]:
        """List every object under the owner's prefix (all pages)."""
        return await asyncio.to_thread(self._list_items_sync, owner_id)

    def _list_items_sync(self, owner_id: str) -> list[ItemRef]:
        prefix = self._owner_prefix(owner_id)
        paginator = self._s3.get_paginator("list_objects_v2")
        refs: list[ItemRef] = []
        for page in paginator.paginate(Bucket=self._bucket, Prefix=prefix):
            for obj in page.get("Contents", []):
                key = obj["Key"]
                if key == prefix:
                    continue
                refs.append(
                    ItemRef(
                        id=key,
                        owner_id=owner_id,
                        storage_path=key,
                        upload_date=obj.get("LastModified"),
                    )
                )
        logger.debug("S3 list: s3://%s/%s -> %d objects", self._bucket, prefix, len(refs))
        return refs

    async def get_item_detail(self, ref: ItemRef) -> ItemDetail:
        """HEAD the object for its size and content type."""
        response = await asyncio.to_thread(
            self._s3.head_object, Bucket=self._bucket, Key=ref.storage_path
        )
        return ItemDetail(
            size_bytes=response.get("ContentLength"),
            content_type=response.get("ContentType"),
        )

    async def put_item(
        self,
        owner_id: str,
        file_name: str,
        body: bytes,
        content_type: str | None = None,
    ) -> ItemRef:
        """Upload (or overwrite) one file for an owner."""
        key = self._item_key(owner_id, file_name)
        kwargs: dict = {"Bucket": self._bucket, "Key": key, "Body": body}
        if content_type:
            kwargs["ContentType"] = content_type
        await asyncio.to_thread(self._s3.put_object, **kwargs)
        logger.info("S3 upload: s3://%s/%s (%d bytes)", self._bucket, key, len(body))
        return ItemRef(id=key, owner_id=owner_id, storage_path=key)

    async def get_item(self, owner_id: str, file_name: str) -> bytes | None:
        """Download one file's content. Returns None if it does not exist."""
        key = self._item_key(owner_id, file_name)
        try:
            response = await asyncio.to_thread(
                self._s3.get_object, Bucket=self._bucket, Key=key
            )
        except self._s3.exceptions.ClientError as e:
            if not _is_not_found(e):
                raise
            logger.info("S3 download: s3://%s/%s not found", self._bucket, key)
            return None
        body = await asyncio.to_thread(response["Body"].read)
        logger.info("S3 download: s3://%s/%s (%d bytes)", self._bucket, key, len(body))
        return body

    async def delete_item(self, owner_id: str, file_name: str) -> bool:
        """Delete one file. Returns False if it did not exist."""
        key = self._item_key(owner_id, file_name)
        try:
            await asyncio.to_thread(
                self._s3.head_object, Bucket=self._bucket, Key=key
            )
        except self._s3.exceptions.ClientError as e:
            if not _is_not_found(e):
                raise
            logger.info("S3 delete: s3://%s/%s not found", self._bucket, key)
            return False
        await asyncio.to_thread(self._s3.delete_object, Bucket=self._bucket, Key=key)
        logger.info("S3 delete: s3://%s/%s", self._bucket, key)
        return True
