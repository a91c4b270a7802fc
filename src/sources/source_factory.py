# src/sources/source_factory.py — v1
"""Factory: instantiate the item source from configuration."""

from __future__ import annotations

from filepanel.config.settings import Settings
from filepanel.sources.base_item_source import BaseItemSource


def create_item_source(settings: Settings) -> BaseItemSource:
    """Create the item source selected by STORAGE_BACKEND.

    Raises:
        ValueError: If the backend is unsupported or incompletely configured.
    """
    if settings.storage_backend == "s3":
        from filepanel.sources.s3_source import S3ItemSource
        if not settings.storage_bucket:
            raise ValueError(
                "STORAGE_BUCKET must be set when STORAGE_BACKEND=s3"
            )
        return S3ItemSource(
            bucket=settings.storage_bucket,
            prefix=settings.normalized_storage_prefix,
            region=settings.storage_region or None,
            endpoint_url=settings.storage_endpoint_url or None,
        )

    raise ValueError(f"Unsupported storage backend: {settings.storage_backend!r}")
