# tests/unit/sources/test_source_factory.py — v1
"""Tests for sources/source_factory.py."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from filepanel.config.settings import Settings
from filepanel.sources.s3_source import S3ItemSource
from filepanel.sources.source_factory import create_item_source


class TestCreateItemSource:
    def test_s3(self):
        s = Settings(_env_file=None, storage_bucket="uploads", storage_prefix="/files")
        with patch("boto3.client"):
            source = create_item_source(s)
        assert isinstance(source, S3ItemSource)
        assert source._bucket == "uploads"
        assert source._prefix == "files/"

    def test_s3_requires_bucket(self):
        s = Settings(_env_file=None, storage_bucket="")
        with pytest.raises(ValueError, match="STORAGE_BUCKET"):
            create_item_source(s)

    def test_unsupported(self):
        s = Settings.model_construct(storage_backend="gcs")
        with pytest.raises(ValueError, match="Unsupported storage backend"):
            create_item_source(s)
