# tests/unit/config/test_settings.py — v2
"""Tests for config/settings.py — typed Settings and validation rules."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from filepanel.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_default_cache(self):
        s = Settings(_env_file=None)
        assert s.cache_backend == "memory"
        assert s.cache_ttl_s == 300.0
        assert s.cache_single_flight is True

    def test_default_report_timeout(self):
        s = Settings(_env_file=None)
        assert s.report_timeout_s == 30.0

    def test_default_storage(self):
        s = Settings(_env_file=None)
        assert s.storage_backend == "s3"
        assert s.storage_prefix == "files/"

    def test_default_logging(self):
        s = Settings(_env_file=None)
        assert s.log_format == "json"
        assert s.log_file is None


class TestSettingsValidation:
    def test_redis_requires_url(self):
        with pytest.raises(ConfigurationError, match="CACHE_REDIS_URL"):
            Settings(_env_file=None, cache_backend="redis")

    def test_redis_with_url(self):
        s = Settings(_env_file=None, cache_backend="redis", cache_redis_url="redis://x")
        assert s.cache_backend == "redis"

    def test_non_positive_timeout(self):
        with pytest.raises(ValidationError, match="report_timeout_s"):
            Settings(_env_file=None, report_timeout_s=0)

    def test_non_positive_ttl(self):
        with pytest.raises(ValidationError, match="cache_ttl_s"):
            Settings(_env_file=None, cache_ttl_s=-1)

    def test_ttl_can_be_disabled(self):
        s = Settings(_env_file=None, cache_ttl_s=None)
        assert s.cache_ttl_s is None

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, cache_backend="memcached")


class TestSettingsEnv:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BUCKET", "uploads")
        monkeypatch.setenv("REPORT_TIMEOUT_S", "5")
        s = Settings(_env_file=None)
        assert s.storage_bucket == "uploads"
        assert s.report_timeout_s == 5.0


class TestHelpers:
    @pytest.mark.parametrize(
        "raw, expected",
        [("files/", "files/"), ("files", "files/"), ("/a/b//", "a/b/"), ("", "")],
    )
    def test_normalized_storage_prefix(self, raw, expected):
        s = Settings(_env_file=None, storage_prefix=raw)
        assert s.normalized_storage_prefix == expected


class TestLoadSettings:
    def test_overrides(self):
        s = load_settings(_env_file=None, cache_ttl_s=10)
        assert s.cache_ttl_s == 10
