# tests/unit/logging/test_handlers.py — v2
"""Tests for logging/handlers.py — size parsing and rotating handler."""

from __future__ import annotations

from logging.handlers import RotatingFileHandler

import pytest

from filepanel.logging.handlers import create_rotating_handler, parse_size


class TestParseSize:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("10MB", 10 * 1024**2),
            ("512kb", 512 * 1024),
            ("1 GB", 1024**3),
            ("2048", 2048),
            ("7B", 7),
        ],
    )
    def test_valid(self, raw, expected):
        assert parse_size(raw) == expected

    @pytest.mark.parametrize("raw", ["", "MB", "10TB", "ten MB"])
    def test_invalid(self, raw):
        with pytest.raises(ValueError, match="Invalid size"):
            parse_size(raw)


class TestCreateRotatingHandler:
    def test_creates_parent_and_configures(self, tmp_path):
        path = tmp_path / "nested" / "app.log"
        handler = create_rotating_handler(path, rotation="1MB", retention=3)
        try:
            assert isinstance(handler, RotatingFileHandler)
            assert handler.maxBytes == 1024**2
            assert handler.backupCount == 3
            assert path.parent.is_dir()
        finally:
            handler.close()
