# tests/unit/logging/test_logger.py — v1
"""Tests for logging/logger.py — formatters, setup and size parsing."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from careerai.logging.context import set_feature_context, set_request_context
from careerai.logging.logger import (
    JsonFormatter,
    TextFormatter,
    get_logger,
    parse_size,
    setup_logging,
)


@pytest.fixture
def restore_logger():
    root = logging.getLogger("careerai")
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg: str = "hello %s", args=("world",), **extra) -> logging.LogRecord:
    record = logging.LogRecord("careerai.test", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_basic_fields(self):
        entry = json.loads(JsonFormatter().format(_record()))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "careerai.test"
        assert entry["message"] == "hello world"
        assert "context" not in entry

    def test_context_and_data(self):
        set_request_context("req-9", user_id="u1")
        entry = json.loads(JsonFormatter().format(_record(data={"hits": 3})))
        assert entry["context"] == {"request_id": "req-9", "user_id": "u1"}
        assert entry["data"] == {"hits": 3}

    def test_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            import sys
            record = logging.LogRecord(
                "careerai.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )
        entry = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in entry["exception"]


class TestTextFormatter:
    def test_includes_user_and_feature(self):
        set_request_context("req-1", user_id="u1")
        set_feature_context("cover-letter")
        line = TextFormatter().format(_record())
        assert "[INFO    ]" in line
        assert "[user=u1]" in line
        assert "(cover-letter)" in line
        assert line.endswith("- hello world")


class TestSetupLogging:
    def test_console_only(self, restore_logger):
        setup_logging(level="debug", log_format="text")
        assert restore_logger.level == logging.DEBUG
        assert len(restore_logger.handlers) == 1
        assert isinstance(restore_logger.handlers[0].formatter, TextFormatter)

    def test_reinit_does_not_duplicate(self, restore_logger):
        setup_logging()
        setup_logging()
        assert len(restore_logger.handlers) == 1

    def test_file_handler(self, restore_logger, tmp_path):
        log_file = tmp_path / "logs" / "careerai.log"
        setup_logging(log_file=str(log_file), rotation="1KB", retention=2)
        file_handlers = [h for h in restore_logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 1024
        assert file_handlers[0].backupCount == 2

        get_logger("test").warning("written")
        file_handlers[0].flush()
        assert json.loads(log_file.read_text().strip())["message"] == "written"


class TestParseSize:
    @pytest.mark.parametrize("value, expected", [
        ("10MB", 10 * 1024 * 1024),
        ("512kb", 512 * 1024),
        ("1 GB", 1024**3),
        ("100B", 100),
    ])
    def test_valid(self, value, expected):
        assert parse_size(value) == expected

    @pytest.mark.parametrize("value", ["", "10", "ten MB", "10TB"])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid size format"):
            parse_size(value)


def test_get_logger_namespaced():
    assert get_logger("api").name == "careerai.api"
