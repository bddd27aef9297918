# tests/utils/test_logging.py
"""
Tests for logging configuration.
"""

import json
import logging
import sys

import pytest

from konvata.utils.context import clear_correlation_id, set_correlation_id
from konvata.utils.logging import (
    CorrelationIdFilter,
    JsonFormatter,
    NO_CORRELATION_ID,
    _get_log_level,
    setup_logging,
)


def make_record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="konvata.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestGetLogLevel:
    """Tests for _get_log_level()."""

    @pytest.mark.parametrize(
        "name, level",
        [("DEBUG", logging.DEBUG), ("info", logging.INFO), (" warn ", logging.WARNING), ("CRITICAL", logging.CRITICAL)],
    )
    def test_valid(self, name, level):
        assert _get_log_level(name) == level

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            _get_log_level("LOUD")


class TestCorrelationIdFilter:
    """Tests for CorrelationIdFilter."""

    def test_adds_current_id(self):
        set_correlation_id("abc-123")
        try:
            record = make_record()
            assert CorrelationIdFilter().filter(record) is True
            assert record.correlation_id == "abc-123"
        finally:
            clear_correlation_id()

    def test_placeholder_without_request(self):
        clear_correlation_id()
        record = make_record()
        CorrelationIdFilter().filter(record)

        assert record.correlation_id == NO_CORRELATION_ID


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_basic_fields(self):
        record = make_record("converted", correlation_id="abc")

        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "konvata.test"
        assert entry["message"] == "converted"
        assert entry["correlation_id"] == "abc"
        assert "timestamp" in entry
        assert "extra" not in entry

    def test_extra_fields(self):
        record = make_record(correlation_id="abc", conversion_path="fallback_usd", obj=object())

        entry = json.loads(JsonFormatter().format(record))

        assert entry["extra"]["conversion_path"] == "fallback_usd"
        assert isinstance(entry["extra"]["obj"], str)

    def test_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record(exc_info=sys.exc_info())

        entry = json.loads(JsonFormatter().format(record))

        assert "RuntimeError: boom" in entry["exception"]


class TestSetupLogging:
    """Tests for setup_logging()."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_json_format(self):
        setup_logging(level="DEBUG", log_format="json")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert any(isinstance(f, CorrelationIdFilter) for f in root.handlers[0].filters)

    def test_text_format(self):
        setup_logging(level="WARNING", log_format="text")

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_quiets_http_client_loggers(self):
        setup_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
