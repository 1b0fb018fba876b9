"""Tests for structured logging."""

import json
import logging
import sys

from soundhaven.infrastructure.observability.logging import (
    CompactExceptionFormatter,
    CorrelationIdFilter,
    CustomJsonFormatter,
    configure_logging,
    get_correlation_id,
    set_correlation_id,
)


class TestCorrelationId:
    """Test correlation ID functionality."""

    def test_set_and_get_correlation_id(self):
        """Test setting and getting correlation ID."""
        test_id = "test-123-abc"
        result = set_correlation_id(test_id)
        assert result == test_id
        assert get_correlation_id() == test_id

    def test_set_correlation_id_generates_uuid_when_none(self):
        """Test that setting None generates a UUID."""
        result = set_correlation_id(None)
        assert len(result) == 36
        assert get_correlation_id() == result

    def test_filter_stamps_record(self):
        set_correlation_id("req-42")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "req-42"


class TestLoggingConfiguration:
    """Test logging configuration."""

    def test_configure_logging_debug_level(self):
        configure_logging(log_level="DEBUG", json_format=False, app_name="test-app")
        assert logging.getLogger("test").getEffectiveLevel() <= logging.DEBUG

    def test_configure_logging_info_level(self):
        configure_logging(log_level="INFO", json_format=False, app_name="test-app")
        assert logging.getLogger("test").getEffectiveLevel() == logging.INFO

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(log_level="LOUD", json_format=False)
        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_json_format(self):
        configure_logging(log_level="INFO", json_format=True, app_name="test-app")
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, CustomJsonFormatter)

    def test_repeated_configuration_does_not_stack_handlers(self):
        configure_logging(log_level="INFO")
        configure_logging(log_level="INFO")
        assert len(logging.getLogger().handlers) == 1

    def test_third_party_loggers_quieted(self):
        configure_logging(log_level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("aiosqlite").level == logging.WARNING


class TestFormatters:
    def test_json_formatter_includes_correlation_id(self):
        formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
        record = logging.LogRecord(
            "soundhaven.test", logging.WARNING, __file__, 10, "something %s", ("odd",), None
        )
        record.correlation_id = "abc"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "something odd"
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "soundhaven.test"
        assert payload["correlation_id"] == "abc"

    def test_compact_formatter_shows_root_cause_first(self):
        formatter = CompactExceptionFormatter()
        try:
            try:
                raise KeyError("inner")
            except KeyError as e:
                raise RuntimeError("outer") from e
        except RuntimeError:
            text = formatter.formatException(sys.exc_info())

        lines = [line for line in text.splitlines() if line.startswith("╰─►")]
        assert lines[0].startswith("╰─► KeyError")
        assert lines[1] == "╰─► RuntimeError: outer"

    def test_compact_formatter_without_exception(self):
        assert CompactExceptionFormatter().formatException((None, None, None)) == ""
