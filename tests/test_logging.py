"""Tests for structured logging functionality."""

import json
import logging

from clickhub.logging import (
    ExcludeMetricsFilter,
    HumanReadableFormatter,
    StructuredJSONFormatter,
    clear_log_context,
    get_connection_id,
    get_log_context,
    set_log_context,
)


def make_record(msg="Test message", level=logging.INFO, **extra):
    record = logging.LogRecord(
        name="test_logger",
        level=level,
        pathname="/test/test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLogContext:
    """Test log context management."""

    def test_set_log_context_adds_fields(self):
        clear_log_context()
        set_log_context(connection_id="conn-123", peer="127.0.0.1:5000")

        context = get_log_context()

        assert context["connection_id"] == "conn-123"
        assert context["peer"] == "127.0.0.1:5000"

        clear_log_context()

    def test_set_log_context_updates_existing_fields(self):
        clear_log_context()
        set_log_context(connection_id="conn-123")
        set_log_context(peer="127.0.0.1:5000")

        context = get_log_context()

        assert context == {
            "connection_id": "conn-123",
            "peer": "127.0.0.1:5000",
        }

        clear_log_context()

    def test_clear_log_context_removes_fields(self):
        set_log_context(connection_id="conn-123")
        clear_log_context()

        assert get_log_context() == {}
        assert get_connection_id() == ""

    def test_default_context_is_not_mutated(self):
        """Setting fields in one context never leaks into the default."""
        clear_log_context()
        set_log_context(connection_id="conn-123")
        clear_log_context()

        assert get_log_context() == {}


class TestStructuredJSONFormatter:
    """Test JSON formatter for structured logging."""

    def test_format_includes_standard_fields(self):
        log_data = json.loads(StructuredJSONFormatter().format(make_record()))

        assert "timestamp" in log_data
        assert log_data["level"] == "INFO"
        assert log_data["logger"] == "test_logger"
        assert log_data["message"] == "Test message"
        assert "environment" in log_data

    def test_format_includes_log_context(self):
        clear_log_context()
        set_log_context(connection_id="conn-123")

        log_data = json.loads(StructuredJSONFormatter().format(make_record()))

        assert log_data["connection_id"] == "conn-123"
        clear_log_context()

    def test_format_includes_extra_fields(self):
        record = make_record(total_clicks=42)

        log_data = json.loads(StructuredJSONFormatter().format(record))

        assert log_data["total_clicks"] == 42

    def test_oversized_message_is_truncated(self):
        record = make_record(msg="x" * 200_000)

        formatted = StructuredJSONFormatter().format(record)

        assert json.loads(formatted)["message"].endswith("... [TRUNCATED]")


class TestHumanReadableFormatter:
    def test_short_connection_id_in_output(self):
        clear_log_context()
        set_log_context(connection_id="0123456789abcdef")

        formatted = HumanReadableFormatter().format(make_record())

        assert "[01234567]" in formatted
        assert "Test message" in formatted
        clear_log_context()

    def test_placeholder_without_connection(self):
        clear_log_context()

        formatted = HumanReadableFormatter().format(
            make_record(level=logging.ERROR)
        )

        assert "[-] ERROR" in formatted


class TestExcludeMetricsFilter:
    def test_excludes_monitoring_paths(self):
        log_filter = ExcludeMetricsFilter(["/metrics", "/health"])

        assert not log_filter.filter(
            make_record('127.0.0.1:1 - "GET /metrics HTTP/1.1" 200')
        )
        assert not log_filter.filter(
            make_record('127.0.0.1:1 - "GET /health HTTP/1.1" 200')
        )

    def test_keeps_other_requests(self):
        log_filter = ExcludeMetricsFilter(["/metrics"])

        assert log_filter.filter(
            make_record('127.0.0.1:1 - "GET / HTTP/1.1" 101')
        )
