"""Tests for structured logging configuration."""

import json
import logging
import sys
from unittest.mock import patch

from securepass.app.core.logging import (
    ContextFilter,
    JSONFormatter,
    get_log_context,
    get_logger,
    get_logging_config,
    setup_logging,
)


def make_record(msg="Test message", level=logging.INFO, exc_info=None):
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


class TestJSONFormatter:
    """Test JSON formatter for structured logging."""

    def test_basic_json_format(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test"
        assert data["message"] == "Test message"
        assert "timestamp" in data
        assert data["source"]["file"] == "test.py"
        assert data["source"]["line"] == 1

    def test_json_format_with_context(self):
        record = make_record("Request processed")
        record.request_id = "req-123"
        record.chat_id = 42
        record.status_code = 201
        record.duration_ms = 1.5

        data = json.loads(JSONFormatter().format(record))

        assert data["request_id"] == "req-123"
        assert data["chat_id"] == 42
        assert data["status_code"] == 201
        assert data["duration_ms"] == 1.5

    def test_json_format_with_extra_fields(self):
        record = make_record("Custom event")
        record.retry_after = 30
        record.debug_mode = False

        data = json.loads(JSONFormatter().format(record))

        assert data["extra"]["retry_after"] == 30
        assert data["extra"]["debug_mode"] is False

    def test_json_format_with_exception(self):
        try:
            raise ValueError("Test error")
        except ValueError:
            record = make_record("Error occurred", logging.ERROR, sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        exception_text = "".join(data["exception"])
        assert "ValueError" in exception_text
        assert "Test error" in exception_text

    def test_json_format_unicode(self):
        data = json.loads(JSONFormatter().format(make_record("Strength: 💪 Strong")))
        assert data["message"] == "Strength: 💪 Strong"


class TestContextFilter:
    """Test context filter for adding default fields."""

    def test_adds_default_fields(self):
        record = make_record()

        assert ContextFilter().filter(record) is True
        for field in ("request_id", "chat_id", "path", "method", "status_code", "duration_ms"):
            assert hasattr(record, field)

    def test_preserves_existing_values(self):
        record = make_record()
        record.request_id = "existing-request"
        record.chat_id = 7

        ContextFilter().filter(record)

        assert record.request_id == "existing-request"
        assert record.chat_id == 7


class TestGetLoggingConfig:
    """Test logging configuration generation."""

    def test_default_text_format(self):
        with patch("securepass.app.core.logging.settings") as mock_settings:
            mock_settings.log_format = "text"
            mock_settings.log_level = "INFO"

            config = get_logging_config()

        assert "standard" in config["formatters"]
        assert "structured" in config["formatters"]
        assert "json" not in config["formatters"]
        assert config["handlers"]["console"]["formatter"] == "standard"

    def test_structured_format(self):
        with patch("securepass.app.core.logging.settings") as mock_settings:
            mock_settings.log_format = "structured"
            mock_settings.log_level = "DEBUG"

            config = get_logging_config()

        assert config["handlers"]["console"]["formatter"] == "structured"
        assert config["handlers"]["console"]["level"] == "DEBUG"
        assert "chat_id=%(chat_id)s" in config["formatters"]["structured"]["format"]

    def test_json_format(self):
        with patch("securepass.app.core.logging.settings") as mock_settings:
            mock_settings.log_format = "json"
            mock_settings.log_level = "WARNING"

            config = get_logging_config()

        assert "json" in config["formatters"]
        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["handlers"]["console"]["level"] == "WARNING"

    def test_context_filter_added(self):
        config = get_logging_config()

        assert "context" in config["filters"]
        assert "context" in config["handlers"]["console"]["filters"]
        assert config["loggers"]["securepass"]["propagate"] is False


class TestGetLogger:
    """Test get_logger function."""

    def test_get_logger_default_name(self):
        assert get_logger().name == "securepass"

    def test_get_logger_custom_name(self):
        assert get_logger("custom.module").name == "custom.module"


class TestGetLogContext:
    """Test get_log_context helper function."""

    def test_basic_context(self):
        context = get_log_context(request_id="req-1", chat_id=42)
        assert context == {"request_id": "req-1", "chat_id": 42}

    def test_context_filters_none(self):
        context = get_log_context(request_id=None, chat_id=42, path=None)
        assert context == {"chat_id": 42}

    def test_zero_chat_id_is_kept(self):
        assert get_log_context(chat_id=0) == {"chat_id": 0}

    def test_context_with_extra(self):
        context = get_log_context(request_id="req-1", method="POST", status_code=201)
        assert context["method"] == "POST"
        assert context["status_code"] == 201


class TestIntegration:
    """Integration tests for logging system."""

    def test_json_logging_output(self, capsys):
        with patch("securepass.app.core.logging.settings") as mock_settings:
            mock_settings.log_format = "json"
            mock_settings.log_level = "INFO"

            setup_logging()
            logger = get_logger("test.integration")
            logger.info(
                "Integration test",
                extra=get_log_context(request_id="abc123", chat_id=99),
            )

            data = json.loads(capsys.readouterr().out.strip())

        assert data["level"] == "INFO"
        assert data["logger"] == "test.integration"
        assert data["message"] == "Integration test"
        assert data["request_id"] == "abc123"
        assert data["chat_id"] == 99
