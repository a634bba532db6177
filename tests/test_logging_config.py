"""
Tests for umpark_admin.logging_config.

Covers:
- JSON and console formatters
- Session-scoped context
- Audit and error helpers
"""

import json
import logging
import sys

import pytest

from umpark_admin.logging_config import (
    ConsoleFormatter,
    LogContext,
    LogContextManager,
    LogLevel,
    PerformanceTracker,
    StructuredFormatter,
    configure_logging,
    log_error,
    log_event,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg="hello", **extra):
    record = logging.LogRecord("umpark_admin.test", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_outputs_json_with_extra_fields(self):
        formatter = StructuredFormatter(environment="test")

        payload = json.loads(formatter.format(_record(panel="gallery")))

        assert payload["message"] == "hello"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "umpark_admin.test"
        assert payload["service"] == "umpark-admin"
        assert payload["environment"] == "test"
        assert payload["panel"] == "gallery"

    def test_includes_context(self):
        formatter = StructuredFormatter()

        with LogContextManager(session_id="s-1", user_id="user-1"):
            payload = json.loads(formatter.format(_record()))

        assert payload["session_id"] == "s-1"
        assert payload["user_id"] == "user-1"

    def test_includes_exception(self):
        formatter = StructuredFormatter()
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

        payload = json.loads(formatter.format(record))

        assert payload["exception"]["type"] == "RuntimeError"
        assert payload["exception"]["message"] == "boom"
        assert "Traceback" in payload["exception"]["traceback"]


class TestConsoleFormatter:
    def test_includes_session_id(self):
        with LogContextManager(session_id="abc"):
            line = ConsoleFormatter().format(_record("guard resolved"))

        assert "[abc]" in line
        assert "guard resolved" in line
        assert "INFO" in line


class TestLogContext:
    def test_manager_clears_on_exit(self):
        with LogContextManager(session_id="s-2", panel="users"):
            assert LogContext.get_all() == {"session_id": "s-2", "user_id": None, "panel": "users"}

        assert LogContext.get_all() == {"session_id": None, "user_id": None, "panel": None}

    def test_generates_session_id(self):
        with LogContextManager() as ctx:
            assert LogContext.get_session_id() == ctx.session_id
            assert ctx.session_id

    def test_unknown_field_rejected(self):
        with pytest.raises(KeyError):
            LogContext.set("request_id", "x")


class TestHelpers:
    def test_log_event(self, caplog):
        with caplog.at_level(logging.INFO, logger="umpark_admin.audit"):
            log_event("admin_panel_selected", panel="gallery")

        record = caplog.records[-1]
        assert record.getMessage() == "admin_panel_selected"
        assert record.panel == "gallery"
        assert record.levelno == logging.INFO

    def test_log_event_level(self, caplog):
        with caplog.at_level(logging.INFO, logger="umpark_admin.audit"):
            log_event("admin_access_denied", LogLevel.WARNING, outcome="not_admin")

        assert caplog.records[-1].levelno == logging.WARNING

    def test_log_error_attaches_exception(self, caplog):
        exc = ValueError("bad")

        with caplog.at_level(logging.ERROR, logger="umpark_admin.error"):
            log_error("sign_out_failed", exc, source="header")

        record = caplog.records[-1]
        assert record.getMessage() == "sign_out_failed"
        assert record.exc_info[1] is exc
        assert record.source == "header"

    def test_performance_tracker(self, caplog):
        with caplog.at_level(logging.INFO, logger="umpark_admin.performance"):
            with PerformanceTracker("session_check"):
                pass

        record = caplog.records[-1]
        assert record.getMessage() == "session_check_completed"
        assert record.duration_ms >= 0

    def test_performance_tracker_failure(self, caplog):
        with caplog.at_level(logging.INFO, logger="umpark_admin.performance"):
            with pytest.raises(RuntimeError):
                with PerformanceTracker("session_check"):
                    raise RuntimeError("down")

        record = caplog.records[-1]
        assert record.getMessage() == "session_check_failed"
        assert record.levelno == logging.WARNING


class TestConfigureLogging:
    def test_json_handler(self, restore_root_logger):
        configure_logging(level="DEBUG", log_format="json")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, StructuredFormatter)

    def test_console_handler(self, restore_root_logger):
        configure_logging(level=logging.WARNING, log_format="console")

        assert restore_root_logger.level == logging.WARNING
        assert isinstance(restore_root_logger.handlers[0].formatter, ConsoleFormatter)
