"""
Tests for structured logging setup.
"""

import json

import pytest
import structlog

from article_gate.logging_conf import bind_context, clear_context, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    clear_context()
    structlog.reset_defaults()


def json_lines(captured: str) -> list:
    return [json.loads(line) for line in captured.strip().splitlines()]


class TestSetupLogging:
    """Loggers created at import time follow the configuration applied later."""

    def test_json_output_and_level_apply_to_existing_logger(self, capsys):
        """Should render JSON at the configured level for a logger made before setup."""
        logger = get_logger("article_gate.gate")

        setup_logging(level="INFO", json_output=True)
        logger.debug("hidden_event")
        logger.info("article_gate_verdict", state="blocked_post", reasons=["إخلاء المسؤولية مفقود"])

        out = capsys.readouterr().out
        records = json_lines(out)
        assert len(records) == 1
        assert records[0]["event"] == "article_gate_verdict"
        assert records[0]["level"] == "info"
        assert records[0]["logger"] == "article_gate.gate"
        assert records[0]["reasons"] == ["إخلاء المسؤولية مفقود"]
        assert "إخلاء" in out

    def test_debug_level_emits_debug_events(self, capsys):
        """Should emit debug events when configured at DEBUG."""
        logger = get_logger("article_gate.checks")

        setup_logging(level="DEBUG", json_output=True)
        logger.debug("structural_check_complete", words=1300)

        records = json_lines(capsys.readouterr().out)
        assert records[0]["event"] == "structural_check_complete"
        assert records[0]["level"] == "debug"

    def test_unnamed_logger_has_no_logger_key(self, capsys):
        """Should omit the logger field when no name is given."""
        setup_logging(level="INFO", json_output=True)

        get_logger().info("server_starting")

        record = json_lines(capsys.readouterr().out)[0]
        assert "logger" not in record


class TestContext:
    """Request context binding."""

    def test_bound_context_is_merged_then_cleared(self, capsys):
        """Should include bound request_id until the context is cleared."""
        setup_logging(level="INFO", json_output=True)
        logger = get_logger("article_gate.server")

        bind_context(request_id="abc123")
        logger.info("first")
        clear_context()
        logger.info("second")

        first, second = json_lines(capsys.readouterr().out)
        assert first["request_id"] == "abc123"
        assert "request_id" not in second
