"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest

from vynix.utils.logging import (
    ConsoleFormatter,
    JSONFormatter,
    get_logger,
    log_with_context,
    setup_logging,
)


def make_record(context: dict | None = None) -> logging.LogRecord:
    record = logging.LogRecord(
        "vynix.cache", logging.INFO, __file__, 10, "Cache hit", None, None
    )
    if context is not None:
        record.context = context
    return record


class TestFormatters:
    """Tests for log formatters."""

    def test_json_includes_context(self) -> None:
        data = json.loads(JSONFormatter().format(make_record({"key": "abc..."})))

        assert data["message"] == "Cache hit"
        assert data["level"] == "INFO"
        assert data["logger"] == "vynix.cache"
        assert data["key"] == "abc..."

    def test_console_without_color(self) -> None:
        line = ConsoleFormatter(use_color=False).format(make_record({"key": "abc"}))
        assert line == "INFO     vynix.cache: Cache hit [key=abc]"

    def test_console_without_context(self) -> None:
        line = ConsoleFormatter(use_color=False).format(make_record())
        assert line.endswith("vynix.cache: Cache hit")


class TestSetupLogging:
    """Tests for logging configuration."""

    def test_level_and_handlers(self) -> None:
        logger = setup_logging(level="debug", use_color=False)

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_file_handler_writes_json(self, temp_dir: Path) -> None:
        log_file = temp_dir / "logs" / "vynix.log"
        setup_logging(level="INFO", log_file=log_file)

        log_with_context(get_logger("vynix.test"), logging.INFO, "hello", entries=3)
        for handler in logging.getLogger("vynix").handlers:
            handler.flush()

        record = json.loads(log_file.read_text().splitlines()[-1])
        assert record["message"] == "hello"
        assert record["entries"] == 3

    def test_log_with_context_respects_level(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        logger = get_logger("vynix.quiet")
        logger.setLevel(logging.WARNING)
        try:
            with caplog.at_level(logging.WARNING, logger="vynix.quiet"):
                log_with_context(logger, logging.DEBUG, "hidden", key="x")
                log_with_context(logger, logging.WARNING, "shown", key="y")
        finally:
            logger.setLevel(logging.NOTSET)

        assert [r.getMessage() for r in caplog.records] == ["shown"]
        assert caplog.records[0].context == {"key": "y"}
