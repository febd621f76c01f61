"""Tests for console/JSONL log rendering and logger setup."""

import json
import logging

from help_articles.config import LoggingConfig
from help_articles.logging_utils import (
    ConsoleEventFormatter,
    JsonlFormatter,
    event_fields,
    log_event,
    setup_logging,
)


def _record(message="Fetched from network", **fields):
    record = logging.LogRecord("help_articles.repository", logging.INFO, __file__, 1, message, None, None)
    record.__dict__.update(fields)
    return record


def test_event_fields_only_returns_extras():
    record = _record(event="fetch_success", key="articles/1")

    assert event_fields(record) == {"event": "fetch_success", "key": "articles/1"}


def test_console_formatter_appends_event_and_key():
    formatter = ConsoleEventFormatter()

    assert formatter.format(_record(event="fetch_success", key="articles")) == (
        "Fetched from network [fetch_success articles]"
    )
    assert formatter.format(_record(event="cache_cleared")) == "Fetched from network [cache_cleared]"
    assert formatter.format(_record()) == "Fetched from network"


def test_jsonl_formatter_writes_one_object_per_record():
    line = JsonlFormatter().format(_record(event="fetch_failed", key="articles/7", is_network_error=True))

    payload = json.loads(line)
    assert payload["level"] == "INFO"
    assert payload["logger"] == "help_articles.repository"
    assert payload["message"] == "Fetched from network"
    assert payload["event"] == "fetch_failed"
    assert payload["key"] == "articles/7"
    assert payload["is_network_error"] is True
    assert payload["timestamp"].endswith("+00:00")
    assert "\n" not in line


def test_setup_logging_writes_jsonl_file_and_quiets_httpx(tmp_path):
    cfg = LoggingConfig(level="DEBUG", console=False, file=True, filename="run.jsonl")

    logger = setup_logging(cfg, tmp_path / "logs")
    log_event(logger.getChild("repository"), "Cache cleared", event="cache_cleared")
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "logs" / "run.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[-1])["event"] == "cache_cleared"
    assert logger.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING

    for handler in logger.handlers:
        handler.close()
    logger.handlers = []


def test_unknown_level_falls_back_to_info():
    logger = setup_logging(LoggingConfig(level="chatty", console=False))

    assert logger.level == logging.INFO
    assert logger.handlers == []


def test_log_event_without_logger_is_noop():
    log_event(None, "ignored", event="nothing")
