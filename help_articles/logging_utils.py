"""
Logging setup for the help-article client.

Everything logs under the ``help_articles`` hierarchy. Structured fields
are passed through ``log_event`` as ``extra`` and rendered:
- on the console (rich) as a trailing ``event key`` tag
- in the log file as one JSON object per line
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from .config import LoggingConfig

ROOT_LOGGER = "help_articles"

# httpx/httpcore log every request at INFO, which drowns out read outcomes
_NOISY_LOGGERS = ("httpx", "httpcore")

# Attributes every LogRecord carries; anything else came in through ``extra``
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


def setup_logging(cfg: LoggingConfig, log_dir: Path | None = None) -> logging.Logger:
    level = _parse_level(cfg.level)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    if cfg.console:
        console_handler = RichHandler(rich_tracebacks=True, show_time=False, show_path=False, markup=False)
        console_handler.setLevel(level)
        console_handler.setFormatter(ConsoleEventFormatter())
        logger.addHandler(console_handler)

    if cfg.file and log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / cfg.filename, encoding="utf-8")
        file_handler.setLevel(level)
        if cfg.format == "jsonl":
            file_handler.setFormatter(JsonlFormatter())
        else:
            file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logger.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logger


def log_event(
    logger: logging.Logger | None,
    message: str,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    if logger is None:
        return
    logger.log(level, message, extra=fields)


def event_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the structured fields attached to a record via ``extra``."""
    return {key: value for key, value in record.__dict__.items() if key not in _STANDARD_ATTRS}


class ConsoleEventFormatter(logging.Formatter):
    """Message followed by the event name and read key, when present."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        fields = event_fields(record)
        tag = " ".join(str(fields[name]) for name in ("event", "key") if fields.get(name) is not None)
        return f"{message} [{tag}]" if tag else message


class JsonlFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(event_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def _parse_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO
