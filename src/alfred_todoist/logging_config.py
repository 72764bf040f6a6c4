"""Centralized logging configuration for the workflow."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime

from alfred_todoist.config import LoggingSettings

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per line with timestamp, level, logger, message, exception."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(settings: LoggingSettings) -> None:
    """Configure the root logger.

    Records go to ``settings.log_path`` when set, otherwise to stderr. Stdout
    is reserved for Script Filter output read by Alfred.
    """

    level = getattr(logging, settings.level.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    handler: logging.Handler
    if settings.log_path is not None:
        settings.log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(settings.log_path, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if settings.log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root_logger.addHandler(handler)
