from __future__ import annotations

import datetime as dt
import json
import logging
import logging.config
import os
import sys
from typing import Any, Dict, Optional


def _log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def _log_destination() -> str:
    return os.getenv("LOG_DESTINATION", "stdout").lower()


def _log_format() -> str:
    return os.getenv("LOG_FORMAT", "text").lower()


def _log_file_path() -> Optional[str]:
    return os.getenv("LOG_FILE")


class JsonFormatter(logging.Formatter):
    """One JSON object per line, including fields passed through ``log_event``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": dt.datetime.fromtimestamp(record.created, dt.timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        event = getattr(record, "event", None)
        if event:
            payload["event"] = event
            payload.update(getattr(record, "fields", {}) or {})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def log_event(
    logger: logging.Logger, event: str, level: int = logging.INFO, **fields: Any
) -> None:
    """Log ``event key=value ...`` and attach the fields for structured output."""
    rendered = " ".join(f"{key}={value}" for key, value in fields.items())
    message = f"{event} {rendered}" if rendered else event
    logger.log(level, message, extra={"event": event, "fields": fields})


def configure_logging() -> None:
    destination = _log_destination()
    formatter = "json" if _log_format() == "json" else "standard"
    handlers = {}

    if destination == "file":
        log_file = _log_file_path()
        if not log_file:
            raise RuntimeError("LOG_FILE is required when LOG_DESTINATION=file")
        handlers["default"] = {
            "class": "logging.FileHandler",
            "level": _log_level(),
            "filename": log_file,
            "formatter": formatter,
        }
    else:
        stream = sys.stdout if destination == "stdout" else sys.stderr
        handlers["default"] = {
            "class": "logging.StreamHandler",
            "level": _log_level(),
            "stream": stream,
            "formatter": formatter,
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
                },
                "json": {"()": JsonFormatter},
            },
            "handlers": handlers,
            "root": {"handlers": ["default"], "level": _log_level()},
        }
    )
