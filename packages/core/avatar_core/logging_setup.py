"""Structured local logging setup."""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import config_root

_LOGGER_NAME = "avatargen"


def log_dir() -> Path:
    path = config_root() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        if hasattr(record, "event"):
            payload["event"] = getattr(record, "event")
        return json.dumps(payload, ensure_ascii=True)


def configure_logging(keep_files: int = 7, console: bool = True, directory: Path | None = None) -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    base = directory or log_dir()
    base.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(base / "avatargen.log"),
        when="midnight",
        backupCount=max(2, keep_files),
        encoding="utf-8",
    )
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        logger.addHandler(stream_handler)

    logger.info("logging configured", extra={"event": "logging_configured"})
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)

