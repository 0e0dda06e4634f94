"""Logging configuration for DreamRate."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

ROOT_LOGGER = "dreamrate"
TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Formats records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Structured fields passed as extra={"extra_data": {...}}
        extra = getattr(record, "extra_data", None)
        if isinstance(extra, dict):
            log_data.update(extra)

        return json.dumps(log_data, default=str)


def configure_logging(debug: bool = False, json_output: bool = True) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        debug: Log at DEBUG instead of INFO.
        json_output: Emit JSON lines; plain text otherwise.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()

    log_level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(TEXT_FORMAT))
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace (usually called with __name__)."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
