"""
Panchangam Structured JSON Logging

Provides structured logging with JSON output for services embedding the
Panchangam core. Credentials that reach log messages are redacted.
"""

import json
import logging
import re
import sys

from typing import Any

_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "getMessage",
        "exc_info",
        "exc_text",
        "stack_info",
    }
)


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging output"""

    def _redact(self, text: str) -> str:
        """Redact credentials from a log message.

        - X-API-Key: ... header values
        - api_key=... / apiKey=... in query strings
        """
        text = re.sub(r"(?i)(x-api-key:\s*)[^\s\"',}]+", r"\1[REDACTED]", text)
        text = re.sub(r"(?i)((?:api_key|apikey)=)[^&\s\"]+", r"\1[REDACTED]", text)
        return text

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON

        Args:
            record: Python logging record

        Returns:
            JSON-formatted log string
        """
        base: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": self._redact(record.getMessage()),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            base["exception"] = self._redact(self.formatException(record.exc_info))

        # Extra fields from logger.info("msg", extra={...})
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                base[key] = value

        return json.dumps(base, default=str)


def setup_logging(level: str = "INFO", format_json: bool = True) -> None:
    """
    Setup structured logging

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: Whether to use JSON formatting
    """
    root = logging.getLogger()
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)

    if format_json:
        handler.setFormatter(JsonFormatter())
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)

    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper()))


def get_logger(
    name: str, extra_fields: dict[str, Any] | None = None
) -> logging.Logger | logging.LoggerAdapter:
    """
    Get logger with optional extra fields

    Args:
        name: Logger name (usually __name__)
        extra_fields: Additional fields to include in all log messages

    Returns:
        Logger, or an adapter carrying the extra fields
    """
    logger = logging.getLogger(name)

    if extra_fields:
        return logging.LoggerAdapter(logger, extra_fields)

    return logger


def get_service_logger(component: str) -> logging.Logger | logging.LoggerAdapter:
    """Get logger for almanac fetch components (client, mapper, orchestrator)"""
    return get_logger(
        f"panchangam.services.{component}",
        {"system": "panchangam", "component": component},
    )
