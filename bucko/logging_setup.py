"""
Structured JSON logging for Bucko.

The package logs through the standard ``logging`` module under the ``bucko``
namespace and installs no handlers by default. Call
``setup_structured_logger`` to emit one JSON object per line instead.
"""

import logging
import sys
import json
from typing import Any, Dict, Mapping, Optional, TextIO

REDACTED = "***REDACTED***"

_SENSITIVE_HEADERS = ("authorization", "cookie", "token", "secret", "api-key", "apikey")


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string with timestamp, logger name, level, message
        """
        payload: Dict[str, Any] = {
            "ts": int(record.created * 1000),  # milliseconds
            "name": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        for key in ("method", "url", "status_code"):
            if hasattr(record, key):
                payload[key] = getattr(record, key)

        return json.dumps(payload, default=str)


def setup_structured_logger(
    level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure structured JSON logging for Bucko.

    Args:
        level: Logging level (default: logging.INFO)
        stream: Output stream (default: sys.stdout)

    Returns:
        The configured ``bucko`` logger

    Example:
        >>> from bucko.logging_setup import setup_structured_logger
        >>> setup_structured_logger(logging.DEBUG)
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter())

    bucko_logger = logging.getLogger("bucko")
    bucko_logger.setLevel(level)
    bucko_logger.handlers = [handler]
    bucko_logger.propagate = False
    return bucko_logger


def sanitize_headers(headers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Redact credential-bearing headers before they are logged.

    Example:
        >>> sanitize_headers({"Authorization": "Bearer abc", "Accept": "*/*"})
        {'Authorization': '***REDACTED***', 'Accept': '*/*'}
    """
    sanitized = dict(headers or {})

    for key in sanitized:
        if any(sensitive in key.lower() for sensitive in _SENSITIVE_HEADERS):
            sanitized[key] = REDACTED

    return sanitized
