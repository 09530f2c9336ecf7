"""Logging setup for request_retry.

Library modules only call `logging.getLogger("request_retry.<area>")` and
never install handlers. Applications that want the package's retry logs on
a stream call configure_logging() once at startup:

    >>> from request_retry.runtime.observability import configure_logging
    >>> configure_logging(format="json", level="DEBUG")

Defaults come from LoggingSettings (REQUEST_RETRY_LOG_LEVEL,
REQUEST_RETRY_LOG_FORMAT).
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from typing import Literal, TextIO

import orjson

from request_retry.foundation.config import get_settings

ROOT_LOGGER = "request_retry"

_HANDLER_NAME = "request_retry.handler"
_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(data, default=str).decode()


def configure_logging(
    format: Literal["text", "json"] | None = None,  # noqa: A002 - matches LoggingSettings.format
    level: str | None = None,
    *,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Attach a single stream handler to the `request_retry` logger.

    Args:
        format: "text" (human) or "json" (machine); default from settings
        level: Minimum level name; default from settings
        stream: Output stream (default: stderr)

    Returns:
        The installed handler. Calling again replaces it.
    """
    settings = get_settings().logging
    fmt = format or settings.format
    if fmt not in ("text", "json"):
        raise ValueError(f"Unknown format: {fmt}. Use 'text' or 'json'")
    level_name = (level or settings.level).upper()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JsonFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT))

    log = logging.getLogger(ROOT_LOGGER)
    for h in [h for h in log.handlers if h.get_name() == _HANDLER_NAME]:
        log.removeHandler(h)
    log.addHandler(handler)
    log.setLevel(getattr(logging, level_name, logging.INFO))
    return handler
