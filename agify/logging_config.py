"""Opt-in log output for the ``agify`` logger hierarchy.

The library never configures the root logger. Applications that want to see
the client's request/response lines call :func:`setup_logging`, which attaches
one handler to the ``agify`` logger only. Records from ``httpx``/``httpcore``
carry full request URLs (including ``apikey``) and are left to the
application's own logging setup.
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone

from agify.config import settings

LOGGER_NAME = "agify"

# Anything on a record beyond these came in through ``extra=``.
_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime"}


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
    }


def _format_exception(record: logging.LogRecord) -> str | None:
    if record.exc_info and record.exc_info[0] is not None:
        return "".join(traceback.format_exception(*record.exc_info))
    return None


class JSONFormatter(logging.Formatter):
    """Single-line JSON records; ``extra=`` fields become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_extras(record))

        exc_text = _format_exception(record)
        if exc_text:
            entry["exception"] = exc_text

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """``<time> <level> <logger> - <message> key=value ...``"""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(
            record.created, tz=timezone.utc
        ).strftime("%Y-%m-%d %H:%M:%S")
        line = f"{ts} {record.levelname:<8} {record.name} - {record.getMessage()}"

        extras = _extras(record)
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in sorted(extras.items()))

        exc_text = _format_exception(record)
        if exc_text:
            line += "\n" + exc_text

        return line


def setup_logging(log_level: str | None = None, log_format: str | None = None) -> logging.Logger:
    """Send ``agify.*`` records to stderr and return the configured logger.

    Defaults come from ``AGIFY_LOG_LEVEL`` and ``AGIFY_LOG_FORMAT``. Calling it
    again replaces the previous handler.
    """
    log_level = log_level or settings.log_level
    log_format = log_format or settings.log_format

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.handlers.clear()
    logger.propagate = False

    handler = logging.StreamHandler(sys.stderr)
    if log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    logger.addHandler(handler)
    return logger
