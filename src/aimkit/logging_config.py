"""Logging setup for the aimkit command-line tools.

Library modules log through ``logging.getLogger(__name__)`` and attach
migration context (document ids, tallies) with ``extra=``. The formatters
here render that context: as ``key=value`` pairs in text mode, as top-level
keys in JSON mode.

Environment variables:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL. Default: INFO
- LOG_FORMAT: 'text' or 'json'. Default: text
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from typing import IO, Any

NAMESPACE = "aimkit"
FORMATS = ("text", "json")

# Everything a bare LogRecord carries; other attributes arrived via ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Return the ``extra=`` fields attached to a record, sorted by name."""
    return {
        key: value
        for key, value in sorted(vars(record).items())
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line; context fields sit beside the message."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record_context(record).items():
            entry.setdefault(key, value)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """``LEVEL [logger] message key=value ...``, logger shown without the package prefix."""

    def format(self, record: logging.LogRecord) -> str:
        name = record.name.removeprefix(f"{NAMESPACE}.")
        line = f"{record.levelname:<8} [{name}] {record.getMessage()}"

        context = record_context(record)
        if context:
            line += " " + " ".join(f"{key}={value}" for key, value in context.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def level_from_env() -> int:
    """Log level named by LOG_LEVEL; INFO when unset or unknown."""
    name = os.environ.get("LOG_LEVEL", "INFO").upper()
    if name == "WARN":
        name = "WARNING"
    level = logging.getLevelNamesMapping().get(name)
    return level if level is not None and name != "NOTSET" else logging.INFO


def format_from_env() -> str:
    """Output format named by LOG_FORMAT; 'text' when unset or unknown."""
    name = os.environ.get("LOG_FORMAT", "text").lower()
    return name if name in FORMATS else "text"


def configure_logging(
    level: int | None = None,
    format_type: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Install a single handler on the ``aimkit`` logger.

    Safe to call repeatedly; earlier handlers are replaced.

    Args:
        level: Log level. Defaults to LOG_LEVEL.
        format_type: 'text' or 'json'. Defaults to LOG_FORMAT.
        stream: Destination. Defaults to stderr so stdout stays free for
            command output.

    Returns:
        The configured package logger.
    """
    level = level_from_env() if level is None else level
    format_type = format_from_env() if format_type is None else format_type

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JSONFormatter() if format_type == "json" else TextFormatter())

    package_logger = logging.getLogger(NAMESPACE)
    package_logger.setLevel(level)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.propagate = False
    return package_logger
