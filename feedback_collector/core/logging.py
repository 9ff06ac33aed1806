"""Feedback Collector Logging Configuration.

Every handler installed by ``setup_logging`` redacts credentials before a
record is written: bearer tokens, anything shaped like a JWT, and Argon2
hashes. Code should still never log them; the filter is the backstop.
"""

import json
import logging
import re
import sys
from typing import Literal

DEV_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEV_DATEFMT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER = "feedback_collector"

# Noisy loggers capped at WARNING; sqlalchemy.engine would print bound
# parameters, including password hashes.
QUIET_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine")

_REDACTIONS = (
    (re.compile(r"(Bearer\s+)\S+", re.IGNORECASE), r"\1[REDACTED]"),
    (re.compile(r"eyJ[\w-]+\.[\w-]+\.[\w-]*"), "[REDACTED_TOKEN]"),
    (re.compile(r"\$argon2(?:id|i|d)\$[^\s'\"]+"), "[REDACTED_HASH]"),
)


def redact(text: str) -> str:
    """Mask credentials in a piece of log text."""
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text


class RedactingFilter(logging.Filter):
    """Rewrite the record's message with credentials masked.

    The message is rendered once here so that values passed as ``%`` args
    are redacted too.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = ()
        return True


class DevFormatter(logging.Formatter):
    """Human-readable one-line format; tracebacks are redacted as well."""

    def __init__(self):
        super().__init__(fmt=DEV_FORMAT, datefmt=DEV_DATEFMT)

    def formatException(self, ei) -> str:
        return redact(super().formatException(ei))


class JSONFormatter(logging.Formatter):
    """One JSON object per record, built with json.dumps so it always parses."""

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = redact(self.formatException(record.exc_info))
        return json.dumps(entry, default=str)


def build_handler(format_type: Literal["structured", "dev"] = "dev") -> logging.Handler:
    """A stdout handler with the chosen formatter and credential redaction."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if format_type == "structured" else DevFormatter())
    handler.addFilter(RedactingFilter())
    return handler


def setup_logging(
    level: str = "INFO",
    format_type: Literal["structured", "dev"] = "dev",
) -> None:
    """
    Configure application logging, replacing any existing root handlers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'structured' for JSON lines, 'dev' for readable output
    """
    numeric_level = getattr(logging, level.upper())
    logging.root.handlers = [build_handler(format_type)]
    logging.root.setLevel(numeric_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if numeric_level == logging.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.DEBUG)

    logging.getLogger(ROOT_LOGGER).info(
        f"Logging configured: level={level}, format={format_type}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the feedback_collector namespace."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
