"""Log level vocabulary accepted by GOPHER_LOG_LEVEL."""
from __future__ import annotations

import logging
from enum import Enum

TRACE = 5


class LogLevel(str, Enum):
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"
    PANIC = "panic"
    DISABLED = "disabled"

    @property
    def stdlib_level(self) -> int:
        return _STDLIB_LEVELS[self]


_STDLIB_LEVELS = {
    LogLevel.TRACE: TRACE,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.FATAL: logging.CRITICAL,
    LogLevel.PANIC: logging.CRITICAL + 5,
    LogLevel.DISABLED: logging.CRITICAL + 100,
}


def parse_log_level(value: str) -> LogLevel:
    """Parse a level name case-insensitively. Raises ValueError when unknown."""
    normalized = value.strip().lower()
    try:
        return LogLevel(normalized)
    except ValueError:
        accepted = ", ".join(level.value for level in LogLevel)
        raise ValueError(
            f"Unknown log level {value!r}. Accepted values: {accepted}"
        ) from None
