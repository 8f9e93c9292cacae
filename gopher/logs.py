"""
Structured logging setup.

Usage:
    from gopher.logs import configure_logging

    config = load_config()
    logger = configure_logging(config)
    logger.info("starting", port=config.port)

Modules get their own loggers with ``structlog.get_logger(__name__)``.
"""
from __future__ import annotations

import logging
import sys
import time
from typing import IO, Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from gopher.config.levels import TRACE
from gopher.config.settings import RuntimeConfig

APP_NAME = "gopher"


def add_unix_ms_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ``timestamp`` as integer milliseconds since the epoch."""
    event_dict["timestamp"] = int(time.time() * 1000)
    return event_dict


def app_context(config: RuntimeConfig) -> Processor:
    """Build a processor that tags every event with the app and its deployment."""

    def add_app_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict["app"] = APP_NAME
        event_dict["env"] = config.env.value
        if config.heroku.dyno_id:
            event_dict["dyno"] = config.heroku.dyno_id
        return event_dict

    return add_app_context


def configure_logging(config: RuntimeConfig, stream: IO[str] | None = None) -> Any:
    """
    Configure structlog JSON logging at ``config.log_level`` and return a logger.

    Args:
        config: Assembled runtime configuration
        stream: Output stream, stdout by default
    """
    logging.addLevelName(TRACE, "TRACE")
    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stdout,
        level=config.log_level.stdlib_level,
        force=True,
    )

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_unix_ms_timestamp,
        app_context(config),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    return structlog.get_logger(APP_NAME)
