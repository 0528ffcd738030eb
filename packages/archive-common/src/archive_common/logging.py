"""
Structured logging setup for Transcriptorator.

Configures structlog for JSON-formatted structured logging. Every log line
includes timestamp, level, service name, and event. Per-request context
(session slug, query) is bound where the work happens.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor


def configure_logging(
    service: str,
    level: str = "INFO",
    json_output: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        service: Service name bound to every log line.
        level: Minimum log level name.
        json_output: Render JSON lines when ``True``, coloured console
            output otherwise.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    renderer: Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(service=service)
