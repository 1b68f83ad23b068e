"""
Structured logging for orphaned-data.

Configures structlog once per process and hands out named loggers.  Every
module logs snake_case events with key/value fields::

    logger = get_logger(__name__)
    logger.info("orphans_detected", count=3, types=["old_event"])

JSON output is used when stdout is not a TTY (containers, log shippers);
a coloured console renderer is used otherwise.

Tags:
    logging, structlog, observability
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_SERVICE_NAME = "orphaned-data"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service", _SERVICE_NAME)
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "orphaned-data",
    add_timestamp: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs
        stream: Where log lines go; ``None`` means the current ``sys.stdout``
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_format is None:
        json_format = not (stream or sys.stdout).isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        # Loggers are rebuilt per call so a reconfigured stream takes effect
        cache_logger_on_first_use=False,
    )

    # uvicorn and SQLAlchemy log through the standard library
    logging.basicConfig(format="%(message)s", stream=stream or sys.stdout, level=log_level)


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger bound to *name* (usually ``__name__``)."""
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs of this request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
]
