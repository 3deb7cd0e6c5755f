"""Structured logging configuration using structlog.

Provides JSON logging in production and colorized console output in development.
Developer identities (names, emails) are redacted from log events; ids and
aggregate numbers are kept.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from devmetrics.config import Environment, get_settings


def _filter_identity(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Remove personal identity fields from log events."""
    identity_keys = {"name", "developer_name", "email", "username"}
    for key in list(event_dict.keys()):
        if key in identity_keys:
            event_dict[key] = "[PII_REDACTED]"
    return event_dict


def setup_logging() -> None:
    """Configure structured logging for the engine."""
    settings = get_settings()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _filter_identity,
    ]

    if settings.environment == Environment.PRODUCTION:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.log_level.upper()))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger backed by the stdlib logger ``name``.

    Events are filtered by stdlib levels and handlers, so nothing is emitted
    below WARNING until the host configures logging (or calls
    ``setup_logging``).
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
