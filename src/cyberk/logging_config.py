"""
CYBERK - Structured Logging Configuration
=========================================
Configure structlog for the stepping lifecycle.
"""

import logging
import sys
from typing import Any

import structlog

from cyberk.config import get_settings


def configure_logging(debug: bool = None) -> None:
    """Configure structured logging for the application."""
    if debug is None:
        debug = get_settings().debug

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        # Development: pretty console output
        structlog.configure(
            processors=shared_processors + [
                structlog.dev.ConsoleRenderer(colors=True)
            ],
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(),
            cache_logger_on_first_use=True,
        )
    else:
        # JSON lines through stdlib logging
        structlog.configure(
            processors=shared_processors + [
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer()
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            stream=sys.stderr,
            level=logging.WARNING,
        )


def get_logger(name: str) -> Any:
    """Get a structlog logger."""
    return structlog.get_logger(name)
