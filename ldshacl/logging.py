"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
import sys

import structlog

from .config import get_settings


def setup_logging(level: str | None = None) -> None:
    """Configure structlog + stdlib logging.

    Without an explicit ``level`` the configured ``log_level`` setting is used.
    """
    if level is None:
        level = get_settings().log_level.value
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.INFO)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a bound logger, optionally named."""
    return structlog.get_logger(name)  # type: ignore[return-value]
