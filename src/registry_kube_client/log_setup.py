"""structlog configuration for processes embedding the client library."""

from __future__ import annotations

import sys

import structlog


def configure_logging() -> None:
    """Configure structlog for JSON output to stderr, or console output on a TTY."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
