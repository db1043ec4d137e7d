"""Structured logging configuration.

Ledger events are rendered as JSON lines on stderr so that command
output on stdout stays machine readable. Debug events such as skipped
import rows are filtered out.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_MIN_LEVEL = logging.INFO


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A lazy structlog logger writing JSON lines to stderr.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_MIN_LEVEL),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
    return structlog.get_logger(name)


def _stderr_logger(*_args: Any) -> structlog.PrintLogger:
    """Build a print logger on the current stderr stream."""
    return structlog.PrintLogger(file=sys.stderr)
