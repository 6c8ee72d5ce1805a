"""Observability module for logging."""

from aio_toolkit.observability.logging import (
    LogContext,
    StructuredLogFormatter,
    configure_logging,
    get_logger,
    onboard_logger_name,
)

__all__ = [
    "LogContext",
    "StructuredLogFormatter",
    "configure_logging",
    "get_logger",
    "onboard_logger_name",
]
