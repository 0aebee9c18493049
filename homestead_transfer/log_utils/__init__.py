"""Structured logging for the transfer engine and CLI."""

from homestead_transfer.log_utils.structured_logger import (
    configure_logging,
    ContextTextFormatter,
    get_logger,
    JSONFormatter,
    StructuredLogger,
)

__all__ = [
    "configure_logging",
    "ContextTextFormatter",
    "get_logger",
    "JSONFormatter",
    "StructuredLogger",
]
