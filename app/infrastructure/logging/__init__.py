"""Structured logging infrastructure.

This package provides centralized logging configuration and utilities
for resjson-sync using structlog.

Public API:
    - configure_logging(): Initialize logging for the command line
    - get_module_logger(): Get a logger for the calling module
    - bind_sync_context(): Context manager for command-scoped logging
    - get_correlation_id(): Get current correlation ID from context
    - redact_credentials(): Processor that hides provider credentials
"""

from infrastructure.logging.setup import configure_logging, get_module_logger
from infrastructure.logging.context import bind_sync_context, get_correlation_id
from infrastructure.logging.formatters import CREDENTIAL_KEY_PARTS, redact_credentials

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_sync_context",
    "get_correlation_id",
    "redact_credentials",
    "CREDENTIAL_KEY_PARTS",
]
