"""Structured logging infrastructure.

Centralized logging configuration and utilities for localekit using
structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_logger(): Get a logger instance with a specific name
    - get_module_logger(): Get a logger for the calling module
    - bind_localization_context(): Context manager for delivery-scoped logging
    - get_correlation_id(): Get current correlation ID from context
    - set_correlation_id(): Set correlation ID in context
    - clear_localization_context(): Clear all bound context
"""

from localekit.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
)

from localekit.logging.context import (
    bind_localization_context,
    get_correlation_id,
    set_correlation_id,
    clear_localization_context,
)

__all__ = [
    # Setup
    "configure_logging",
    "get_logger",
    "get_module_logger",
    # Context
    "bind_localization_context",
    "get_correlation_id",
    "set_correlation_id",
    "clear_localization_context",
]
