"""Context binding for structured logging.

Binds correlation data to every log entry emitted while a localized
message is being delivered, so the per-recipient events of one broadcast
can be tied together.

Usage:
    from localekit.logging import bind_localization_context

    with bind_localization_context(message_key="game.start"):
        logger.info("delivering")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_localization_context(
    correlation_id: Optional[str] = None,
    message_key: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind delivery-scoped context to all logs within the block.

    Args:
        correlation_id: Unique identifier. Auto-generated if not provided.
        message_key: Key of the message being delivered (if any).
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation ID bound for the block.
    """
    context: dict[str, Any] = {}
    context["correlation_id"] = correlation_id or str(uuid.uuid4())

    if message_key is not None:
        context["message_key"] = message_key

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID in the current logging context.

    Args:
        correlation_id: The correlation ID to set.
    """
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_localization_context() -> None:
    """Clear all bound context from the logging context."""
    structlog.contextvars.clear_contextvars()
