"""Command context binding for structured logging.

Binds a correlation id and command metadata to every log entry emitted
while a synchronization command runs, including entries from worker
threads that copy the context.

Usage:
    from infrastructure.logging import bind_sync_context

    with bind_sync_context(command="push-resources", project="my-app"):
        synchronizer.push_all_resources()
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_sync_context(
    correlation_id: Optional[str] = None,
    command: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind command-scoped context to all logs within the block.

    Args:
        correlation_id: Unique run identifier. Auto-generated if not provided.
        command: Command name (e.g., "pull-translations").
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation id in effect.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}
    if command is not None:
        context["command"] = command
    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context."""
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")
