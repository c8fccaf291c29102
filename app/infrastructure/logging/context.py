"""Scoped logging context.

The trigger binds the user and milestone event ids around each event, so the
whole fallback chain of one dispatch shares a correlation id in the logs.
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    user_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind context to every log entry emitted inside the block.

    Args:
        correlation_id: Generated when omitted.
        user_id: User the work is for, if known.
        **extra_context: Further keys, e.g. ``event_id``.

    Example:
        with bind_request_context(user_id=event.user_id, event_id=str(event.event_id)):
            dispatcher.dispatch(pref, message)
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}
    if user_id is not None:
        context["user_id"] = user_id
    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    return structlog.contextvars.get_contextvars().get("correlation_id")


def clear_request_context() -> None:
    """Drop all bound context in the current thread."""
    structlog.contextvars.clear_contextvars()
