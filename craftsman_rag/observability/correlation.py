"""
Request correlation ids.

One id per HTTP request, held in a ContextVar so that log records emitted
from the threadpool and from the SSE relay carry the same value.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import uuid
from contextvars import ContextVar

_current_id: ContextVar[str] = ContextVar("craftsman_correlation_id", default="")


def new_correlation_id() -> str:
    return uuid.uuid4().hex


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Bind ``correlation_id`` (or a fresh one) to the current context.

    Returns:
        str: The bound id
    """
    bound = correlation_id.strip() if correlation_id and correlation_id.strip() else new_correlation_id()
    _current_id.set(bound)
    return bound


def get_correlation_id() -> str:
    """Bound id, or an empty string outside a request."""
    return _current_id.get()


def clear_correlation_id() -> None:
    _current_id.set("")
