"""
Request correlation IDs.

The ID lives in a ContextVar. Tasks spawned while handling a request (the
embedding batcher's per-chunk calls, the retriever's per-source searches)
copy the context when created, so their log lines carry the same ID.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import uuid
from contextvars import ContextVar

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Bind a correlation ID to the current context.

    Args:
        correlation_id: Inbound ID; a uuid4 is generated when missing

    Returns:
        str: The bound ID
    """
    value = correlation_id or str(uuid.uuid4())
    correlation_id_ctx.set(value)
    return value


def get_correlation_id() -> str:
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    correlation_id_ctx.set("")
