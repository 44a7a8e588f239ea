"""
Per-request correlation ID.

The ID lives in a ContextVar. Streaming response bodies are iterated after
the middleware has returned, so bind_to_stream re-binds the request ID
around each step of the body.

Dependencies: contextvars, uuid
System role: Request tracing for log records
"""

import uuid
from collections.abc import AsyncGenerator
from contextlib import aclosing
from contextvars import ContextVar
from typing import TypeVar

T = TypeVar("T")

CORRELATION_HEADER = "X-Correlation-ID"

_current_id: ContextVar[str] = ContextVar("askdocs_correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Bind an ID to the current context, generating a UUID4 when none is given.

    Returns:
        str: The bound ID
    """
    bound = correlation_id or str(uuid.uuid4())
    _current_id.set(bound)
    return bound


def get_correlation_id() -> str:
    """Bound ID, or "" outside a request."""
    return _current_id.get()


def clear_correlation_id() -> None:
    _current_id.set("")


async def bind_to_stream(
    stream: AsyncGenerator[T, None],
    correlation_id: str,
) -> AsyncGenerator[T, None]:
    """
    Yield from stream with correlation_id bound while each item is produced.

    The consumer's own value is restored whenever it regains control.
    Closing the returned generator closes stream.
    """
    async with aclosing(stream):
        while True:
            token = _current_id.set(correlation_id)
            try:
                item = await stream.__anext__()
            except StopAsyncIteration:
                return
            finally:
                _current_id.reset(token)
            yield item
