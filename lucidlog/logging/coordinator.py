"""
lucidlog Request Correlation

Request-scoped correlation context. A RequestContext is an immutable value:
with_request_id() returns a new one instead of changing shared state, and the
context consulted by the logger is held in a ContextVar so that concurrent
threads and asyncio tasks each see their own request id.

Usage:
    ctx = with_request_id(None, "req-1")
    with request_scope(ctx):
        facade.instance().info("handling request")  # carries REQUEST_ID=req-1
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

REQUEST_ID_FIELD = "REQUEST_ID"


@dataclass(frozen=True)
class RequestContext:
    """
    Correlation data for one logical request.

    Attributes:
        request_id: Opaque request identifier, attached to log entries as
            REQUEST_ID when set
        attributes: Extra read-only request-scoped values
    """
    request_id: Optional[str] = None
    attributes: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def with_attributes(self, **values: Any) -> "RequestContext":
        """Return a copy with ``values`` merged into the attributes."""
        merged = dict(self.attributes)
        merged.update(values)
        return replace(self, attributes=MappingProxyType(merged))


request_context: ContextVar[Optional[RequestContext]] = ContextVar(
    "lucidlog_request_context", default=None
)


def new_request_id() -> str:
    """Generate a random request identifier."""
    return str(uuid.uuid4())


def with_request_id(ctx: Optional[RequestContext], request_id: str) -> RequestContext:
    """
    Bind ``request_id`` to a context.

    Args:
        ctx: Existing context, or None to start from an empty one
        request_id: Identifier to bind

    Returns:
        A new RequestContext; ``ctx`` is not modified
    """
    if ctx is None:
        return RequestContext(request_id=request_id)
    return replace(ctx, request_id=request_id)


def set_context(ctx: Optional[RequestContext]) -> Token:
    """Install ``ctx`` as the context consulted by subsequent log lookups."""
    return request_context.set(ctx)


def reset_context(token: Token) -> None:
    """Restore the context that was active before set_context() returned ``token``."""
    request_context.reset(token)


def current_context() -> Optional[RequestContext]:
    return request_context.get()


def current_request_id() -> Optional[str]:
    ctx = request_context.get()
    if ctx is None:
        return None
    return ctx.request_id


@contextmanager
def request_scope(ctx: RequestContext) -> Iterator[RequestContext]:
    """Install ``ctx`` for the duration of the block."""
    token = request_context.set(ctx)
    try:
        yield ctx
    finally:
        request_context.reset(token)
