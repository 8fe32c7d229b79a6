"""Request middleware that runs each request inside the marketplace domain context."""

from fastapi import Request

from marketplace.domain import marketplace
from marketplace.utils.logging import add_context, clear_context


async def domain_context_middleware(request: Request, call_next):
    """Push the Protean domain context for the duration of the request.

    The request path and caller are bound to every log line emitted while handling it.
    """
    clear_context()
    add_context(method=request.method, path=request.url.path, user_id=request.headers.get("x-user-id"))
    try:
        with marketplace.domain_context():
            return await call_next(request)
    finally:
        clear_context()
