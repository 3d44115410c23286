"""Middleware protocol, Next and Skipper type aliases.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> AnyResponse: ...

No base class required. The framework checks the shape, not the lineage.

The ``next`` callable is the continuation: it runs the rest of the chain
and returns its response. A middleware either answers the request itself
or awaits ``next``; it never does both.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from staticserve.http.request import Request
from staticserve.http.response import Response, StreamingResponse

# Any response type the pipeline can produce
AnyResponse: TypeAlias = Response | StreamingResponse

# The next handler in the middleware chain
Next: TypeAlias = Callable[[Request], Awaitable[AnyResponse]]

# Per-request predicate: True bypasses the middleware entirely
Skipper: TypeAlias = Callable[[Request], bool]


def default_skipper(request: Request) -> bool:  # noqa: ARG001
    """Never skip."""
    return False


class Middleware(Protocol):
    """Protocol for staticserve middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def server_header(request: Request, next: Next) -> AnyResponse:
            response = await next(request)
            return response.with_header("Server", "staticserve")

        # Class middleware
        class StaticServe:
            async def __call__(self, request: Request, next: Next) -> AnyResponse:
                ...
    """

    async def __call__(self, request: Request, next: Next) -> AnyResponse: ...
