"""Error handling pipeline for requests.

Maps HTTPError exceptions and unexpected failures to Response objects,
using registered error handlers or plain-text defaults. This is where
errors are logged; middleware and handlers only raise.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from staticserve._internal.invoke import invoke
from staticserve.errors import HTTPError
from staticserve.http.request import Request
from staticserve.http.response import Response, StreamingResponse
from staticserve.server.negotiation import negotiate

logger = logging.getLogger("staticserve.server")


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
) -> Response | StreamingResponse:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async error handlers.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = await invoke(handler, request, exc)
    elif len(params) == 1:
        result = await invoke(handler, request)
    else:
        result = await invoke(handler)

    return negotiate(result)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response | StreamingResponse:
    """Map an HTTPError to a Response using registered error handlers."""
    logger.debug("%d %s %s - %s", exc.status, request.method, request.path, exc.detail)

    # Try exact exception type, then status code
    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        # Preserve the HTTP status from the exception unless the handler
        # explicitly chose its own
        if response.status == 200:
            response = response.with_status(exc.status)
        return response

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.category:
        detail = f"{detail} [{exc.category}]"

    response = Response(body=detail, content_type="text/plain; charset=utf-8", status=exc.status)
    return response.with_headers(list(exc.headers))


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response | StreamingResponse:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(500) or error_handlers.get(type(exc))
    if handler is not None:
        return await call_error_handler(handler, request, exc)

    body = f"Internal Server Error: {exc!r}" if debug else "Internal Server Error"
    return Response(body=body, content_type="text/plain; charset=utf-8", status=500)
