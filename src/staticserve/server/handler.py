"""ASGI handler: translates ASGI scope/messages to staticserve types.

The only component that touches raw ASGI requests directly. Converts
scope dicts to typed Request objects, dispatches through middleware and
routing, and sends the response back through ASGI send().
"""

import inspect
from collections.abc import Callable
from typing import Any

from staticserve._internal.asgi import Receive, Scope, Send
from staticserve._internal.invoke import invoke
from staticserve.errors import HTTPError, NotFound
from staticserve.http.request import Request
from staticserve.http.response import StreamingResponse
from staticserve.middleware.protocol import AnyResponse, Next
from staticserve.routing.route import RouteMatch
from staticserve.routing.router import Router
from staticserve.server.errors import handle_http_error, handle_internal_error
from staticserve.server.negotiation import negotiate
from staticserve.server.sender import send_response, send_streaming_response


async def end_of_chain(request: Request) -> AnyResponse:
    """Continuation of a mounted middleware: nothing left to answer."""
    raise NotFound(f"No handler answered {request.method} {request.path!r}")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...],
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        # Innermost handler: router dispatch
        async def dispatch(req: Request) -> AnyResponse:
            match = router.match(req.method, req.path)
            return await _invoke_route(match, req)

        # Wrap middleware around the dispatch (first added = outermost)
        handler: Next = dispatch
        for mw in reversed(middleware):

            async def make_next(req: Request, _mw: Any = mw, _next: Next = handler) -> AnyResponse:
                return await _mw(req, _next)

            handler = make_next

        response = await handler(request)

    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)

    head = request.method == "HEAD"
    if isinstance(response, StreamingResponse):
        await send_streaming_response(response, send, head=head)
    else:
        await send_response(response, send, head=head)


async def _invoke_route(match: RouteMatch, request: Request) -> AnyResponse:
    """Call the matched route with its captures attached to the request."""
    request = request.with_path_params(match.path_params)
    route = match.route

    if route.mounted:
        # Middleware-shaped route (e.g. StaticServe)
        return await route.handler(request, end_of_chain)

    kwargs = _build_handler_kwargs(route.handler, request, match.path_params)
    result = await invoke(route.handler, **kwargs)
    return negotiate(result)


def _build_handler_kwargs(
    handler: Callable[..., Any],
    request: Request,
    path_params: dict[str, str],
) -> dict[str, Any]:
    """Inspect handler signature and build kwargs from request + path params.

    Resolution order:
    1. ``request`` parameter (by name or ``Request`` annotation)
    2. Path parameters, by name, as strings
    """
    sig = inspect.signature(handler, eval_str=True)
    kwargs: dict[str, Any] = {}

    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif name in path_params:
            kwargs[name] = path_params[name]

    return kwargs
