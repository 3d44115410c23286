"""staticserve exception hierarchy.

Shared across the router, the request pipeline, the file sources and the
static-serve middleware so every module raises and catches the same types.
"""

from dataclasses import dataclass

# Category attached to every error raised by the static-serve middleware
STATIC_SERVE_CATEGORY = "static-serve"


class StaticServeError(Exception):
    """Base for all staticserve-specific errors."""


class ConfigurationError(StaticServeError):
    """Raised when configuration is invalid.

    Raised eagerly by ``StaticServeConfig`` and during ``App._freeze()``
    so bad settings fail at startup, not on the first request.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(StaticServeError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, middleware, handlers, or a file source. The ASGI
    handler catches these and dispatches to the matching ``@app.error()``
    handler.

    A file source that raises ``HTTPError`` keeps its status: the
    static-serve middleware passes it through unchanged instead of
    wrapping it.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()
    category: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route or file matched the request path."""

    def __init__(self, detail: str = "Not Found", category: str = "") -> None:
        super().__init__(status=404, detail=detail, category=category)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


# -- Static serve --


class StaticFileNotFound(NotFound):
    """404: the resolved file does not exist in the file source."""

    def __init__(self, detail: str = "static file not found") -> None:
        super().__init__(detail=detail, category=STATIC_SERVE_CATEGORY)


class NotAllowQueryString(HTTPError):  # noqa: N818
    """400: a query string was sent while ``deny_query_string`` is set."""

    def __init__(self, detail: str = "static serve not allow query string") -> None:
        super().__init__(status=400, detail=detail, category=STATIC_SERVE_CATEGORY)


class OutOfPath(HTTPError):  # noqa: N818
    """400: the joined file path escapes the configured root."""

    def __init__(self, detail: str = "out of path") -> None:
        super().__init__(status=400, detail=detail, category=STATIC_SERVE_CATEGORY)


class NotAllowAccessDot(HTTPError):  # noqa: N818
    """400: a path segment starts with ``.`` while ``deny_dot`` is set."""

    def __init__(self, detail: str = "static server not allow with dot") -> None:
        super().__init__(status=400, detail=detail, category=STATIC_SERVE_CATEGORY)


def static_serve_error(detail: str, status: int) -> HTTPError:
    """Build a static-serve ``HTTPError`` for a wrapped backend failure."""
    return HTTPError(status=status, detail=detail, category=STATIC_SERVE_CATEGORY)
