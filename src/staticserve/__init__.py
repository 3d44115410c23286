"""staticserve: static file serving middleware for ASGI pipelines.

Resolves a request path to a file in a pluggable ``FileSource`` (the local
filesystem or an in-memory asset bundle), attaches ETag, Last-Modified and
Cache-Control headers, and returns the body buffered or streamed.

Basic usage::

    from staticserve import App, StaticServeConfig, default_static_serve

    app = App()
    app.mount("/{file:path}", default_static_serve(StaticServeConfig(
        root="/var/www",
        max_age=365 * 24 * 3600,
        s_maxage=3600,
        deny_query_string=True,
    )))

Packaged assets (no stat, so use a strong ETag)::

    from staticserve import AssetFileSource, static_serve

    source = AssetFileSource.from_package("myapp", "public")
    serve = static_serve(source, StaticServeConfig(root="/", enable_strong_etag=True))
"""

__version__ = "0.1.0"
__all__ = [
    "AnyResponse",
    "App",
    "AssetFileSource",
    "ConfigurationError",
    "FileSource",
    "FileStat",
    "HTTPError",
    "LocalFileSource",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotAllowAccessDot",
    "NotAllowQueryString",
    "NotFound",
    "OutOfPath",
    "Request",
    "Response",
    "Skipper",
    "StaticFileNotFound",
    "StaticServe",
    "StaticServeConfig",
    "StaticServeError",
    "StreamingResponse",
    "default_static_serve",
    "static_serve",
]

_ERRORS = (
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "NotAllowAccessDot",
    "NotAllowQueryString",
    "NotFound",
    "OutOfPath",
    "StaticFileNotFound",
    "StaticServeError",
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import staticserve`` fast while providing a clean top-level API.
    """
    if name == "App":
        from staticserve.app import App

        return App

    if name == "StaticServeConfig":
        from staticserve.config import StaticServeConfig

        return StaticServeConfig

    if name in ("StaticServe", "static_serve", "default_static_serve"):
        from staticserve.middleware import static as _static

        return getattr(_static, name)

    if name in ("FileSource", "FileStat", "LocalFileSource", "AssetFileSource"):
        from staticserve import sources as _sources

        return getattr(_sources, name)

    if name == "Request":
        from staticserve.http.request import Request

        return Request

    if name in ("Response", "StreamingResponse"):
        from staticserve.http import response as _resp

        return getattr(_resp, name)

    if name in ("AnyResponse", "Middleware", "Next", "Skipper"):
        from staticserve.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in _ERRORS:
        from staticserve import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
