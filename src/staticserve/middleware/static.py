"""Static file serving middleware.

Serves a single file per request from a ``FileSource``: resolves the
requested path under the configured root, refuses anything that could
escape it, attaches validators (ETag, Last-Modified) and Cache-Control,
and hands the body back buffered or streamed.

Mount it behind a route with one wildcard capture::

    serve = static_serve(LocalFileSource(), StaticServeConfig(root="/var/www"))
    app.mount("/{file:path}", serve)

or add it as global middleware, in which case the request path itself
is the file path.
"""

import mimetypes
import os
from typing import BinaryIO

import anyio

from staticserve.config import StaticServeConfig
from staticserve.errors import (
    HTTPError,
    NotAllowAccessDot,
    NotAllowQueryString,
    OutOfPath,
    StaticFileNotFound,
    static_serve_error,
)
from staticserve.http.headers import HeaderSet
from staticserve.http.request import Request
from staticserve.http.response import Response, StreamingResponse
from staticserve.http.validators import cache_control, http_date, strong_etag, weak_etag
from staticserve.middleware.protocol import AnyResponse, Next, default_skipper
from staticserve.sources import FileSource, LocalFileSource

# Bytes read per chunk when streaming a file body
CHUNK_SIZE = 64 * 1024


class StaticServe:
    """Middleware that serves files from a ``FileSource``.

    Holds only the source and the frozen config, so one instance is safe
    to share across concurrent requests. Every request re-checks and
    re-reads the file; nothing is cached between requests.

    Security: the requested path is joined onto ``config.root`` and
    cleaned; if the result is not the root or inside it the request
    fails with ``OutOfPath`` before the source is asked about the file.

    Usage::

        app.mount("/static/{file:path}", StaticServe(
            LocalFileSource(),
            StaticServeConfig(root="./public", max_age=3600),
        ))
    """

    __slots__ = ("_cache_control", "_config", "_skipper", "_source")

    def __init__(self, source: FileSource, config: StaticServeConfig) -> None:
        self._source = source
        self._config = config
        self._skipper = config.skipper or default_skipper
        self._cache_control = cache_control(config.max_age, config.s_maxage)

    @property
    def source(self) -> FileSource:
        return self._source

    @property
    def config(self) -> StaticServeConfig:
        return self._config

    async def __call__(self, request: Request, next: Next) -> AnyResponse:
        """Serve the requested file or fall through to *next*."""
        config = self._config
        if self._skipper(request):
            return await next(request)

        file = requested_file(request)
        if config.deny_dot and has_dot_segment(file):
            raise NotAllowAccessDot()

        path = join_root(config.root, file)
        if not is_within_root(config.root, path):
            raise OutOfPath()

        if config.deny_query_string and request.query_string:
            raise NotAllowQueryString()

        if not self._source.exists(path):
            if config.not_found_next:
                return await next(request)
            raise StaticFileNotFound()

        headers = HeaderSet()
        headers.set("Content-Type", content_type_for(path))

        # A strong ETag needs the content; keep it as the body
        content: bytes | None = None
        if not config.disable_etag and config.enable_strong_etag:
            content = await self._read(path)

        if not config.disable_etag:
            if content is not None:
                headers.set("ETag", strong_etag(content))
            else:
                stat = self._source.stat(path)
                if stat is not None:
                    headers.set("ETag", weak_etag(stat))

        if not config.disable_last_modified:
            stat = self._source.stat(path)
            if stat is not None:
                headers.set("Last-Modified", http_date(stat.modified))

        for name, value in config.headers:
            headers.set(name, value)
        if self._cache_control:
            headers.set("Cache-Control", self._cache_control)

        media_type = headers.pop("Content-Type") or "application/octet-stream"
        if content is not None:
            return Response(body=content, content_type=media_type).with_headers(headers.items())

        stream = await self._open(path)
        return StreamingResponse(
            chunks=FileChunks(stream),
            content_type=media_type,
        ).with_headers(headers.items())

    # ------------------------------------------------------------------
    # Source access
    # ------------------------------------------------------------------

    async def _read(self, path: str) -> bytes:
        """Read the whole file; failures without a status become 500."""
        try:
            return await anyio.to_thread.run_sync(self._source.read, path)
        except HTTPError:
            raise
        except Exception as exc:
            raise static_serve_error(str(exc), 500) from exc

    async def _open(self, path: str) -> BinaryIO:
        """Open the file for streaming; failures without a status become 400."""
        try:
            return await anyio.to_thread.run_sync(self._source.open_stream, path)
        except HTTPError:
            raise
        except Exception as exc:
            raise static_serve_error(str(exc), 400) from exc


def static_serve(source: FileSource, config: StaticServeConfig) -> StaticServe:
    """Create a static-serve middleware bound to *source*."""
    return StaticServe(source, config)


def default_static_serve(config: StaticServeConfig) -> StaticServe:
    """Create a static-serve middleware reading from the local filesystem."""
    return StaticServe(LocalFileSource(), config)


# ----------------------------------------------------------------------
# Path handling
# ----------------------------------------------------------------------


def requested_file(request: Request) -> str:
    """The first route capture, or the URL path when there is none."""
    captured = next(iter(request.path_params.values()), "")
    return captured or request.path


def has_dot_segment(file: str) -> bool:
    """True if any non-empty ``/`` segment starts with ``.``."""
    return any(segment.startswith(".") for segment in file.split("/") if segment)


def join_root(root: str, file: str) -> str:
    """Join *file* onto *root* and clean the result.

    Segments are split on ``/`` so an absolute request path is appended
    to the root instead of replacing it; ``.`` and ``..`` are resolved.
    """
    segments = [segment for segment in file.split("/") if segment]
    return os.path.normpath(os.path.join(root, *segments))


def is_within_root(root: str, path: str) -> bool:
    """True if *path* is *root* or lies below it.

    Compares on a separator boundary, so ``/var/www2`` is outside
    ``/var/www``.
    """
    if path == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return path.startswith(prefix)


def content_type_for(path: str) -> str:
    """Media type from the file extension."""
    content_type, _ = mimetypes.guess_type(path)
    return content_type or "application/octet-stream"


class FileChunks:
    """Async iterator over a binary stream, read off the event loop.

    The stream is closed once it is exhausted or when ``aclose()`` is
    called, whether or not iteration ever started (a HEAD response never
    reads the body).
    """

    __slots__ = ("_chunk_size", "_stream")

    def __init__(self, stream: BinaryIO, chunk_size: int = CHUNK_SIZE) -> None:
        self._stream = stream
        self._chunk_size = chunk_size

    def __aiter__(self) -> "FileChunks":
        return self

    async def __anext__(self) -> bytes:
        chunk = await anyio.to_thread.run_sync(self._stream.read, self._chunk_size)
        if not chunk:
            self._stream.close()
            raise StopAsyncIteration
        return chunk

    async def aclose(self) -> None:
        self._stream.close()
