"""HTTP responses with chainable .with_*() transformation API.

Each transformation returns a new response. Immutable by convention,
built incrementally by design.

Two body modes, never mixed:

- ``Response``: the whole body is in memory (sent with Content-Length).
- ``StreamingResponse``: the body is produced chunk by chunk
  (sent with chunked transfer encoding).
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator, Mapping
from dataclasses import dataclass, replace


def _find_header(headers: tuple[tuple[str, str], ...], name: str) -> str | None:
    key = name.lower()
    for header_name, value in headers:
        if header_name.lower() == key:
            return value
    return None


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response with a buffered body.

    Construct with a body, then chain ``.with_*()`` calls to set
    status and headers. Each call returns a new ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str] | list[tuple[str, str]]) -> Response:
        """Return a new Response with additional headers."""
        new = tuple(headers.items()) if isinstance(headers, Mapping) else tuple(headers)
        return replace(self, headers=(*self.headers, *new))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    # -- Accessors --

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or None."""
        return _find_header(self.headers, name)

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


@dataclass(frozen=True, slots=True)
class StreamingResponse:
    """An HTTP response whose body is sent progressively.

    Headers are sent immediately, then each chunk is sent as an ASGI
    body message with ``more_body=True``. ``chunks`` may be a sync or
    async iterator of ``bytes`` (``str`` chunks are UTF-8 encoded).

    Supports the same ``.with_*()`` chainable API as ``Response``
    so middleware can modify headers/status without knowing the
    response is streamed.
    """

    chunks: Iterator[bytes | str] | AsyncIterator[bytes | str]
    status: int = 200
    content_type: str = "application/octet-stream"
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> StreamingResponse:
        """Return a new StreamingResponse with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> StreamingResponse:
        """Return a new StreamingResponse with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(
        self, headers: Mapping[str, str] | list[tuple[str, str]]
    ) -> StreamingResponse:
        """Return a new StreamingResponse with additional headers."""
        new = tuple(headers.items()) if isinstance(headers, Mapping) else tuple(headers)
        return replace(self, headers=(*self.headers, *new))

    def with_content_type(self, content_type: str) -> StreamingResponse:
        """Return a new StreamingResponse with a different content type."""
        return replace(self, content_type=content_type)

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or None."""
        return _find_header(self.headers, name)
