"""Immutable HTTP request.

Frozen metadata with async body access. The request is honest about
what it is: received data that doesn't change.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import parse_qs

from staticserve._internal.asgi import Receive
from staticserve.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``query_string`` is kept raw (undecoded, without the ``?``) because
    static serving only cares whether one was sent at all.

    ``path_params`` holds route captures in pattern order; it is empty
    until the router has matched the request.
    """

    method: str
    path: str
    headers: Headers
    query_string: str = ""
    path_params: dict[str, str] = field(default_factory=dict)
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)

    # -- Computed properties --

    @property
    def url(self) -> str:
        """Request path plus query string."""
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    @property
    def query(self) -> dict[str, list[str]]:
        """Parsed query string (field name -> values)."""
        return parse_qs(self.query_string, keep_blank_values=True)

    # -- Async body access --

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def body(self) -> bytes:
        """Read the full request body."""
        return b"".join([chunk async for chunk in self.stream()])

    # -- Factories --

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Return a copy carrying the router's captures."""
        return replace(self, path_params=path_params)

    @classmethod
    def from_asgi(
        cls,
        scope: dict[str, Any],
        receive: Receive | None = None,
        path_params: dict[str, str] | None = None,
    ) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b"").decode("latin-1"),
            path_params=path_params or {},
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )
