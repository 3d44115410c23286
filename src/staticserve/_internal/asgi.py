"""ASGI type aliases and header encoding.

Internal only -- users interact with Request and Response, not these.
"""

from collections.abc import Awaitable, Callable, Iterable, MutableMapping
from typing import Any, TypeAlias

# Raw ASGI 3.0 types
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]

# Raw header pairs as they travel over ASGI
RawHeaders: TypeAlias = list[tuple[bytes, bytes]]


def encode_headers(headers: Iterable[tuple[str, str]]) -> RawHeaders:
    """Encode ``(name, value)`` pairs for ASGI, lowercasing names."""
    return [
        (name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in headers
    ]


def decode_headers(raw: Iterable[tuple[bytes, bytes]]) -> list[tuple[str, str]]:
    """Decode raw ASGI header pairs back to strings."""
    return [(name.decode("latin-1"), value.decode("latin-1")) for name, value in raw]
