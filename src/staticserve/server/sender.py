"""ASGI response sending: translates Response types to ASGI messages.

Buffered responses go out as one body message with Content-Length.
Streaming responses go out chunk by chunk under chunked transfer
encoding, and their chunk iterator is always closed afterwards so an
open file behind it is released.
"""

import logging
from collections.abc import AsyncIterator, Iterable

from staticserve._internal.asgi import Send, encode_headers
from staticserve.http.response import Response, StreamingResponse

logger = logging.getLogger("staticserve.server")


def _body_allowed(status: int) -> bool:
    # 1xx, 204 and 304 never carry a body
    return not (100 <= status < 200 or status in {204, 304})


async def _start(send: Send, status: int, headers: Iterable[tuple[str, str]]) -> None:
    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": encode_headers(headers),
        }
    )


async def _chunks(response: StreamingResponse) -> AsyncIterator[bytes]:
    """Iterate sync or async chunks as non-empty bytes."""
    if isinstance(response.chunks, AsyncIterator):
        async for chunk in response.chunks:
            if chunk:
                yield chunk.encode("utf-8") if isinstance(chunk, str) else chunk
    else:
        for chunk in response.chunks:
            if chunk:
                yield chunk.encode("utf-8") if isinstance(chunk, str) else chunk


async def _close(chunks: object) -> None:
    aclose = getattr(chunks, "aclose", None)
    if aclose is not None:
        await aclose()
        return
    close = getattr(chunks, "close", None)
    if close is not None:
        close()


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send a buffered Response.

    For HEAD requests Content-Length still describes the body that a GET
    would have returned, but no body bytes are sent.
    """
    body = response.body_bytes if _body_allowed(response.status) else b""
    await _start(
        send,
        response.status,
        [
            ("content-type", response.content_type),
            *response.headers,
            ("content-length", str(len(body))),
        ],
    )
    await send({"type": "http.response.body", "body": b"" if head else body})


async def send_streaming_response(
    response: StreamingResponse,
    send: Send,
    *,
    head: bool = False,
) -> None:
    """Send a StreamingResponse via chunked transfer encoding.

    A failure mid-stream is logged and the body is cut short; the status
    line has already gone out, so there is nothing else to report to the
    client.
    """
    await _start(
        send,
        response.status,
        [
            ("content-type", response.content_type),
            ("transfer-encoding", "chunked"),
            *response.headers,
        ],
    )

    try:
        if not head and _body_allowed(response.status):
            async for chunk in _chunks(response):
                await send({"type": "http.response.body", "body": chunk, "more_body": True})
    except Exception:
        logger.exception("Error while streaming response body")
    finally:
        await _close(response.chunks)

    await send({"type": "http.response.body", "body": b"", "more_body": False})
