"""Content negotiation: maps handler return values to responses.

isinstance-based dispatch, no magic, fully predictable.
"""

from typing import Any

from staticserve.errors import ConfigurationError
from staticserve.http.response import Response, StreamingResponse


def negotiate(value: Any) -> Response | StreamingResponse:
    """Convert a route handler's return value to a response.

    Dispatch order:

    1. ``Response`` / ``StreamingResponse`` -> pass through
    2. ``str``                 -> 200, text/html
    3. ``bytes``               -> 200, application/octet-stream
    4. ``(value, int)``        -> negotiate value, override status
    5. ``(value, int, dict)``  -> negotiate value, override status + headers
    """
    match value:
        case Response() | StreamingResponse():
            return value
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__!r} to a response. "
                "Return a Response, StreamingResponse, str, bytes, or (value, status)."
            )
            raise ConfigurationError(msg)
