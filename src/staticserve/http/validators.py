"""Cache validators and Cache-Control for served files.

Pure functions, no I/O:

- ``strong_etag``: hash of the content, requires reading the whole file.
- ``weak_etag``: size + modification time, needs only ``stat``.
- ``http_date``: ``Last-Modified`` value (RFC 1123, always GMT).
- ``cache_control``: the ``Cache-Control`` value for the configured ages.
"""

import base64
import hashlib
import math
from email.utils import formatdate

from staticserve.sources import FileStat


def strong_etag(content: bytes) -> str:
    """Quoted ``"<hex size>-<url-safe base64 sha1>"`` for *content*.

    Empty content still gets a validator::

        >>> strong_etag(b"")
        '"0-2jmj7l5rSw0yVb_vlWAYkK_YBwk="'
    """
    digest = base64.urlsafe_b64encode(hashlib.sha1(content).digest()).decode("ascii")  # noqa: S324
    return f'"{len(content):x}-{digest}"'


def weak_etag(stat: FileStat) -> str:
    """``W/"<hex size>-<hex unix seconds>"`` from file metadata."""
    return f'W/"{stat.size:x}-{math.floor(stat.modified):x}"'


def http_date(timestamp: float) -> str:
    """Format a unix timestamp as an HTTP-date, e.g. ``Tue, 14 Nov 2023 22:13:20 GMT``."""
    return formatdate(timestamp, usegmt=True)


def cache_control(max_age: int, s_maxage: int) -> str:
    """Build the ``Cache-Control`` value, or ``""`` when no age is set.

    ``public`` is only sent alongside at least one numeric directive::

        >>> cache_control(31536000, 3600)
        'public, max-age=31536000, s-maxage=3600'
        >>> cache_control(0, 0)
        ''
    """
    directives = ["public"]
    if max_age > 0:
        directives.append(f"max-age={max_age}")
    if s_maxage > 0:
        directives.append(f"s-maxage={s_maxage}")
    if len(directives) == 1:
        return ""
    return ", ".join(directives)
