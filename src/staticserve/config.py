"""Static serve configuration.

StaticServeConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups. It is built once and
shared read-only by every request the middleware handles.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from staticserve.errors import ConfigurationError
from staticserve.middleware.protocol import Skipper


@dataclass(frozen=True, slots=True)
class StaticServeConfig:
    """Static serve configuration. Immutable after creation.

    Only ``root`` is required. Override what you need::

        config = StaticServeConfig(
            root="/var/www",
            max_age=365 * 24 * 3600,   # clients cache for a year
            s_maxage=3600,             # shared caches for an hour
            deny_query_string=True,
            enable_strong_etag=True,
        )

    ``root`` is made absolute on creation (``~`` expanded, ``.``/``..`` and
    duplicate separators collapsed). ``headers`` accepts any mapping and
    is stored as a tuple of ``(name, value)`` pairs.
    """

    # Directory (or asset root) files are served from
    root: str | os.PathLike[str]

    # Cache-Control
    max_age: int = 0  # max-age, seconds (0 = omit)
    s_maxage: int = 0  # s-maxage, seconds (0 = omit)

    # Extra response headers applied to every served file
    headers: Mapping[str, str] | tuple[tuple[str, str], ...] = ()

    # Request policy
    deny_query_string: bool = False  # CDN origin: avoid one cache entry per query string
    deny_dot: bool = False  # Refuse .git, .env and other dot segments
    not_found_next: bool = False  # Missing file falls through instead of 404

    # Validators
    enable_strong_etag: bool = False  # Hash content (needed when stat is unavailable)
    disable_etag: bool = False
    disable_last_modified: bool = False

    skipper: Skipper | None = None

    def __post_init__(self) -> None:
        root = os.fspath(self.root)
        if not root:
            msg = "StaticServeConfig.root must not be empty."
            raise ConfigurationError(msg)
        object.__setattr__(self, "root", os.path.abspath(os.path.expanduser(root)))

        if self.max_age < 0 or self.s_maxage < 0:
            msg = (
                "Cache durations must be >= 0 "
                f"(got max_age={self.max_age}, s_maxage={self.s_maxage})."
            )
            raise ConfigurationError(msg)

        pairs = tuple(
            self.headers.items() if isinstance(self.headers, Mapping) else self.headers
        )
        seen: set[str] = set()
        for name, _ in pairs:
            key = name.lower()
            if key in seen:
                msg = f"Duplicate header {name!r} in StaticServeConfig.headers."
                raise ConfigurationError(msg)
            seen.add(key)
        object.__setattr__(self, "headers", pairs)
