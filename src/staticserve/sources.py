"""File sources: where static files come from.

A *file source* is anything that can answer four questions about a path:
does it exist, what are its bytes, what is its metadata, and can I stream
it. The static-serve middleware only talks to this protocol, so the same
request logic serves from disk or from an in-memory asset bundle.

Two implementations ship here:

- ``LocalFileSource``: the real filesystem.
- ``AssetFileSource``: named assets held in memory, bundled at build time
  (from a directory snapshot or from package data). It cannot report
  metadata, so weak ETags and Last-Modified are unavailable; use
  ``enable_strong_etag`` with it.

All methods are synchronous and stateless per call. The middleware runs
the blocking ones in a worker thread.
"""

from __future__ import annotations

import io
import os
import posixpath
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class FileStat:
    """The metadata validators are computed from."""

    size: int
    modified: float  # unix timestamp, seconds


# -- Protocol --


@runtime_checkable
class FileSource(Protocol):
    """Pluggable backend for static files.

    No base class required::

        class S3Source:
            def exists(self, path: str) -> bool: ...
            def read(self, path: str) -> bytes: ...
            def stat(self, path: str) -> FileStat | None: ...
            def open_stream(self, path: str) -> BinaryIO: ...

    ``read`` and ``open_stream`` may raise. Raising ``HTTPError`` keeps
    its status code; anything else is mapped by the middleware.
    ``stat`` returns None when metadata is unavailable; that is not an
    error.
    """

    def exists(self, path: str) -> bool: ...

    def read(self, path: str) -> bytes: ...

    def stat(self, path: str) -> FileStat | None: ...

    def open_stream(self, path: str) -> BinaryIO: ...


# -- Local filesystem --


class LocalFileSource:
    """Serve files straight from the local filesystem."""

    __slots__ = ()

    def exists(self, path: str) -> bool:
        """False only when the path is missing.

        Any other stat failure (permission denied, a file used as a
        directory, an embedded NUL byte) counts as existing, so the request
        fails later on read/open with a real error instead of a misleading
        404.
        """
        try:
            os.stat(path)
        except FileNotFoundError:
            return False
        except (OSError, ValueError):
            return True
        return True

    def stat(self, path: str) -> FileStat | None:
        try:
            st = os.stat(path)
        except (OSError, ValueError):
            return None
        return FileStat(size=st.st_size, modified=st.st_mtime)

    def read(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def open_stream(self, path: str) -> BinaryIO:
        return open(path, "rb")  # noqa: SIM115


# -- In-memory asset bundle --


def _asset_key(name: str) -> str:
    """Normalize an asset name to a relative POSIX path."""
    return posixpath.normpath(name.replace("\\", "/")).lstrip("/")


def _walk(node: Traversable, prefix: str) -> Iterator[tuple[str, bytes]]:
    for child in node.iterdir():
        name = f"{prefix}{child.name}"
        if child.is_dir():
            yield from _walk(child, f"{name}/")
        elif child.is_file():
            yield name, child.read_bytes()


class AssetFileSource:
    """Serve named assets held in memory.

    Asset names are POSIX paths relative to ``root``; the middleware's
    joined path is mapped back onto a name by stripping ``root``::

        source = AssetFileSource({"css/site.css": b"body{}"}, root="/assets")
        source.exists("/assets/css/site.css")  # True

    ``root`` is made absolute like ``StaticServeConfig.root``, so both
    can be given the same relative directory. Paths outside ``root``
    never exist. ``stat`` is unsupported and always returns None.
    """

    __slots__ = ("_assets", "_root")

    def __init__(self, assets: Mapping[str, bytes], *, root: str = "/") -> None:
        self._root = os.path.abspath(os.path.expanduser(root))
        self._assets: dict[str, bytes] = {
            _asset_key(name): bytes(content) for name, content in assets.items()
        }

    # -- Build-time bundling --

    @classmethod
    def from_directory(
        cls,
        directory: str | os.PathLike[str],
        *,
        root: str = "/",
    ) -> AssetFileSource:
        """Snapshot every file under *directory* into memory."""
        base = Path(directory)
        assets = {
            path.relative_to(base).as_posix(): path.read_bytes()
            for path in sorted(base.rglob("*"))
            if path.is_file()
        }
        return cls(assets, root=root)

    @classmethod
    def from_package(
        cls,
        package: str,
        resource_dir: str = "",
        *,
        root: str = "/",
    ) -> AssetFileSource:
        """Bundle data files shipped inside an importable package.

        Usage::

            source = AssetFileSource.from_package("myapp", "public")
        """
        node = resources.files(package)
        for part in (p for p in resource_dir.split("/") if p):
            node = node.joinpath(part)
        return cls(dict(_walk(node, "")), root=root)

    # -- FileSource --

    def _name(self, path: str) -> str | None:
        """Map a joined request path back to an asset name."""
        path = os.path.normpath(path)
        prefix = self._root if self._root.endswith(os.sep) else self._root + os.sep
        if not path.startswith(prefix):
            return None
        return path[len(prefix) :].replace(os.sep, "/")

    def exists(self, path: str) -> bool:
        name = self._name(path)
        return name is not None and name in self._assets

    def read(self, path: str) -> bytes:
        name = self._name(path)
        if name is None or name not in self._assets:
            msg = f"No asset for {path!r}"
            raise FileNotFoundError(msg)
        return self._assets[name]

    def stat(self, path: str) -> FileStat | None:  # noqa: ARG002
        return None

    def open_stream(self, path: str) -> BinaryIO:
        return io.BytesIO(self.read(path))

    # -- Introspection --

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _asset_key(name) in self._assets

    def __iter__(self) -> Iterator[str]:
        return iter(self._assets)

    def __len__(self) -> int:
        return len(self._assets)

    def __repr__(self) -> str:
        return f"AssetFileSource(root={self._root!r}, assets={len(self._assets)})"
