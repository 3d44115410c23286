"""Case-insensitive HTTP headers.

``Headers`` wraps the raw byte pairs of an incoming ASGI scope and is
immutable. ``HeaderSet`` collects outgoing headers where setting a name
replaces any earlier value of that name, regardless of case.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive request headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a header.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower().encode("latin-1")
        for name, value in self._raw:
            if name.lower() == key_lower:
                return value.decode("latin-1")
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.decode("latin-1").lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower().encode("latin-1")
        return [value.decode("latin-1") for name, value in self._raw if name.lower() == key_lower]

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Access raw header byte pairs for ASGI compatibility."""
        return self._raw


class HeaderSet:
    """Ordered outgoing headers with set-replaces semantics.

    Used while a response is being prepared: the last ``set()`` of a
    name wins and keeps the position of the first one. Not thread-safe;
    build one per request.

    Usage::

        headers = HeaderSet()
        headers.set("ETag", '"a"')
        headers.set("etag", '"b"')
        headers.items()  # [("etag", '"b"')]
    """

    __slots__ = ("_items",)

    def __init__(self, initial: Iterable[tuple[str, str]] = ()) -> None:
        # lowercased name -> (name as set, value)
        self._items: dict[str, tuple[str, str]] = {}
        for name, value in initial:
            self.set(name, value)

    def set(self, name: str, value: str) -> None:
        """Set *name* to *value*, replacing any value with the same name."""
        self._items[name.lower()] = (name, value)

    def get(self, name: str) -> str | None:
        """Return the value set for *name*, or None."""
        item = self._items.get(name.lower())
        return item[1] if item is not None else None

    def pop(self, name: str) -> str | None:
        """Remove *name* and return its value, or None if it was not set."""
        item = self._items.pop(name.lower(), None)
        return item[1] if item is not None else None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._items

    def __len__(self) -> int:
        return len(self._items)

    def items(self) -> list[tuple[str, str]]:
        """Return the headers as ``(name, value)`` pairs in insertion order."""
        return list(self._items.values())
