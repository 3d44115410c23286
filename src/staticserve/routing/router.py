"""Compiled router with trie-based path matching.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes. A ``{name:path}`` segment is the
single wildcard capture static files are mounted under::

    /assets/{file:path}   matches /assets/css/site.css  -> file="css/site.css"
"""

import re
from dataclasses import dataclass

from staticserve.errors import ConfigurationError, MethodNotAllowed, NotFound
from staticserve.routing.route import PathSegment, Route, RouteMatch

# Regex patterns for each supported parameter converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "path": r".+",
}


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/assets"            -> [PathSegment("assets")]
        "/users/{id}"        -> [..., PathSegment("{id}", is_param=True, param_type="str")]
        "/{file:path}"       -> [PathSegment("{file:path}", is_param=True, param_type="path")]

    Raises ``ConfigurationError`` for ``<param>`` placeholders, unknown
    converters, or a wildcard that is not the last segment.
    """
    segments: list[PathSegment] = []
    parts = [part for part in path.strip("/").split("/") if part]
    for index, part in enumerate(parts):
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route {path!r} uses a <param> placeholder. "
                "Use {param} (or {param:path} for a wildcard) instead."
            )
            raise ConfigurationError(msg)
        if not (part.startswith("{") and part.endswith("}")):
            segments.append(PathSegment(value=part))
            continue

        param_name, _, param_type = part[1:-1].partition(":")
        param_type = param_type or "str"
        if param_type not in CONVERTERS:
            msg = f"Unknown converter {param_type!r} in route {path!r}."
            raise ConfigurationError(msg)
        if param_type == "path" and index != len(parts) - 1:
            msg = f"Wildcard {part!r} must be the last segment of route {path!r}."
            raise ConfigurationError(msg)
        segments.append(
            PathSegment(
                value=part,
                is_param=True,
                param_name=param_name,
                param_type=param_type,
            )
        )
    return segments


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("children", "param_child", "wildcard", "routes_by_method")

    def __init__(self) -> None:
        # Static segment children: "assets" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param pattern per level)
        self.param_child: _ParamEdge | None = None
        # Wildcard capture consuming the rest of the path
        self.wildcard: _WildcardEdge | None = None
        # Routes at this node, keyed by HTTP method
        self.routes_by_method: dict[str, Route] = {}


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(slots=True)
class _WildcardEdge:
    """A wildcard (path) edge. Consumes the remaining path."""

    param_name: str
    routes_by_method: dict[str, Route]


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(Route("/health", handler, frozenset({"GET"})))
        router.add(Route("/static/{file:path}", serve, frozenset({"GET", "HEAD"}), mounted=True))
        router.compile()
        match = router.match("GET", "/static/css/site.css")
    """

    __slots__ = ("_compiled", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        node = self._root
        for seg in parse_path(route.path):
            if seg.param_type == "path":
                if node.wildcard is None:
                    node.wildcard = _WildcardEdge(
                        param_name=seg.param_name or "path",
                        routes_by_method={},
                    )
                for method in route.methods:
                    node.wildcard.routes_by_method[method] = route
                return

            if seg.is_param:
                if node.param_child is None:
                    node.param_child = _ParamEdge(
                        param_name=seg.param_name or "",
                        regex=re.compile(f"^{CONVERTERS[seg.param_type]}$"),
                        node=_TrieNode(),
                    )
                node = node.param_child.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        for method in route.methods:
            node.routes_by_method[method] = route

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against compiled routes.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        result = self._match_node(self._root, parts, 0, {})

        if result is None:
            raise NotFound(f"No route matches {method} {path!r}")

        routes_by_method, params = result
        if method in routes_by_method:
            return RouteMatch(route=routes_by_method[method], path_params=params)
        raise MethodNotAllowed(frozenset(routes_by_method))

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> tuple[dict[str, Route], dict[str, str]] | None:
        """Recursively match path parts against the trie."""
        if index == len(parts):
            if node.routes_by_method:
                return node.routes_by_method, params
            return None

        part = parts[index]

        # 1. Static child first (exact match)
        if part in node.children:
            result = self._match_node(node.children[part], parts, index + 1, params)
            if result is not None:
                return result

        # 2. Parameter child
        if node.param_child is not None and node.param_child.regex.match(part):
            edge = node.param_child
            result = self._match_node(
                edge.node, parts, index + 1, {**params, edge.param_name: part}
            )
            if result is not None:
                return result

        # 3. Wildcard, keeps ".." segments so the handler can reject them
        if node.wildcard is not None:
            remaining = "/".join(parts[index:])
            return node.wildcard.routes_by_method, {
                **params,
                node.wildcard.param_name: remaining,
            }

        return None
