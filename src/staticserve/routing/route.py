"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:    ``/assets``        (is_param=False)
    Param:     ``/{name}``        (is_param=True, param_name="name")
    Wildcard:  ``/{file:path}``   (is_param=True, param_name="file", param_type="path")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``mounted`` routes hold a middleware-shaped callable
    (``async (request, next) -> response``) instead of a plain handler.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    mounted: bool = False


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``path_params`` keeps capture order, so the first value is the
    first capture in the route pattern.
    """

    route: Route
    path_params: dict[str, str]
