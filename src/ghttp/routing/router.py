"""Compiled router with trie-based path matching.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

from ghttp.errors import ConfigurationError, MethodNotAllowed, NotFound
from ghttp.routing.params import CONVERTER_PRIORITY, CONVERTERS
from ghttp.routing.route import PathSegment, Route, RouteMatch

# Key for routes registered without a method
ANY_METHOD = "*"


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"             -> [PathSegment("users")]
        "/users/{name}"      -> [PathSegment("users"), PathSegment("{name}", is_param=True, ...)]
        "/files/{rest:path}" -> [..., PathSegment("{rest:path}", is_param=True, param_type="path")]
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("<") and part.endswith(">"):
            msg = f"Route {path!r} uses <param> syntax; ghttp expects {{param}}."
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if param_type not in CONVERTERS:
                msg = f"Unknown converter {param_type!r} in route {path!r}."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("catch_all", "children", "param_edges", "routes")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # One parameter edge per converter, most specific converter first
        self.param_edges: list[_ParamEdge] = []
        # Catch-all edge (path converter)
        self.catch_all: _CatchAllEdge | None = None
        # Routes ending at this node, keyed by HTTP method (or ANY_METHOD)
        self.routes: dict[str, _BoundRoute] = {}

    def param_edge(self, param_type: str) -> "_ParamEdge":
        for edge in self.param_edges:
            if edge.param_type == param_type:
                return edge
        edge = _ParamEdge(
            param_type=param_type,
            regex=re.compile(f"^{CONVERTERS[param_type]}$"),
            node=_TrieNode(),
        )
        self.param_edges.append(edge)
        self.param_edges.sort(key=lambda e: CONVERTER_PRIORITY[e.param_type])
        return edge


@dataclass(slots=True)
class _BoundRoute:
    """A route plus the names of its parameters, in path order.

    Edges are shared between routes, so captured values are positional
    and only get names once the route is chosen.
    """

    route: Route
    param_names: tuple[str, ...]


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie, shared by every route using its converter."""

    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    """A catch-all edge — consumes the remaining path."""

    routes: dict[str, _BoundRoute]


def _register(routes: dict[str, _BoundRoute], bound: _BoundRoute) -> None:
    key = bound.route.method or ANY_METHOD
    existing = routes.get(key)
    if existing is not None:
        msg = f"Pattern {bound.route.pattern!r} conflicts with {existing.route.pattern!r}."
        raise ConfigurationError(msg)
    routes[key] = bound


type _Candidate = tuple[dict[str, _BoundRoute], tuple[str, ...]]


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(Route("/users/{name}", handler, "GET"))
        router.compile()
        match = router.match("GET", "/users/stitch")
        match.path_params  # {"name": "stitch"}
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

        segments = parse_path(route.path)
        bound = _BoundRoute(
            route=route,
            param_names=tuple(seg.param_name or "" for seg in segments if seg.is_param),
        )

        node = self._root
        for seg in segments:
            if seg.is_param and seg.param_type == "path":
                # Catch-all: consumes rest of path, must be last segment
                if node.catch_all is None:
                    node.catch_all = _CatchAllEdge(routes={})
                _register(node.catch_all.routes, bound)
                return

            if seg.is_param:
                node = node.param_edge(seg.param_type).node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        _register(node.routes, bound)

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes, for introspection."""
        result: list[Route] = []
        self._collect_routes(self._root, result)
        return result

    def _collect_routes(self, node: _TrieNode, result: list[Route]) -> None:
        result.extend(bound.route for bound in node.routes.values())
        for child in node.children.values():
            self._collect_routes(child, result)
        for edge in node.param_edges:
            self._collect_routes(edge.node, result)
        if node.catch_all is not None:
            result.extend(bound.route for bound in node.catch_all.routes.values())

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path against the compiled routes.

        Candidate nodes are tried from most to least specific (static
        segment, then converters by specificity, then catch-all). The
        first one with a route for the method wins, so ``GET /a/b`` does
        not hide ``POST /a/{x}`` from a ``POST /a/b`` request. ``HEAD``
        falls back to a ``GET`` route; method-less routes match anything.

        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but no method does.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        keys = [method]
        if method == "HEAD":
            keys.append("GET")
        keys.append(ANY_METHOD)

        allowed: set[str] = set()
        found = False
        for routes, values in self._candidates(self._root, parts, 0, ()):
            found = True
            for key in keys:
                bound = routes.get(key)
                if bound is not None:
                    params = dict(zip(bound.param_names, values, strict=True))
                    return RouteMatch(route=bound.route, path_params=params)
            allowed.update(routes)

        if not found:
            raise NotFound()
        if "GET" in allowed:
            allowed.add("HEAD")
        raise MethodNotAllowed(frozenset(allowed))

    def _candidates(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        values: tuple[str, ...],
    ) -> Iterator[_Candidate]:
        """Yield every route table matching the path, most specific first."""
        if index == len(parts):
            if node.routes:
                yield node.routes, values
            return

        part = parts[index]

        # 1. Static child first (exact match)
        child = node.children.get(part)
        if child is not None:
            yield from self._candidates(child, parts, index + 1, values)

        # 2. Parameter edges, most specific converter first
        for edge in node.param_edges:
            if edge.regex.match(part):
                yield from self._candidates(edge.node, parts, index + 1, (*values, part))

        # 3. Catch-all
        if node.catch_all is not None:
            yield node.catch_all.routes, (*values, "/".join(parts[index:]))
