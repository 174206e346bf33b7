"""Route definitions and ``"VERB /path"`` pattern parsing."""

from dataclasses import dataclass

from ghttp.errors import ConfigurationError
from ghttp.middleware.protocol import RequestHandler

HTTP_METHODS: frozenset[str] = frozenset(
    {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "CONNECT", "TRACE"}
)


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A bound route: a path pattern, an optional method, and its handler.

    ``method=None`` matches every method.
    """

    path: str
    handler: RequestHandler
    method: str | None = None

    @property
    def pattern(self) -> str:
        if self.method is None:
            return self.path
        return f"{self.method} {self.path}"


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]


def parse_pattern(pattern: str) -> tuple[str | None, str]:
    """Split a registration pattern into ``(method, path)``.

    Examples::

        "GET /users/{name}" -> ("GET", "/users/{name}")
        "/health"           -> (None, "/health")
    """
    pattern = pattern.strip()
    method: str | None = None
    path = pattern
    if " " in pattern:
        method, _, path = pattern.partition(" ")
        path = path.strip()
        if method not in HTTP_METHODS:
            msg = f"Invalid method {method!r} in route pattern {pattern!r}."
            raise ConfigurationError(msg)
    if not path.startswith("/"):
        msg = f"Route path must start with '/': {pattern!r}."
        raise ConfigurationError(msg)
    return method, path
