"""ghttp — handlers that return errors, for JSON HTTP APIs.

Handlers receive a ``Context`` and return ``None`` on success or an
error on failure. The dispatcher answers errors with a JSON envelope::

    from ghttp import Ghttp

    app = Ghttp().cors()

    @app.get("/users/{name}")
    def show_user(ctx):
        name = ctx.path_value("name")
        if name not in USERS:
            return ctx.fail(LookupError(f"no user {name!r}"), 404)
        return ctx.json(USERS[name])

    app.start(":8080")

Any other returned or raised exception becomes a 500 with the same
``{"message": ...}`` body.
"""

__version__ = "0.1.0"
__all__ = [
    "AppConfig",
    "BasicAuthConfig",
    "BasicAuthMiddleware",
    "CORSConfig",
    "CORSMiddleware",
    "ConfigurationError",
    "Context",
    "Ghttp",
    "GhttpError",
    "HandlerFunc",
    "Middleware",
    "Request",
    "RequestHandler",
    "ResponseWriter",
    "ServerStartError",
    "StatusError",
    "basic_auth",
    "chain",
    "cors",
    "dispatch",
    "get_context",
    "http_error",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import ghttp`` fast while providing a clean top-level API.
    """
    if name == "Ghttp":
        from ghttp.app import Ghttp

        return Ghttp

    if name == "AppConfig":
        from ghttp.config import AppConfig

        return AppConfig

    if name in ("Context", "HandlerFunc", "get_context"):
        from ghttp import context as _ctx

        return getattr(_ctx, name)

    if name in ("Request", "ResponseWriter", "http_error"):
        from ghttp import http as _http

        return getattr(_http, name)

    if name in (
        "BasicAuthConfig",
        "BasicAuthMiddleware",
        "CORSConfig",
        "CORSMiddleware",
        "Middleware",
        "RequestHandler",
        "basic_auth",
        "chain",
        "cors",
    ):
        from ghttp import middleware as _mw

        return getattr(_mw, name)

    if name == "dispatch":
        from ghttp.server.dispatch import dispatch

        return dispatch

    if name in ("ConfigurationError", "GhttpError", "ServerStartError", "StatusError"):
        from ghttp import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
