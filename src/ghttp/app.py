"""The ghttp router facade.

Mutable during setup (route registration, middleware, hooks).
Frozen at runtime when ``start()`` or ``__call__()`` is first invoked.
"""

import inspect
import logging
import threading
from collections.abc import Callable
from typing import Any

from ghttp._internal.asgi import Receive, Scope, Send
from ghttp.config import AppConfig
from ghttp.context import HandlerFunc
from ghttp.errors import HTTPError
from ghttp.http.request import Request
from ghttp.http.writer import ResponseWriter, http_error
from ghttp.middleware.chain import chain
from ghttp.middleware.cors import cors
from ghttp.middleware.protocol import Middleware, RequestHandler
from ghttp.routing.route import Route, parse_pattern
from ghttp.routing.router import Router
from ghttp.server.dispatch import dispatch
from ghttp.server.sender import send_response

logger = logging.getLogger("ghttp.app")


class Ghttp:
    """Router facade: verb registration, middleware, and ASGI entry point.

    Usage::

        app = Ghttp().cors()

        @app.get("/users/{name}")
        def show_user(ctx):
            return ctx.json({"name": ctx.path_value("name")})

        app.start(":8080")

    Middleware is captured when a route is registered, so configure it
    with ``cors()`` or ``use()`` before registering routes. Both replace
    the current chain; they do not add to it.

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one worker compiles the route table.
        No per-request state lives on this object.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._router = Router()
        self._middleware: Middleware = chain()
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Middleware --

    def cors(self) -> "Ghttp":
        """Replace the middleware chain with the permissive CORS middleware.

        Returns the app so it can be chained: ``app = Ghttp().cors()``.
        Any previously configured middleware is discarded.
        """
        return self.use(cors)

    def use(self, *middleware: Middleware) -> "Ghttp":
        """Replace the middleware chain with ``chain(*middleware)``.

        The first middleware runs first. Routes already registered keep
        the chain they were registered with.
        """
        self._check_not_frozen()
        self._middleware = chain(*middleware)
        return self

    # -- Route registration --

    def get(self, path: str, handler: HandlerFunc | None = None) -> Any:
        """Register *handler* for ``GET path``.

        Works as a call (``app.get("/", index)``) or as a decorator
        (``@app.get("/")``).
        """
        return self._verb("GET", path, handler)

    def post(self, path: str, handler: HandlerFunc | None = None) -> Any:
        """Register *handler* for ``POST path``."""
        return self._verb("POST", path, handler)

    def put(self, path: str, handler: HandlerFunc | None = None) -> Any:
        """Register *handler* for ``PUT path``."""
        return self._verb("PUT", path, handler)

    def delete(self, path: str, handler: HandlerFunc | None = None) -> Any:
        """Register *handler* for ``DELETE path``."""
        return self._verb("DELETE", path, handler)

    def handle(self, pattern: str, handler: HandlerFunc) -> None:
        """Register a handler for a full ``"VERB /path"`` (or ``"/path"``) pattern."""
        self.handle_func(pattern, self._middleware(dispatch(handler)))

    def handle_func(self, pattern: str, handler: RequestHandler) -> None:
        """Bind a raw request handler to *pattern*, bypassing the dispatcher.

        Neither the middleware chain nor JSON error translation is applied.
        Use this to mount handlers wrapped by hand, e.g. with ``basic_auth``.
        """
        self._check_not_frozen()
        method, path = parse_pattern(pattern)
        self._router.add(Route(path=path, handler=handler, method=method))
        logger.debug("registered %s", pattern)

    def _verb(self, method: str, path: str, handler: HandlerFunc | None) -> Any:
        if handler is not None:
            self.handle(f"{method} {path}", handler)
            return None

        def decorator(func: HandlerFunc) -> HandlerFunc:
            self.handle(f"{method} {path}", func)
            return func

        return decorator

    @property
    def routes(self) -> list[Route]:
        """All registered routes."""
        return self._router.routes

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Server --

    def start(self, port: str | int | None = None) -> None:
        """Bind and serve until the server stops.

        *port* may be ``":8080"``, ``"8080"``, ``8080`` or ``"host:8080"``;
        it defaults to ``config.port``. Raises ``ServerStartError`` if the
        server cannot bind or fails while serving, and
        ``ConfigurationError`` for an invalid address.
        """
        from ghttp.server.serve import parse_address, run_server

        self._ensure_frozen()
        host, number = parse_address(
            port if port is not None else self.config.port,
            self.config.host,
        )
        logger.info("listening on port %s", port if port is not None else number)
        run_server(
            self,
            host,
            number,
            workers=self.config.workers,
            reload=self.config.reload,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        self._ensure_frozen()

        request = Request.from_asgi(scope, receive)
        writer = ResponseWriter()
        try:
            match = self._router.match(request.method, request.path)
        except HTTPError as exc:
            logger.debug("%d %s %s", exc.status, request.method, request.path)
            for name, value in exc.headers:
                writer.header.set(name, value)
            http_error(writer, exc.detail, exc.status)
        else:
            try:
                await match.route.handler(writer, request.with_path_params(match.path_params))
            except Exception:
                # Only raw handlers and middleware get here; dispatch() absorbs handler errors.
                logger.exception("500 %s %s", request.method, request.path)
                if not writer.wrote_header:
                    http_error(writer, "Internal Server Error", 500)

        await send_response(writer.to_response(), send, head=request.method == "HEAD")

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup, runs the registered hooks, and reports
        completion (or failure) back to the server.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    for hook in self._startup_hooks:
                        result = hook()
                        if inspect.isawaitable(result):
                            await result
                except Exception as exc:
                    logger.exception("startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                for hook in self._shutdown_hooks:
                    result = hook()
                    if inspect.isawaitable(result):
                        await result
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._router.compile()
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and middleware before calling app.start()."
            )
            raise RuntimeError(msg)
