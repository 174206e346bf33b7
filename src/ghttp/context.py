"""Per-request handler context.

A ``Context`` bundles the response sink and the request for one handler
call. The dispatcher creates a fresh one for every request and passes it
to the handler explicitly; it is never stored on the application object,
so concurrent requests cannot alias each other's context.

The same value is also published through a ``ContextVar`` while the
handler runs, for helpers that cannot take it as an argument::

    from ghttp.context import get_context

    def current_user_agent() -> str | None:
        return get_context().request.headers.get("user-agent")

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading. No locks needed.
"""

import json as json_module
from collections.abc import Awaitable, Callable
from contextvars import ContextVar
from typing import Any

from ghttp.errors import StatusError
from ghttp.http.headers import MutableHeaders
from ghttp.http.request import Request
from ghttp.http.writer import ResponseWriter

# A user handler: gets the context, returns None or an error.
type HandlerFunc = Callable[
    [Context], BaseException | None | Awaitable[BaseException | None]
]


class Context:
    """The response sink and request of a single dispatch.

    Handlers write successful responses through it and *return* errors::

        async def create_item(ctx: Context) -> Exception | None:
            try:
                item = await ctx.bind()
            except ValueError as exc:
                return ctx.fail(exc, 400)
            return ctx.json(item)
    """

    __slots__ = ("request", "writer")

    def __init__(self, writer: ResponseWriter, request: Request) -> None:
        self.writer = writer
        self.request = request

    # -- Request access --

    def path_value(self, name: str) -> str:
        """Return the path parameter *name*, or ``""``."""
        return self.request.path_value(name)

    async def bind(self) -> Any:
        """Decode the request body as JSON.

        Raises ``ValueError`` when the body is not valid JSON.
        """
        return await self.request.json()

    # -- Response access --

    @property
    def header(self) -> MutableHeaders:
        """Response headers (mutable until the status is written)."""
        return self.writer.header

    def write_header(self, status: int) -> None:
        self.writer.write_header(status)

    def write(self, data: bytes | str) -> int:
        return self.writer.write(data)

    def json(self, obj: Any) -> None:
        """Serialize *obj* as compact JSON and write it as the body.

        Returns ``None`` so a handler can end with ``return ctx.json(obj)``.
        Objects ``json`` cannot encode raise ``TypeError`` (or ``ValueError``
        for circular references) before anything is written; the dispatcher
        answers those with a 500.
        """
        payload = json_module.dumps(obj, separators=(",", ":"), ensure_ascii=False)
        self.writer.write(payload)

    def fail(self, err: BaseException | str, status: int) -> StatusError:
        """Build a ``StatusError`` carrying *status*.

        This only constructs the error. It has no effect unless the handler
        returns (or raises) the result::

            return ctx.fail(exc, 400)   # answered with 400
            ctx.fail(exc, 400)          # silently ignored
        """
        return StatusError(err, status)

    def __repr__(self) -> str:
        return f"<Context {self.request.method} {self.request.path}>"


# -- Task-local binding --

context_var: ContextVar[Context] = ContextVar("ghttp_context")
"""The context of the handler currently running. Set by the dispatcher."""


def get_context() -> Context:
    """Return the context of the running handler.

    Raises ``LookupError`` if called outside a dispatched handler.
    """
    return context_var.get()
