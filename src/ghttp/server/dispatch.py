"""Dispatcher — turns a ``HandlerFunc`` into a ``RequestHandler``.

This is where returned errors become responses:

- ``None``             -> nothing more; the handler wrote its own body
- ``StatusError``      -> its status + ``{"message": "<error text>"}``
- any other exception  -> 500 + ``{"message": "<error text>"}``

Raising works exactly like returning. No handler error ever escapes the
request: every failure ends up in the JSON error envelope.
"""

import functools
import json as json_module
import logging

from ghttp._internal.invoke import invoke
from ghttp.context import Context, HandlerFunc, context_var
from ghttp.errors import StatusError
from ghttp.http.request import Request
from ghttp.http.writer import ResponseWriter
from ghttp.middleware.protocol import RequestHandler

logger = logging.getLogger("ghttp.server")

JSON_CONTENT_TYPE = "application/json"


def write_json_error(writer: ResponseWriter, status: int, message: str) -> None:
    """Write the ``{"message": ...}`` error envelope with *status*."""
    writer.write_header(status)
    writer.write(json_module.dumps({"message": message}, separators=(",", ":"), ensure_ascii=False))


def dispatch(handler: HandlerFunc) -> RequestHandler:
    """Wrap *handler* so its returned or raised errors become JSON responses."""

    @functools.wraps(handler)
    async def request_handler(writer: ResponseWriter, request: Request) -> None:
        writer.header.set("Content-Type", JSON_CONTENT_TYPE)

        # Fresh per request; only reachable through the argument and the
        # task-local var, which is reset below.
        ctx = Context(writer, request)
        token = context_var.set(ctx)
        try:
            try:
                err = await invoke(handler, ctx)
            except Exception as exc:
                err = exc
        finally:
            context_var.reset(token)

        if err is None:
            return

        if not isinstance(err, BaseException):
            err = TypeError(
                f"handler {getattr(handler, '__name__', handler)!r} returned "
                f"{type(err).__name__}; expected None or an exception"
            )

        if isinstance(err, StatusError):
            logger.debug("%d %s %s — %s", err.status, request.method, request.path, err)
            write_json_error(writer, err.status, str(err))
            return

        logger.error("500 %s %s", request.method, request.path, exc_info=err)
        write_json_error(writer, 500, str(err))

    return request_handler
