"""Request-handler and middleware types.

A request handler is the platform-level function every route resolves
to::

    async def handler(writer: ResponseWriter, request: Request) -> None: ...

A middleware transforms one request handler into another. It can write
headers and delegate, or answer the request itself and never call the
handler it wraps::

    def server_header(next: RequestHandler) -> RequestHandler:
        async def handler(writer: ResponseWriter, request: Request) -> None:
            writer.header.set("Server", "ghttp")
            await next(writer, request)

        return handler

No base class required. The framework checks the shape, not the lineage.
"""

from collections.abc import Awaitable, Callable

from ghttp.http.request import Request
from ghttp.http.writer import ResponseWriter

# The innermost unit the router dispatches to
type RequestHandler = Callable[[ResponseWriter, Request], Awaitable[None]]

# A transform wrapping a request handler with extra behavior
type Middleware = Callable[[RequestHandler], RequestHandler]
