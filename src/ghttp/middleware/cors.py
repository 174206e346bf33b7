"""Permissive CORS middleware.

Adds the same CORS headers to every response and answers ``OPTIONS``
preflight requests itself with a bare ``204 No Content``::

    app = Ghttp().cors()

The defaults allow any origin. ``CORSConfig`` overrides the header values
when a narrower policy is needed::

    app.use(CORSMiddleware(CORSConfig(allow_origin="https://example.com")))
"""

import functools
from dataclasses import dataclass

from ghttp.http.request import Request
from ghttp.http.writer import ResponseWriter
from ghttp.middleware.protocol import RequestHandler

DEFAULT_ALLOW_HEADERS: tuple[str, ...] = (
    "Content-Type",
    "Content-Length",
    "Accept-Encoding",
    "X-CSRF-Token",
    "Authorization",
    "accept",
    "origin",
    "Cache-Control",
    "X-Requested-With",
)

DEFAULT_ALLOW_METHODS: tuple[str, ...] = ("POST", "GET", "OPTIONS", "PUT", "DELETE")


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS header values. Defaults are fully permissive."""

    allow_origin: str = "*"
    allow_credentials: bool = True
    allow_headers: tuple[str, ...] = DEFAULT_ALLOW_HEADERS
    allow_methods: tuple[str, ...] = DEFAULT_ALLOW_METHODS


class CORSMiddleware:
    """Middleware adding CORS headers and short-circuiting preflights.

    Headers are set on the writer before the wrapped handler runs, so they
    are present on every response, error responses included. ``OPTIONS``
    requests never reach the wrapped handler.
    """

    __slots__ = ("_headers",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        cfg = config or CORSConfig()
        headers = [("Access-Control-Allow-Origin", cfg.allow_origin)]
        if cfg.allow_credentials:
            headers.append(("Access-Control-Allow-Credentials", "true"))
        headers.append(("Access-Control-Allow-Headers", ", ".join(cfg.allow_headers)))
        headers.append(("Access-Control-Allow-Methods", ", ".join(cfg.allow_methods)))
        self._headers: tuple[tuple[str, str], ...] = tuple(headers)

    def __call__(self, next: RequestHandler) -> RequestHandler:
        cors_headers = self._headers

        @functools.wraps(next)
        async def handler(writer: ResponseWriter, request: Request) -> None:
            for name, value in cors_headers:
                writer.header.set(name, value)

            if request.method == "OPTIONS":
                writer.write_header(204)
                return

            await next(writer, request)

        return handler


cors = CORSMiddleware()
"""The default permissive CORS middleware, as installed by ``Ghttp.cors()``."""
