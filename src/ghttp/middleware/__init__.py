"""Middleware — request-handler transforms, composed with ``chain()``.

A middleware is any callable matching::

    def mw(next: RequestHandler) -> RequestHandler: ...

Built-in middleware:
    CORSMiddleware / cors -- permissive CORS headers, 204 for preflights
    BasicAuthMiddleware / basic_auth -- HTTP Basic authentication
"""

from ghttp.middleware.basic_auth import BasicAuthConfig, BasicAuthMiddleware, basic_auth
from ghttp.middleware.chain import chain
from ghttp.middleware.cors import CORSConfig, CORSMiddleware, cors
from ghttp.middleware.protocol import Middleware, RequestHandler

__all__ = [
    "BasicAuthConfig",
    "BasicAuthMiddleware",
    "CORSConfig",
    "CORSMiddleware",
    "Middleware",
    "RequestHandler",
    "basic_auth",
    "chain",
    "cors",
]
