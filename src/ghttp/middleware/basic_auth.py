"""HTTP Basic authentication middleware.

Guards a request handler with a single configured username/password::

    guarded = basic_auth(dispatch(admin_handler), "admin", "s3cr3t")
    app.handle_func("GET /admin", guarded)

or, for every route registered afterwards::

    app.use(BasicAuthMiddleware(BasicAuthConfig("admin", "s3cr3t")))

Rejections are answered with a plain-text body before the wrapped handler
runs:

- no ``Authorization`` header: 401 plus a ``WWW-Authenticate`` challenge
- header not ``Basic <payload>``: 400
- payload not valid base64 (or not UTF-8): 400
- payload not ``user:password`` or credentials wrong: 401

Security note: credentials are compared as plain strings with ``==``.
There is no hashing and no constant-time comparison.
"""

import base64
import functools
from dataclasses import dataclass

from ghttp.http.request import Request
from ghttp.http.writer import ResponseWriter, http_error
from ghttp.middleware.protocol import RequestHandler
from ghttp.security.audit import emit_security_event


@dataclass(frozen=True, slots=True)
class BasicAuthConfig:
    """Expected credentials and the realm named in the challenge."""

    username: str
    password: str
    realm: str = "Restricted"


class BasicAuthMiddleware:
    """Middleware form of :func:`basic_auth`."""

    __slots__ = ("config",)

    def __init__(self, config: BasicAuthConfig) -> None:
        self.config = config

    def __call__(self, next: RequestHandler) -> RequestHandler:
        cfg = self.config

        @functools.wraps(next)
        async def handler(writer: ResponseWriter, request: Request) -> None:
            auth = request.headers.get("authorization", "")
            if not auth:
                writer.header.set("WWW-Authenticate", f'Basic realm="{cfg.realm}"')
                emit_security_event("auth.basic.missing", request=request)
                http_error(writer, "Authorization required", 401)
                return

            parts = auth.split(" ", 1)
            if len(parts) != 2 or parts[0] != "Basic":
                emit_security_event("auth.basic.malformed", request=request)
                http_error(writer, "Bad request", 400)
                return

            try:
                credentials = base64.b64decode(parts[1], validate=True).decode("utf-8")
            except ValueError:
                # binascii.Error and UnicodeDecodeError are both ValueErrors
                emit_security_event("auth.basic.undecodable", request=request)
                http_error(writer, "Bad request", 400)
                return

            username, sep, password = credentials.partition(":")
            if not sep or username != cfg.username or password != cfg.password:
                emit_security_event(
                    "auth.basic.rejected",
                    request=request,
                    details={"username": username},
                )
                http_error(writer, "Unauthorized", 401)
                return

            await next(writer, request)

        return handler


def basic_auth(next: RequestHandler, username: str, password: str) -> RequestHandler:
    """Wrap *next* so it only runs for requests carrying the given credentials."""
    return BasicAuthMiddleware(BasicAuthConfig(username, password))(next)
