"""ghttp exception hierarchy.

Shared across the router, dispatcher, middleware, and server so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class GhttpError(Exception):
    """Base for all ghttp-specific errors."""


class ConfigurationError(GhttpError):
    """Raised when the application or server configuration is invalid."""


class ServerStartError(GhttpError):
    """Raised by ``Ghttp.start()`` when the server cannot bind or stops on error.

    The library never terminates the process itself; the embedding
    application decides what a failed start means.
    """


class StatusError(GhttpError):
    """An error paired with the HTTP status it should be answered with.

    Handlers return (or raise) one of these to control the status code of
    the JSON error response. Any other exception is answered with 500.

    ``str(err)`` is the text of the wrapped error, so the JSON envelope
    carries the original message and not the status::

        def show(ctx):
            user = users.get(ctx.path_value("name"))
            if user is None:
                return ctx.fail(LookupError("user not found"), 404)
            return ctx.json(user)
    """

    __slots__ = ("err", "status")

    def __init__(self, err: BaseException | str, status: int) -> None:
        super().__init__(err, status)
        self.err = err
        self.status = status

    def __str__(self) -> str:
        return str(self.err)

    def __repr__(self) -> str:
        return f"StatusError({self.err!r}, {self.status})"


@dataclass(frozen=True, slots=True)
class HTTPError(GhttpError):
    """A router-level error that maps directly to an HTTP status code.

    Raised by ``Router.match()``. The application answers these with a
    plain-text body, the same way middleware rejections are answered.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "404 page not found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — a route exists for the path but not for this HTTP method.

    Carries an ``Allow`` header listing the registered methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "Method Not Allowed") -> None:
        allow_value = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=detail,
            headers=(("Allow", allow_value),),
        )
