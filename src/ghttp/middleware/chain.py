"""Middleware composition."""

from ghttp.middleware.protocol import Middleware, RequestHandler


def chain(*middleware: Middleware) -> Middleware:
    """Compose *middleware* into a single transform.

    The first middleware listed is the outermost wrapper, so it runs first
    on the way in::

        wrapped = chain(cors, auth)(handler)
        # request -> cors -> auth -> handler

    ``chain()`` with no arguments is the identity transform.
    """
    stack = tuple(middleware)

    def apply(handler: RequestHandler) -> RequestHandler:
        for mw in reversed(stack):
            handler = mw(handler)
        return handler

    return apply
