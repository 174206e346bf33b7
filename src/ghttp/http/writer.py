"""Response sink handed to request handlers and middleware.

A ``ResponseWriter`` buffers one response: headers can be changed until
the status is written, the status can be written once, and body bytes
are appended afterwards. The ASGI layer turns the finished writer into a
``Response`` and sends it.
"""

import logging

from ghttp.http.headers import MutableHeaders
from ghttp.http.response import Response

logger = logging.getLogger("ghttp.server")

DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"


class ResponseWriter:
    """Buffered, single-use response sink.

    Mirrors the net/http writer contract:

    - ``header`` is mutable until ``write_header()`` (or the first
      ``write()``) commits the status. Later header changes are not sent.
    - ``write()`` without a prior ``write_header()`` commits 200.
    - A second ``write_header()`` is ignored and logged.
    """

    __slots__ = ("_body", "_committed", "_header", "_status")

    def __init__(self) -> None:
        self._header = MutableHeaders()
        self._committed: tuple[tuple[str, str], ...] | None = None
        self._status: int | None = None
        self._body: list[bytes] = []

    @property
    def header(self) -> MutableHeaders:
        """Response headers."""
        return self._header

    @property
    def status(self) -> int:
        """The committed status, or 200 if nothing was written yet."""
        return self._status if self._status is not None else 200

    @property
    def wrote_header(self) -> bool:
        return self._status is not None

    def write_header(self, status: int) -> None:
        """Commit the response status code and the current headers."""
        if not 100 <= status <= 999:
            msg = f"invalid HTTP status code {status}"
            raise ValueError(msg)
        if self._status is not None:
            logger.warning(
                "superfluous write_header(%d) call; status %d already written",
                status,
                self._status,
            )
            return
        self._status = status
        self._committed = self._header.items()

    def write(self, data: bytes | str) -> int:
        """Append *data* to the body, committing status 200 if needed."""
        if self._status is None:
            self.write_header(200)
        chunk = data.encode("utf-8") if isinstance(data, str) else data
        self._body.append(chunk)
        return len(chunk)

    def to_response(self) -> Response:
        """Snapshot the buffered response."""
        items = self._committed if self._committed is not None else self._header.items()
        content_type = next(
            (value for name, value in items if name.lower() == "content-type"),
            DEFAULT_CONTENT_TYPE,
        )
        headers = tuple(
            (name, value)
            for name, value in items
            if name.lower() not in ("content-type", "content-length")
        )
        return Response(
            body=b"".join(self._body),
            status=self.status,
            content_type=content_type,
            headers=headers,
        )


def http_error(writer: ResponseWriter, message: str, status: int) -> None:
    """Answer with a plain-text error body.

    Used by middleware and the router for rejections that happen before a
    handler runs. Handler errors use the JSON envelope instead.
    """
    header = writer.header
    header.delete("Content-Length")
    header.set("Content-Type", DEFAULT_CONTENT_TYPE)
    header.set("X-Content-Type-Options", "nosniff")
    writer.write_header(status)
    writer.write(message + "\n")
