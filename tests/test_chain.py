"""Tests for ghttp.middleware.chain — middleware composition."""

from ghttp.http.request import Request
from ghttp.http.writer import ResponseWriter
from ghttp.middleware.chain import chain
from ghttp.middleware.protocol import RequestHandler


def _request() -> Request:
    async def receive() -> dict:
        return {"type": "http.disconnect"}

    return Request.from_asgi({"type": "http", "method": "GET", "path": "/"}, receive)


def _recording(name: str, calls: list[str]):
    def middleware(next: RequestHandler) -> RequestHandler:
        async def handler(writer: ResponseWriter, request: Request) -> None:
            calls.append(f"{name}:in")
            await next(writer, request)
            calls.append(f"{name}:out")

        return handler

    return middleware


class TestChain:
    async def test_empty_chain_is_identity(self) -> None:
        async def handler(writer: ResponseWriter, request: Request) -> None:
            writer.write("ok")

        assert chain()(handler) is handler

    async def test_first_listed_runs_first(self) -> None:
        calls: list[str] = []

        async def handler(writer: ResponseWriter, request: Request) -> None:
            calls.append("handler")

        wrapped = chain(_recording("a", calls), _recording("b", calls))(handler)
        await wrapped(ResponseWriter(), _request())
        assert calls == ["a:in", "b:in", "handler", "b:out", "a:out"]

    async def test_single_middleware(self) -> None:
        calls: list[str] = []

        async def handler(writer: ResponseWriter, request: Request) -> None:
            calls.append("handler")

        await chain(_recording("only", calls))(handler)(ResponseWriter(), _request())
        assert calls == ["only:in", "handler", "only:out"]

    async def test_short_circuit(self) -> None:
        calls: list[str] = []

        def gate(next: RequestHandler) -> RequestHandler:
            async def handler(writer: ResponseWriter, request: Request) -> None:
                writer.write_header(403)

            return handler

        async def handler(writer: ResponseWriter, request: Request) -> None:
            calls.append("handler")

        writer = ResponseWriter()
        await chain(gate, _recording("inner", calls))(handler)(writer, _request())
        assert calls == []
        assert writer.status == 403
