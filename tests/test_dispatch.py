"""Tests for ghttp.server.dispatch — returned errors become JSON responses."""

import logging

import pytest

from ghttp.context import Context, get_context
from ghttp.errors import StatusError
from ghttp.http.request import Request
from ghttp.http.writer import ResponseWriter
from ghttp.server.dispatch import dispatch


def _request(body: bytes = b"") -> Request:
    sent = False

    async def receive() -> dict:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        return {"type": "http.disconnect"}

    return Request.from_asgi({"type": "http", "method": "POST", "path": "/items"}, receive)


async def _run(handler, body: bytes = b""):
    writer = ResponseWriter()
    await dispatch(handler)(writer, _request(body))
    return writer.to_response()


class TestSuccess:
    async def test_none_leaves_handler_output(self) -> None:
        def handler(ctx: Context):
            return ctx.json({"message": "Hello World!"})

        response = await _run(handler)
        assert response.status == 200
        assert response.content_type == "application/json"
        assert response.json() == {"message": "Hello World!"}

    async def test_async_handler(self) -> None:
        async def handler(ctx: Context):
            payload = await ctx.bind()
            return ctx.json(payload)

        response = await _run(handler, b'{"name":"John Wick"}')
        assert response.json() == {"name": "John Wick"}

    async def test_content_type_preset_but_overridable(self) -> None:
        def handler(ctx: Context):
            ctx.header.set("Content-Type", "text/csv")
            ctx.write("a,b\n")

        response = await _run(handler)
        assert response.content_type == "text/csv"

    async def test_empty_success(self) -> None:
        def handler(ctx: Context):
            return None

        response = await _run(handler)
        assert response.status == 200
        assert response.body == b""


class TestStatusErrors:
    async def test_returned_status_error(self) -> None:
        def handler(ctx: Context):
            return ctx.fail(ValueError("bad input"), 400)

        response = await _run(handler)
        assert response.status == 400
        assert response.content_type == "application/json"
        assert response.body == b'{"message":"bad input"}'

    async def test_raised_status_error(self) -> None:
        def handler(ctx: Context):
            raise StatusError("user not found", 404)

        response = await _run(handler)
        assert response.status == 404
        assert response.json() == {"message": "user not found"}

    async def test_bind_failure_as_400(self) -> None:
        async def handler(ctx: Context):
            try:
                await ctx.bind()
            except ValueError as exc:
                return ctx.fail(exc, 400)
            return None

        response = await _run(handler, b"{broken")
        assert response.status == 400
        assert "message" in response.json()


class TestOtherErrors:
    async def test_returned_exception_is_500(self, caplog: pytest.LogCaptureFixture) -> None:
        def handler(ctx: Context):
            return RuntimeError("database unavailable")

        with caplog.at_level(logging.ERROR, logger="ghttp.server"):
            response = await _run(handler)
        assert response.status == 500
        assert response.json() == {"message": "database unavailable"}
        assert "500 POST /items" in caplog.text

    async def test_raised_exception_is_500(self) -> None:
        def handler(ctx: Context):
            raise KeyError("missing")

        response = await _run(handler)
        assert response.status == 500
        assert response.json() == {"message": "'missing'"}

    async def test_unencodable_json_is_500(self) -> None:
        def handler(ctx: Context):
            return ctx.json({"value": {1, 2}})

        response = await _run(handler)
        assert response.status == 500
        assert "not JSON serializable" in response.json()["message"]

    async def test_non_error_return_is_500(self) -> None:
        def handler(ctx: Context):
            return {"oops": "forgot ctx.json"}

        response = await _run(handler)
        assert response.status == 500
        assert "expected None or an exception" in response.json()["message"]

    async def test_error_after_write_keeps_status(self) -> None:
        def handler(ctx: Context):
            ctx.write_header(201)
            return ctx.fail("late", 400)

        response = await _run(handler)
        assert response.status == 201
        assert response.body == b'{"message":"late"}'


class TestContextBinding:
    async def test_context_visible_during_handler(self) -> None:
        seen: list[Context] = []

        def handler(ctx: Context):
            seen.append(get_context())

        await _run(handler)
        assert seen[0].request.path == "/items"

    async def test_context_reset_after_handler(self) -> None:
        def handler(ctx: Context):
            raise RuntimeError("boom")

        await _run(handler)
        with pytest.raises(LookupError):
            get_context()

    async def test_fresh_context_per_request(self) -> None:
        seen: list[Context] = []

        def handler(ctx: Context):
            seen.append(ctx)

        await _run(handler)
        await _run(handler)
        assert seen[0] is not seen[1]

    def test_preserves_handler_name(self) -> None:
        def show_user(ctx: Context):
            return None

        assert dispatch(show_user).__name__ == "show_user"


class TestEnvelopeEncoding:
    async def test_non_ascii_message_kept_verbatim(self) -> None:
        def handler(ctx: Context):
            return ctx.fail("utilisateur « Léon » introuvable", 404)

        response = await _run(handler)
        assert response.body == '{"message":"utilisateur « Léon » introuvable"}'.encode()

    async def test_matches_success_body_encoding(self) -> None:
        def ok(ctx: Context):
            return ctx.json({"message": "Léon"})

        def failed(ctx: Context):
            return ctx.fail("Léon", 400)

        assert (await _run(ok)).body == (await _run(failed)).body
