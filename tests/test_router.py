"""Tests for the trie router and pattern parsing."""

import pytest

from ghttp.errors import ConfigurationError, MethodNotAllowed, NotFound
from ghttp.routing.route import Route, parse_pattern
from ghttp.routing.router import Router, parse_path


async def _handler(writer, request) -> None:
    pass


def _router(*routes: Route) -> Router:
    router = Router()
    for route in routes:
        router.add(route)
    router.compile()
    return router


class TestParsePattern:
    def test_method_and_path(self) -> None:
        assert parse_pattern("GET /users/{name}") == ("GET", "/users/{name}")

    def test_path_only(self) -> None:
        assert parse_pattern("/health") == (None, "/health")

    def test_extra_whitespace(self) -> None:
        assert parse_pattern("  POST   /items ") == ("POST", "/items")

    def test_unknown_method(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid method"):
            parse_pattern("FETCH /items")

    def test_path_must_start_with_slash(self) -> None:
        with pytest.raises(ConfigurationError, match="must start with"):
            parse_pattern("GET items")


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/users/all")
        assert [s.value for s in segments] == ["users", "all"]
        assert not any(s.is_param for s in segments)

    def test_typed_param(self) -> None:
        (seg,) = parse_path("/{id:int}")
        assert seg.is_param
        assert seg.param_name == "id"
        assert seg.param_type == "int"

    def test_angle_brackets_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="<param>"):
            parse_path("/users/<name>")

    def test_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown converter"):
            parse_path("/users/{name:uuid}")


class TestMatch:
    def test_static_route(self) -> None:
        router = _router(Route("/", _handler, "GET"))
        assert router.match("GET", "/").path_params == {}

    def test_param_capture(self) -> None:
        router = _router(Route("/users/{name}", _handler, "GET"))
        assert router.match("GET", "/users/stitch").path_params == {"name": "stitch"}

    def test_static_beats_param(self) -> None:
        static = Route("/users/me", _handler, "GET")
        router = _router(Route("/users/{name}", _handler, "GET"), static)
        assert router.match("GET", "/users/me").route is static

    def test_int_converter_constrains(self) -> None:
        router = _router(Route("/items/{id:int}", _handler, "GET"))
        assert router.match("GET", "/items/42").path_params == {"id": "42"}
        with pytest.raises(NotFound):
            router.match("GET", "/items/abc")

    def test_catch_all(self) -> None:
        router = _router(Route("/files/{rest:path}", _handler, "GET"))
        assert router.match("GET", "/files/a/b/c.txt").path_params == {"rest": "a/b/c.txt"}

    def test_not_found(self) -> None:
        with pytest.raises(NotFound):
            _router(Route("/a", _handler, "GET")).match("GET", "/b")

    def test_method_not_allowed_lists_methods(self) -> None:
        router = _router(Route("/items", _handler, "GET"), Route("/items", _handler, "POST"))
        with pytest.raises(MethodNotAllowed) as info:
            router.match("DELETE", "/items")
        assert info.value.headers == (("Allow", "GET, HEAD, POST"),)

    def test_head_falls_back_to_get(self) -> None:
        get = Route("/items", _handler, "GET")
        assert _router(get).match("HEAD", "/items").route is get

    def test_methodless_route_matches_anything(self) -> None:
        route = Route("/any", _handler)
        router = _router(route)
        for method in ("GET", "POST", "OPTIONS", "PATCH"):
            assert router.match(method, "/any").route is route

    def test_exact_method_beats_methodless(self) -> None:
        anything = Route("/any", _handler)
        post = Route("/any", _handler, "POST")
        router = _router(anything, post)
        assert router.match("POST", "/any").route is post
        assert router.match("GET", "/any").route is anything

    def test_trailing_slash_ignored(self) -> None:
        router = _router(Route("/items", _handler, "GET"))
        assert router.match("GET", "/items/").route.path == "/items"


class TestRegistration:
    def test_duplicate_pattern_conflicts(self) -> None:
        router = Router()
        router.add(Route("/items", _handler, "GET"))
        with pytest.raises(ConfigurationError, match="conflicts"):
            router.add(Route("/items", _handler, "GET"))

    def test_add_after_compile(self) -> None:
        router = _router()
        with pytest.raises(RuntimeError):
            router.add(Route("/late", _handler, "GET"))

    def test_routes_listing(self) -> None:
        routes = [
            Route("/a", _handler, "GET"),
            Route("/a/{x}", _handler, "PUT"),
            Route("/f/{p:path}", _handler),
        ]
        router = _router(*routes)
        assert {r.pattern for r in router.routes} == {"GET /a", "PUT /a/{x}", "/f/{p:path}"}


class TestSharedParameterPositions:
    def test_each_route_names_its_own_params(self) -> None:
        show = Route("/users/{name}", _handler, "GET")
        delete = Route("/users/{id}", _handler, "DELETE")
        router = _router(show, delete)
        assert router.match("GET", "/users/42").path_params == {"name": "42"}
        match = router.match("DELETE", "/users/42")
        assert match.route is delete
        assert match.path_params == {"id": "42"}

    def test_nested_params_named_per_route(self) -> None:
        router = _router(
            Route("/orgs/{org}/repos/{repo}", _handler, "GET"),
            Route("/orgs/{slug}/repos/{name}", _handler, "PUT"),
        )
        assert router.match("PUT", "/orgs/acme/repos/web").path_params == {
            "slug": "acme",
            "name": "web",
        }

    def test_differently_named_params_same_method_conflict(self) -> None:
        router = Router()
        router.add(Route("/users/{name}", _handler, "GET"))
        with pytest.raises(ConfigurationError, match="conflicts"):
            router.add(Route("/users/{id}", _handler, "GET"))

    def test_catch_all_named_per_route(self) -> None:
        router = _router(
            Route("/files/{rest:path}", _handler, "GET"),
            Route("/files/{target:path}", _handler, "DELETE"),
        )
        assert router.match("DELETE", "/files/a/b").path_params == {"target": "a/b"}


class TestConverterPrecedence:
    def test_str_route_not_shadowed_by_int(self) -> None:
        get = Route("/items/{id:int}", _handler, "GET")
        put = Route("/items/{name}", _handler, "PUT")
        router = _router(get, put)
        match = router.match("PUT", "/items/abc")
        assert match.route is put
        assert match.path_params == {"name": "abc"}

    def test_int_tried_before_str(self) -> None:
        by_id = Route("/items/{id:int}", _handler, "GET")
        by_name = Route("/items/{name}", _handler, "GET")
        router = _router(by_name, by_id)
        assert router.match("GET", "/items/42").route is by_id
        assert router.match("GET", "/items/abc").route is by_name

    def test_numeric_segment_reaches_str_route_for_other_method(self) -> None:
        put = Route("/items/{name}", _handler, "PUT")
        router = _router(Route("/items/{id:int}", _handler, "GET"), put)
        assert router.match("PUT", "/items/42").route is put


class TestMethodFallthrough:
    def test_static_without_method_falls_through_to_param(self) -> None:
        post = Route("/a/{x}", _handler, "POST")
        router = _router(Route("/a/b", _handler, "GET"), post)
        match = router.match("POST", "/a/b")
        assert match.route is post
        assert match.path_params == {"x": "b"}

    def test_static_still_preferred_for_its_method(self) -> None:
        get = Route("/a/b", _handler, "GET")
        router = _router(get, Route("/a/{x}", _handler, "POST"))
        assert router.match("GET", "/a/b").route is get

    def test_falls_through_to_catch_all(self) -> None:
        upload = Route("/files/{rest:path}", _handler, "POST")
        router = _router(Route("/files/{name}", _handler, "GET"), upload)
        assert router.match("POST", "/files/report").path_params == {"rest": "report"}

    def test_405_lists_methods_of_every_matching_route(self) -> None:
        router = _router(Route("/a/b", _handler, "GET"), Route("/a/{x}", _handler, "POST"))
        with pytest.raises(MethodNotAllowed) as info:
            router.match("DELETE", "/a/b")
        assert info.value.headers == (("Allow", "GET, HEAD, POST"),)
