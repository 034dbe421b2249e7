"""
Unit tests for URL router.
"""

import pytest

from chirpy.http.router import Router, Route, RouteMatch
from chirpy.http.request import HTTPRequest
from chirpy.http.response import HTTPResponse, ResponseBuilder, HTTPStatus


def make_request(method: str, path: str) -> HTTPRequest:
    """Helper to create a request for testing."""
    return HTTPRequest(method=method, path=path)


def dummy_handler(request: HTTPRequest) -> HTTPResponse:
    """Dummy handler for testing."""
    return ResponseBuilder().json({"path": request.path}).build()


def fallback_handler(request: HTTPRequest) -> HTTPResponse:
    return ResponseBuilder().text("fallback").build()


class TestRouter:
    """Tests for Router class."""

    def test_add_route(self):
        router = Router()
        route = router.add_route("/api/metrics", dummy_handler, method="GET")

        assert isinstance(route, Route)
        assert len(router.routes()) == 1
        assert router.routes()[0].path == "/api/metrics"
        assert router.routes()[0].method == "GET"

    def test_match_static_path(self):
        router = Router()
        router.add_route("/api/healthz", dummy_handler, method="GET")
        router.add_route("/api/metrics", dummy_handler, method="GET")

        match = router.match("GET", "/api/healthz")
        assert isinstance(match, RouteMatch)
        assert match.route.path == "/api/healthz"

        match = router.match("GET", "/api/metrics")
        assert match is not None
        assert match.route.path == "/api/metrics"

    def test_trailing_slash_is_a_different_path(self):
        router = Router()
        router.add_route("/api/metrics", dummy_handler, method="GET")

        assert router.match("GET", "/api/metrics/") is None
        assert router.get_allowed_methods("/api/metrics/") == []

    def test_match_with_method(self):
        router = Router()
        router.add_route("/chirps", dummy_handler, method="GET")
        router.add_route("/chirps", dummy_handler, method="POST")

        assert router.match("GET", "/chirps").route.method == "GET"
        assert router.match("POST", "/chirps").route.method == "POST"

    def test_any_method_route(self):
        router = Router()
        router.any("/api/reset", dummy_handler)

        for method in ("GET", "POST", "DELETE", "HEAD"):
            assert router.match(method, "/api/reset") is not None

    def test_match_dynamic_params(self):
        router = Router()
        router.add_route("/chirps/:id", dummy_handler, method="GET")
        router.add_route("/users/:user_id/chirps/:chirp_id", dummy_handler, method="GET")

        match = router.match("GET", "/chirps/123")
        assert match.params == {"id": "123"}

        match = router.match("GET", "/users/456/chirps/789")
        assert match.params == {"user_id": "456", "chirp_id": "789"}

    def test_match_wildcard_strips_prefix(self):
        router = Router()
        router.any("/app/*path", dummy_handler)

        match = router.match("GET", "/app/assets/logo.png")
        assert match.params == {"path": "assets/logo.png"}

        match = router.match("GET", "/app/index.html")
        assert match.params["path"] == "index.html"

    @pytest.mark.parametrize("path", ["/app", "/app/"])
    def test_wildcard_matches_prefix_itself(self, path):
        router = Router()
        router.any("/app/*path", dummy_handler)

        match = router.match("GET", path)
        assert match is not None
        assert match.params == {"path": ""}

    def test_wildcard_does_not_match_longer_segment(self):
        router = Router()
        router.any("/app/*path", dummy_handler)

        assert router.match("GET", "/application") is None

    def test_no_match(self):
        router = Router()
        router.add_route("/api/healthz", dummy_handler, method="GET")

        assert router.match("GET", "/api/other") is None
        assert router.match("POST", "/api/healthz") is None  # Wrong method

    def test_get_allowed_methods(self):
        router = Router()
        router.add_route("/chirps", dummy_handler, method="GET")
        router.add_route("/chirps", dummy_handler, method="POST")
        router.add_route("/chirps", dummy_handler, method="DELETE")

        assert set(router.get_allowed_methods("/chirps")) == {"DELETE", "GET", "POST"}
        assert router.get_allowed_methods("/unknown") == []

    def test_handle_success(self):
        router = Router()

        @router.get("/hello")
        def hello(request):
            return ResponseBuilder().text("Hello!").build()

        response = router.handle(make_request("GET", "/hello"))

        assert response.status == HTTPStatus.OK
        assert response.body == b"Hello!"

    def test_handle_not_found(self):
        router = Router()
        router.add_route("/api/healthz", dummy_handler, method="GET")

        response = router.handle(make_request("GET", "/api/other"))

        assert response.status == HTTPStatus.NOT_FOUND

    def test_handle_method_not_allowed(self):
        router = Router()
        router.add_route("/api/healthz", dummy_handler, method="GET")

        response = router.handle(make_request("POST", "/api/healthz"))

        assert response.status == HTTPStatus.METHOD_NOT_ALLOWED
        assert response.headers["Allow"] == "GET"
        assert response.body == b""

    def test_head_is_not_allowed_on_get_route(self):
        router = Router()
        router.add_route("/api/metrics", dummy_handler, method="GET")

        response = router.handle(make_request("HEAD", "/api/metrics"))

        assert response.status == HTTPStatus.METHOD_NOT_ALLOWED

    def test_path_params_in_request(self):
        router = Router()
        captured_params = {}

        @router.get("/chirps/:id")
        def get_chirp(request):
            captured_params.update(request.path_params)
            return ResponseBuilder().json(request.path_params).build()

        router.handle(make_request("GET", "/chirps/42"))

        assert captured_params == {"id": "42"}


class TestRouterFallback:
    """Unmatched paths go to the fallback, wrong methods do not."""

    def test_fallback_serves_unknown_path(self):
        router = Router()
        router.add_route("/api/healthz", dummy_handler, method="GET")
        router.fallback(fallback_handler)

        response = router.handle(make_request("GET", "/index.html"))

        assert response.status == HTTPStatus.OK
        assert response.body == b"fallback"

    def test_wrong_method_beats_fallback(self):
        router = Router()
        router.add_route("/api/healthz", dummy_handler, method="GET")
        router.fallback(fallback_handler)

        response = router.handle(make_request("DELETE", "/api/healthz"))

        assert response.status == HTTPStatus.METHOD_NOT_ALLOWED

    def test_trailing_slash_goes_to_fallback(self):
        router = Router()
        router.add_route("/api/healthz", dummy_handler, method="GET")
        router.fallback(fallback_handler)

        response = router.handle(make_request("GET", "/api/healthz/"))

        assert response.body == b"fallback"

    def test_fallback_set_from_group(self):
        router = Router()
        api = router.group("/api")
        api.fallback(fallback_handler)

        response = router.handle(make_request("GET", "/"))

        assert response.body == b"fallback"

    def test_describe_lists_routes_and_fallback(self):
        router = Router()
        router.add_route("/api/healthz", dummy_handler, method="GET")
        router.any("/api/reset", dummy_handler)
        router.fallback(fallback_handler)

        lines = router.describe()

        assert lines[0].split() == ["GET", "/api/healthz"]
        assert lines[1].split() == ["ANY", "/api/reset"]
        assert "(fallback)" in lines[2]


class TestRouterDecorators:
    """Tests for decorator-style route registration."""

    def test_get_decorator(self):
        router = Router()

        @router.get("/test")
        def handler(request):
            return ResponseBuilder().text("test").build()

        assert len(router.routes()) == 1
        assert router.routes()[0].method == "GET"

    def test_post_decorator(self):
        router = Router()

        @router.post("/api/validate_chirp")
        def handler(request):
            return ResponseBuilder().text("test").build()

        assert router.routes()[0].method == "POST"

    def test_decorator_returns_handler(self):
        router = Router()

        def handler(request):
            return ResponseBuilder().text("test").build()

        assert router.get("/test")(handler) is handler


class TestRouterGroups:
    """Tests for route groups."""

    def test_group_prefix(self):
        router = Router()
        api = router.group("/api")

        @api.get("/healthz")
        def healthz(request):
            return ResponseBuilder().text("OK").build()

        assert router.match("GET", "/api/healthz") is not None

    def test_nested_groups(self):
        router = Router()
        v1 = router.group("/api").group("/v1")

        @v1.get("/chirps")
        def list_chirps(request):
            return ResponseBuilder().json([]).build()

        match = router.match("GET", "/api/v1/chirps")
        assert match is not None
        assert match.route.path == "/api/v1/chirps"

    def test_groups_share_registration_order(self):
        router = Router()
        api = router.group("/api")
        router.add_route("/first", dummy_handler, method="GET")
        api.add_route("/second", dummy_handler, method="GET")
        router.add_route("/third", dummy_handler, method="GET")

        assert [r.path for r in router.routes()] == ["/first", "/api/second", "/third"]
