"""
Unit tests for URL router.
"""

from textserver.http.router import Router
from textserver.http.request import HTTPRequest
from textserver.http.response import HTTPResponse, ResponseBuilder
from textserver.http.status_codes import HTTPStatus


def make_request(method: str, path: str) -> HTTPRequest:
    """Helper to create a request for testing."""
    return HTTPRequest(method=method, path=path)


def dummy_handler(request: HTTPRequest) -> HTTPResponse:
    """Dummy handler for testing."""
    return ResponseBuilder().json({"path": request.path}).build()


class TestRouter:
    """Tests for Router class."""

    def test_add_route(self):
        router = Router()
        router.add_route("/read-file", dummy_handler, method="get")

        routes = router.routes()
        assert len(routes) == 1
        assert routes[0].path == "/read-file"
        assert routes[0].method == "GET"

    def test_match_root(self):
        """The root route matches only the root, not every path."""
        router = Router()
        router.add_route("/", dummy_handler, method="GET")

        assert router.match("GET", "/") is not None
        assert router.match("GET", "/hello") is None

    def test_match_static_path(self):
        router = Router()
        router.add_route("/hello", dummy_handler, method="GET")
        router.add_route("/health", dummy_handler, method="GET")

        assert router.match("GET", "/hello").path == "/hello"
        assert router.match("GET", "/health").path == "/health"

    def test_match_is_exact(self):
        """A registered path does not match its prefixes or extensions."""
        router = Router()
        router.add_route("/read-file", dummy_handler, method="GET")

        assert router.match("GET", "/read-file/extra") is None
        assert router.match("GET", "/read") is None

    def test_trailing_slash_normalized(self):
        router = Router()
        router.add_route("/hello/", dummy_handler, method="GET")

        assert router.match("GET", "/hello") is not None
        assert router.match("GET", "/hello/") is not None

    def test_match_with_method(self):
        router = Router()
        router.add_route("/items", dummy_handler, method="GET")
        router.add_route("/items", dummy_handler, method="POST")

        assert router.match("GET", "/items").method == "GET"
        assert router.match("post", "/items").method == "POST"

    def test_no_match(self):
        router = Router()
        router.add_route("/hello", dummy_handler, method="GET")

        assert router.match("GET", "/bye") is None
        assert router.match("POST", "/hello") is None  # Wrong method

    def test_get_allowed_methods(self):
        router = Router()
        router.add_route("/items", dummy_handler, method="GET")
        router.add_route("/items", dummy_handler, method="POST")
        router.add_route("/items", dummy_handler, method="DELETE")

        assert router.get_allowed_methods("/items") == ["DELETE", "GET", "POST"]
        assert router.get_allowed_methods("/other") == []

    def test_first_registered_wins(self):
        router = Router()
        router.add_route("/hello", lambda r: ResponseBuilder().text("first").build(), method="GET")
        router.add_route("/hello", lambda r: ResponseBuilder().text("second").build(), method="GET")

        response = router.handle(make_request("GET", "/hello"))
        assert response.body == b"first"

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
        router.add_route("/hello", dummy_handler, method="GET")

        response = router.handle(make_request("GET", "/nope"))

        assert response.status == HTTPStatus.NOT_FOUND
        assert response.text == "Route not found."

    def test_handle_method_not_allowed(self):
        router = Router()
        router.add_route("/hello", dummy_handler, method="GET")

        response = router.handle(make_request("POST", "/hello"))

        assert response.status == HTTPStatus.METHOD_NOT_ALLOWED
        assert response.headers["Allow"] == "GET"
        assert response.text == "Method Not Allowed."


class TestRouterDecorators:
    """Tests for decorator-style route registration."""

    def test_get_decorator(self):
        router = Router()

        @router.get("/thing")
        def thing(request):
            return ResponseBuilder().text("thing").build()

        assert router.routes()[0].method == "GET"
        assert router.routes()[0].handler is thing

    def test_print_routes(self, capsys):
        router = Router()
        router.add_route("/read-file", dummy_handler, method="GET")
        router.print_routes()

        out = capsys.readouterr().out
        assert "GET" in out
        assert "/read-file" in out
