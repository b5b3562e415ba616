"""
Plain-text greeting endpoints.

    GET /               → "Welcome to the Text Server"
    GET /hello?name=Ada → "Hello, Ada!"
    GET /hello          → "Hello, Guest!"
"""

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, ok


WELCOME_MESSAGE = "Welcome to the Text Server"
DEFAULT_NAME = "Guest"


def home(request: HTTPRequest) -> HTTPResponse:
    return ok(WELCOME_MESSAGE)


def hello(request: HTTPRequest) -> HTTPResponse:
    # "?name=" counts as absent
    name = request.get_query("name") or DEFAULT_NAME
    return ok(f"Hello, {name}!")
