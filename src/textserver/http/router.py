"""
=============================================================================
URL ROUTER
=============================================================================

Maps (method, path) to a handler.

    GET /             → home
    GET /hello        → hello
    GET /health       → health
    GET /read-file    → FileReadHandler
    anything else     → 404 "Route not found."
    known path, wrong method → 405 "Method Not Allowed." + Allow header

Paths match exactly, after trailing slashes are stripped:

    "/hello/"  →  "/hello"
    "/"        →  "/"

First registered, first matched.

=============================================================================
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from .request import HTTPRequest
from .response import HTTPResponse, not_found, method_not_allowed


Handler = Callable[[HTTPRequest], HTTPResponse]


@dataclass
class Route:
    """A path bound to a handler for one method."""

    path: str
    method: str
    handler: Handler


class Router:
    """
    Decorator-friendly router:

        router = Router()

        @router.get("/hello")
        def hello(request):
            return ok("Hello!")
    """

    def __init__(self):
        self._routes: List[Route] = []

    def add_route(self, path: str, handler: Handler, method: str = "GET") -> Route:
        route = Route(path=self._normalize(path), method=method.upper(), handler=handler)
        self._routes.append(route)
        return route

    @staticmethod
    def _normalize(path: str) -> str:
        return "/" + path.strip("/")

    def match(self, method: str, path: str) -> Optional[Route]:
        path = self._normalize(path)
        method = method.upper()

        for route in self._routes:
            if route.method == method and route.path == path:
                return route

        return None

    def get_allowed_methods(self, path: str) -> List[str]:
        """Methods registered for `path`; empty if the path is unknown."""
        path = self._normalize(path)
        return sorted({route.method for route in self._routes if route.path == path})

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """Dispatch to the matching handler, or answer 405 / 404."""
        route = self.match(request.method, request.path)
        if route:
            return route.handler(request)

        allowed = self.get_allowed_methods(request.path)
        if allowed:
            return method_not_allowed(allowed)

        return not_found()

    def get(self, path: str) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            self.add_route(path, handler, "GET")
            return handler
        return decorator

    def routes(self) -> List[Route]:
        return list(self._routes)

    def print_routes(self) -> None:
        print("\nRegistered Routes:")
        print("-" * 60)
        for route in self._routes:
            print(f"  {route.method:8} {route.path}")
        print("-" * 60)
