"""
=============================================================================
MIDDLEWARE PIPELINE
=============================================================================

A middleware sees every request on its way in and every response on its
way out:

    class AddHeader(Middleware):
        def __call__(self, request, next):
            response = next(request)        # continue the chain
            response.set_header("X-Thing", "1")
            return response

The pipeline wraps them around the router like onion layers. First added
is outermost:

    pipeline.add(LoggingMiddleware())
    pipeline.add(SecurityHeadersMiddleware())

        ┌─────────────────────────────────────────────┐
        │  LoggingMiddleware                          │
        │  ┌───────────────────────────────────────┐  │
        │  │  SecurityHeadersMiddleware            │  │
        │  │  ┌─────────────────────────────────┐  │  │
        │  │  │  router.handle                  │  │  │
        │  │  └─────────────────────────────────┘  │  │
        │  └───────────────────────────────────────┘  │
        └─────────────────────────────────────────────┘

So the access log records the response AFTER the security headers were
added, and times the whole chain.

=============================================================================
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterator, List

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


logger = logging.getLogger(__name__)

NextHandler = Callable[[HTTPRequest], HTTPResponse]


class Middleware(ABC):
    """Base class: implement __call__(request, next) -> response."""

    @abstractmethod
    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        """
        Handle `request`, normally by calling next(request) and returning
        (possibly modified) response.
        """

    @property
    def name(self) -> str:
        return self.__class__.__name__


class MiddlewarePipeline:
    """Ordered list of middleware that can wrap a final handler."""

    def __init__(self):
        self._middleware: List[Middleware] = []

    def add(self, middleware: Middleware) -> "MiddlewarePipeline":
        self._middleware.append(middleware)
        logger.debug(f"Added middleware: {middleware.name}")
        return self

    def use(self, *middleware: Middleware) -> "MiddlewarePipeline":
        for mw in middleware:
            self.add(mw)
        return self

    def wrap(self, handler: NextHandler) -> NextHandler:
        """
        Build MW1 → MW2 → ... → handler.

        Wrapping runs in reverse so the first-added middleware ends up
        outermost.
        """
        current = handler
        for middleware in reversed(self._middleware):
            current = self._bind(middleware, current)
        return current

    @staticmethod
    def _bind(middleware: Middleware, next_handler: NextHandler) -> NextHandler:
        def wrapped(request: HTTPRequest) -> HTTPResponse:
            return middleware(request, next_handler)
        return wrapped

    def __len__(self) -> int:
        return len(self._middleware)

    def __iter__(self) -> Iterator[Middleware]:
        return iter(self._middleware)
