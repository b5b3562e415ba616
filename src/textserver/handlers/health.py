"""
=============================================================================
HEALTH CHECK
=============================================================================

    GET /health  →  200  {"status": "ok"}
                         Cache-Control: no-store

Load balancers and container orchestrators poll this to decide whether
the process should receive traffic. It must be cheap and must never be
served from a cache, hence no-store.

If this handler runs at all, the socket, the worker pool, the parser and
the router are all working, which is exactly what a liveness probe wants
to know.

=============================================================================
"""

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, ResponseBuilder


class HealthHandler:
    """
    Liveness endpoint.

    Usage:
        health = HealthHandler()
        router.get("/health")(health.handle)
    """

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        return ResponseBuilder().json({"status": "ok"}).no_store().build()
