"""
Security response headers.

Three headers go on every response the server sends, including the ones
it generates itself for parse errors, timeouts and overload:

    X-Content-Type-Options: nosniff       browsers must trust Content-Type
    X-XSS-Protection: 1; mode=block       legacy XSS filter, blocking mode
    X-Frame-Options: DENY                 never render inside a frame

apply_security_headers() is the single place they are defined; the
middleware uses it for routed responses and HTTPServer uses it for the
responses that never reach the pipeline.
"""

from typing import Dict

from .base import Middleware, NextHandler
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "X-Frame-Options": "DENY",
}


def apply_security_headers(response: HTTPResponse) -> HTTPResponse:
    for name, value in SECURITY_HEADERS.items():
        response.headers[name] = value
    return response


class SecurityHeadersMiddleware(Middleware):
    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        return apply_security_headers(next(request))
