"""
=============================================================================
HTTP/1.1 PROTOCOL LAYER
=============================================================================

Bytes in, bytes out. Between them, plain dataclasses.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   b"GET /read-file?file=a.txt HTTP/1.1\\r\\n..."                      │
    │        │                                                             │
    │        ▼  RequestParser.parse()          (request.py)               │
    │   HTTPRequest(method="GET", path="/read-file", query_params=...)    │
    │        │                                                             │
    │        ▼  Router.handle()                (router.py)                │
    │   handler(request)                                                   │
    │        │                                                             │
    │        ▼                                                             │
    │   HTTPResponse(status=200, headers={...}, body=b"...")              │
    │        │                                                             │
    │        ▼  HTTPResponse.to_bytes()        (response.py)              │
    │   b"HTTP/1.1 200 OK\\r\\nContent-Length: ...\\r\\n\\r\\n..."            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Key points of the wire format:
- Lines end with CRLF (\\r\\n)
- An empty line separates headers from body
- Header names are case-insensitive
- Content-Length tells the reader where the body ends

=============================================================================
"""

from .request import HTTPRequest, RequestParser, HTTPParseError
from .response import (
    HTTPResponse,
    ResponseBuilder,
    ok,
    text,
    bad_request,
    not_found,
    method_not_allowed,
    error_json,
    internal_error,
)
from .router import Router, Route
from .status_codes import HTTPStatus, get_status

__all__ = [
    "HTTPRequest",
    "RequestParser",
    "HTTPParseError",
    "HTTPResponse",
    "ResponseBuilder",
    "ok",
    "text",
    "bad_request",
    "not_found",
    "method_not_allowed",
    "error_json",
    "internal_error",
    "Router",
    "Route",
    "HTTPStatus",
    "get_status",
]
