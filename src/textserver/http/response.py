"""
=============================================================================
HTTP RESPONSES
=============================================================================

HTTPResponse is the data; ResponseBuilder is the fluent way to make one;
the module-level helpers (ok, text, not_found, ...) cover the handful of
shapes the text server actually sends.

    HTTP/1.1 200 OK\\r\\n                          ← status line
    Content-Type: text/plain; charset=utf-8\\r\\n
    X-Content-Type-Options: nosniff\\r\\n         ← added by middleware
    Content-Length: 42\\r\\n                      ← added by to_bytes()
    Date: Sat, 17 Oct 2026 12:00:00 GMT\\r\\n     ← added by to_bytes()
    Server: TextServer/1.0\\r\\n                  ← added by to_bytes()
    \\r\\n
    Content of 'sample.txt' (...)               ← body

=============================================================================
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Union

from .status_codes import HTTPStatus


TEXT_PLAIN = "text/plain; charset=utf-8"
APPLICATION_JSON = "application/json; charset=utf-8"


@dataclass
class HTTPResponse:
    """A status, headers and body, ready to serialize."""

    status: HTTPStatus = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        return f"{self.version} {int(self.status)} {self.status.phrase}"

    @property
    def text(self) -> str:
        """Body decoded as UTF-8 (convenience for handlers and tests)."""
        return self.body.decode("utf-8", errors="replace")

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        self.headers[name] = value
        return self

    def set_body(self, body: Union[str, bytes]) -> "HTTPResponse":
        self.body = body.encode("utf-8") if isinstance(body, str) else body
        return self

    def to_bytes(self, server_name: str = "TextServer/1.0") -> bytes:
        """
        Serialize for socket.sendall().

        Content-Length, Date and Server are filled in unless the handler
        already set them.
        """
        response_headers = dict(self.headers)
        response_headers.setdefault("Content-Length", str(len(self.body)))
        response_headers.setdefault("Date", format_http_date(datetime.now(timezone.utc)))
        response_headers.setdefault("Server", server_name)

        lines = [self.status_line]
        lines.extend(f"{name}: {value}" for name, value in response_headers.items())
        header_block = "\r\n".join(lines) + "\r\n\r\n"

        return header_block.encode("latin-1", errors="replace") + self.body


class ResponseBuilder:
    """
    Fluent builder:

        response = (ResponseBuilder()
            .status(HTTPStatus.OK)
            .text("hello")
            .header("Cache-Control", "no-store")
            .build())
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._headers: Dict[str, str] = {}
        self._body: bytes = b""

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        self._status = status
        return self

    def header(self, name: str, value: str) -> "ResponseBuilder":
        self._headers[name] = value
        return self

    def headers(self, headers: Dict[str, str]) -> "ResponseBuilder":
        self._headers.update(headers)
        return self

    def body(self, body: Union[str, bytes]) -> "ResponseBuilder":
        self._body = body.encode("utf-8") if isinstance(body, str) else body
        return self

    def text(self, text: str, content_type: str = TEXT_PLAIN) -> "ResponseBuilder":
        self._body = text.encode("utf-8")
        self._headers["Content-Type"] = content_type
        return self

    def json(self, data: Any, pretty: bool = False) -> "ResponseBuilder":
        indent = 2 if pretty else None
        self._body = json.dumps(data, indent=indent, ensure_ascii=False).encode("utf-8")
        self._headers["Content-Type"] = APPLICATION_JSON
        return self

    def no_store(self) -> "ResponseBuilder":
        self._headers["Cache-Control"] = "no-store"
        return self

    def close_connection(self) -> "ResponseBuilder":
        self._headers["Connection"] = "close"
        return self

    def build(self) -> HTTPResponse:
        return HTTPResponse(status=self._status, headers=dict(self._headers), body=self._body)


def format_http_date(dt: datetime) -> str:
    """
    RFC 7231 HTTP-date, always GMT: "Sat, 17 Oct 2026 12:00:00 GMT".

    Built by hand because strftime's %a / %b follow the process locale.
    """
    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )


# =============================================================================
# SHORTCUTS
# =============================================================================

def ok(body: Union[str, bytes, dict, list] = "") -> HTTPResponse:
    """200 with a text, JSON (dict/list) or raw body."""
    builder = ResponseBuilder().status(HTTPStatus.OK)
    if isinstance(body, (dict, list)):
        builder.json(body)
    elif isinstance(body, str):
        builder.text(body)
    else:
        builder.body(body)
    return builder.build()


def text(status: HTTPStatus, message: str) -> HTTPResponse:
    """Any status with a text/plain body."""
    return ResponseBuilder().status(status).text(message).build()


def bad_request(message: str = "Bad Request") -> HTTPResponse:
    return text(HTTPStatus.BAD_REQUEST, message)


def not_found(message: str = "Route not found.") -> HTTPResponse:
    return text(HTTPStatus.NOT_FOUND, message)


def method_not_allowed(allowed_methods: List[str]) -> HTTPResponse:
    """405 with the Allow header listing what the path does accept."""
    return (ResponseBuilder()
        .status(HTTPStatus.METHOD_NOT_ALLOWED)
        .header("Allow", ", ".join(allowed_methods))
        .text("Method Not Allowed.")
        .build())


def error_json(status: HTTPStatus, message: str) -> HTTPResponse:
    """
    JSON error body: {"error": <phrase>, "message": <message>}.

    Used for server-generated failures (500, 503, parse errors), never
    for /read-file failures, which are text.
    """
    return (ResponseBuilder()
        .status(status)
        .json({"error": status.phrase, "message": message})
        .close_connection()
        .build())


def internal_error(message: str = "An unexpected error occurred") -> HTTPResponse:
    return error_json(HTTPStatus.INTERNAL_SERVER_ERROR, message)
