"""
HTTP status codes used by the text server.

IntEnum, so members compare equal to plain ints:

    >>> HTTPStatus.OK == 200
    True
    >>> HTTPStatus.NOT_FOUND.phrase
    'Not Found'
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    # 2xx SUCCESS
    OK = 200

    # 4xx CLIENT ERRORS
    BAD_REQUEST = 400            # malformed request, failed file read
    NOT_FOUND = 404              # no route for the path
    METHOD_NOT_ALLOWED = 405     # route exists, method does not
    REQUEST_TIMEOUT = 408        # first request never arrived
    PAYLOAD_TOO_LARGE = 413      # over max_request_size

    # 5xx SERVER ERRORS
    INTERNAL_SERVER_ERROR = 500  # handler raised
    SERVICE_UNAVAILABLE = 503    # worker queue full
    HTTP_VERSION_NOT_SUPPORTED = 505

    @property
    def phrase(self) -> str:
        """Reason phrase for the status line ("HTTP/1.1 200 OK")."""
        return _STATUS_PHRASES.get(self, "Unknown")

    @property
    def is_success(self) -> bool:
        return 200 <= self < 300

    @property
    def is_client_error(self) -> bool:
        return 400 <= self < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self < 600


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.METHOD_NOT_ALLOWED: "Method Not Allowed",
    HTTPStatus.REQUEST_TIMEOUT: "Request Timeout",
    HTTPStatus.PAYLOAD_TOO_LARGE: "Payload Too Large",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
    HTTPStatus.SERVICE_UNAVAILABLE: "Service Unavailable",
    HTTPStatus.HTTP_VERSION_NOT_SUPPORTED: "HTTP Version Not Supported",
}


def get_status(code: int) -> HTTPStatus:
    """
    Look up a status by number.

    Unknown codes fall back to 400 for 4xx and 500 for everything else,
    so a parse error with an unusual code still produces a valid response.
    """
    try:
        return HTTPStatus(code)
    except ValueError:
        return HTTPStatus.BAD_REQUEST if 400 <= code < 500 else HTTPStatus.INTERNAL_SERVER_ERROR
