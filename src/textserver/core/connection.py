"""
=============================================================================
CLIENT CONNECTION
=============================================================================

Wraps one accepted client socket. The HTTP server asks it for complete
request bytes and hands it complete response bytes; everything about TCP
chunking stays in here.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONNECTION LIFECYCLE                             │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   NEW ──► READING ──► PROCESSING ──► WRITING ──► KEEP_ALIVE ──┐     │
    │              ▲                                                 │     │
    │              └─────────────────────────────────────────────────┘     │
    │                                                                      │
    │   any state ──► CLOSING ──► CLOSED                                  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Reading a request:

    1. recv() into a buffer until the header terminator (\\r\\n\\r\\n)
    2. Find Content-Length in the raw header block
    3. recv() until the body is complete
    4. Slice one request off the front; leftovers stay for the next call

The first request gets `timeout` seconds; later requests on the same
keep-alive connection get `keep_alive_timeout`, and running out of it is
a normal close, not an error.

=============================================================================
"""

import logging
import socket
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


logger = logging.getLogger(__name__)

HEADER_TERMINATOR = b"\r\n\r\n"


class RequestTooLargeError(ValueError):
    """The buffered request grew past max_request_size."""


class ConnectionState(Enum):
    NEW = "new"
    READING = "reading"
    PROCESSING = "processing"
    WRITING = "writing"
    KEEP_ALIVE = "keep_alive"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass
class Connection:
    """
    A client socket plus read buffer, timeouts and state.

    Attributes:
        sock: The accepted client socket.
        address: Client (ip, port).
        id: Short random id used in log lines.
        requests_handled: Requests read so far on this connection.
    """

    sock: socket.socket
    address: Tuple[str, int]

    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    state: ConnectionState = ConnectionState.NEW
    requests_handled: int = 0

    buffer_size: int = 8192
    timeout: float = 30.0
    keep_alive_timeout: float = 5.0
    max_request_size: int = 1024 * 1024

    _buffer: bytes = field(default=b"", repr=False)

    def __post_init__(self):
        self.sock.setblocking(True)
        if self.timeout:
            self.sock.settimeout(self.timeout)

    # =========================================================================
    # READING
    # =========================================================================

    def read_request(self) -> Optional[bytes]:
        """
        Read one complete HTTP request.

        Returns:
            The request bytes, or None if the client closed the connection
            (or went quiet during keep-alive).

        Raises:
            TimeoutError: The FIRST request did not arrive in time.
            RequestTooLargeError: The request exceeds max_request_size.
        """
        self.state = ConnectionState.READING

        if self.requests_handled > 0:
            self.sock.settimeout(self.keep_alive_timeout)

        try:
            while HEADER_TERMINATOR not in self._buffer:
                chunk = self._recv()
                if not chunk:
                    return None
                self._append(chunk)

            header_end = self._buffer.find(HEADER_TERMINATOR)
            body_start = header_end + len(HEADER_TERMINATOR)
            content_length = self._parse_content_length(self._buffer[:header_end])

            if body_start + content_length > self.max_request_size:
                raise RequestTooLargeError(
                    f"Request too large: {body_start + content_length} bytes"
                )

            while len(self._buffer) - body_start < content_length:
                chunk = self._recv()
                if not chunk:
                    break  # client gave up mid-body; parser sees a short body
                self._append(chunk)

            request_end = body_start + content_length
            request_data = self._buffer[:request_end]
            self._buffer = self._buffer[request_end:]

            self.requests_handled += 1
            return request_data

        except socket.timeout:
            if self.requests_handled > 0:
                logger.debug(f"[{self.id}] Keep-alive timeout")
                return None
            raise TimeoutError("Request read timeout")

        finally:
            if self.state != ConnectionState.CLOSED:
                self.sock.settimeout(self.timeout)

    def _append(self, chunk: bytes) -> None:
        self._buffer += chunk
        if len(self._buffer) > self.max_request_size:
            raise RequestTooLargeError(f"Request too large: {len(self._buffer)} bytes")

    def _recv(self) -> bytes:
        try:
            data = self.sock.recv(self.buffer_size)
        except (ConnectionResetError, BrokenPipeError):
            return b""
        return data

    @staticmethod
    def _parse_content_length(headers: bytes) -> int:
        """Content-Length from the raw header block, 0 if absent or junk."""
        text = headers.decode("latin-1").lower()
        for line in text.split("\r\n")[1:]:
            name, sep, value = line.partition(":")
            if sep and name.strip() == "content-length":
                try:
                    return max(0, int(value.strip()))
                except ValueError:
                    return 0
        return 0

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> bool:
        """
        sendall() the response bytes.

        Returns:
            False if the client went away mid-send.
        """
        self.state = ConnectionState.WRITING
        try:
            self.sock.sendall(data)
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False
        return True

    def set_keep_alive(self) -> None:
        self.state = ConnectionState.KEEP_ALIVE

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self) -> None:
        """
        Close gracefully: send FIN, drain briefly, release the socket.

        Safe to call more than once.
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.sock.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # peer already gone

        try:
            self.sock.settimeout(0.5)
            while self.sock.recv(1024):
                pass
        except OSError:
            pass

        try:
            self.sock.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.requests_handled} requests")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
