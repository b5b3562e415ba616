"""
pytest configuration and fixtures.
"""

import socket
import threading
from typing import Callable, Generator, List, Optional
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from textserver import HTTPServer, ServerConfig, create_app
from textserver.demo import SAMPLE_CONTENT


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request for the file endpoint."""
    return (
        b"GET /read-file?file=sample.txt&file=other.txt HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/plain\r\n"
        b"Connection: keep-alive\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample HTTP POST request with a small text body."""
    body = b"name=Ada&lang=python"
    return (
        b"POST /hello HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"Content-Type: application/x-www-form-urlencoded\r\n"
        + f"Content-Length: {len(body)}\r\n".encode()
        + b"Connection: close\r\n"
        b"\r\n"
        + body
    )


@pytest.fixture
def text_files(tmp_path: Path) -> Path:
    """
    A directory with:
        sample.txt   three lines, trailing newline
        empty.txt    zero bytes
        crlf.txt     "alpha\\r\\nbeta\\r\\n"
        numbers.txt  20 numbered lines
        subdir/      a directory
    """
    (tmp_path / "sample.txt").write_text(SAMPLE_CONTENT, encoding="utf-8")
    (tmp_path / "empty.txt").write_bytes(b"")
    (tmp_path / "crlf.txt").write_bytes(b"alpha\r\nbeta\r\n")
    (tmp_path / "numbers.txt").write_text(
        "".join(f"line {i}\n" for i in range(1, 21)), encoding="utf-8"
    )
    (tmp_path / "subdir").mkdir()
    return tmp_path


@pytest.fixture
def config(text_files: Path) -> ServerConfig:
    """Test server configuration rooted at the text_files directory."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,  # Let the OS pick a free port
        min_workers=2,
        max_workers=4,
        timeout=5.0,
        keep_alive_timeout=1.0,
        log_level="WARNING",
        files_root=str(text_files),
    )


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class TestServer:
    """Runs an HTTPServer in a background thread."""

    __test__ = False  # not a test class, despite the name

    def __init__(self, server: HTTPServer):
        self.server = server
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    def start(self):
        self._thread = threading.Thread(
            target=self.server.run,
            kwargs={"banner": False},
            daemon=True,
        )
        self._thread.start()

        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        self.server.stop()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=10.0)


@pytest.fixture
def make_server() -> Generator[Callable[[ServerConfig], TestServer], None, None]:
    """Factory for extra servers with their own config; all stopped at teardown."""
    started: List[TestServer] = []

    def factory(server_config: ServerConfig) -> TestServer:
        srv = TestServer(create_app(server_config))
        srv.start()
        started.append(srv)
        return srv

    yield factory

    for srv in started:
        srv.stop()


@pytest.fixture
def test_server(config: ServerConfig) -> Generator[TestServer, None, None]:
    """The full application on an OS-assigned port."""
    srv = TestServer(create_app(config))
    srv.start()

    yield srv

    srv.stop()
