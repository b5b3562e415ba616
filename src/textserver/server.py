"""
=============================================================================
HTTP SERVER
=============================================================================

Glues the layers together:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   SocketServer ──accept──► _handle_connection(conn)                 │
    │                                   │                                  │
    │                                   ▼  ThreadPool.submit()             │
    │                            _process_connection(conn)   (worker)     │
    │                                   │                                  │
    │              ┌────────────────────┴─────────────────────┐            │
    │              │  keep-alive loop                          │            │
    │              │                                           │            │
    │              │  conn.read_request()                      │            │
    │              │     ├── TimeoutError        → 408         │            │
    │              │     └── RequestTooLarge     → 413         │            │
    │              │  parser.parse()                           │            │
    │              │     └── HTTPParseError      → its status  │            │
    │              │  middleware → router → handler            │            │
    │              │     └── any exception       → 500 JSON    │            │
    │              │  conn.send_response()                     │            │
    │              └───────────────────────────────────────────┘            │
    │                                                                      │
    │   Pool queue full → 503 and close                                   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Responses the server produces itself (408, 413, 500, 503, parse errors)
never pass through the middleware pipeline, so they get the security
headers applied directly.

=============================================================================
"""

import logging
from typing import Callable, Optional, Tuple

from .config import ServerConfig
from .core import SocketServer, Connection, ConnectionState, RequestTooLargeError, ThreadPool
from .http import (
    HTTPRequest,
    HTTPResponse,
    HTTPParseError,
    HTTPStatus,
    RequestParser,
    Router,
    error_json,
    get_status,
    internal_error,
)
from .middleware import Middleware, MiddlewarePipeline, apply_security_headers


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class HTTPServer:
    """
    Multi-threaded HTTP/1.1 server.

    Usage:
        server = HTTPServer(ServerConfig(port=8080))

        @server.get("/")
        def index(request):
            return ok("hi")

        server.use(LoggingMiddleware())
        server.run()            # blocks; Ctrl+C or stop() to end
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig()
        self.config.validate()

        self._socket_server = SocketServer(self.config)
        self._thread_pool = ThreadPool(
            min_workers=self.config.min_workers,
            max_workers=self.config.max_workers,
        )
        self._parser = RequestParser(max_request_size=self.config.max_request_size)
        self._router = Router()
        self._middleware = MiddlewarePipeline()
        self._handler: Optional[Callable[[HTTPRequest], HTTPResponse]] = None
        self._running = False

    # =========================================================================
    # SETUP
    # =========================================================================

    def use(self, middleware: Middleware) -> "HTTPServer":
        """Add middleware; first added runs outermost."""
        self._middleware.add(middleware)
        return self

    @property
    def router(self) -> Router:
        return self._router

    def get(self, path: str):
        return self._router.get(path)

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def address(self) -> Tuple[str, int]:
        """Bound (host, port); the real port once running with port=0."""
        return self._socket_server.bound_address

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the socket is listening. False on timeout."""
        return self._socket_server.ready.wait(timeout)

    def run(self, host: Optional[str] = None, port: Optional[int] = None, banner: bool = True):
        """
        Start serving. Blocks until stop() or SIGINT/SIGTERM.

        Raises:
            OSError: If the listening socket cannot be bound.
        """
        if host is not None:
            self.config.host = host
        if port is not None:
            self.config.port = port

        self._setup_logging()
        self._handler = self._middleware.wrap(self._router.handle)
        self._thread_pool.start()
        self._running = True

        logger.info(f"Starting HTTP server on {self.config.host}:{self.config.port}")
        if banner:
            self._print_startup_banner()

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._shutdown()

    def stop(self):
        """Ask a running server to shut down. Safe from any thread."""
        self._socket_server.shutdown()

    def _print_startup_banner(self):
        host, port = self.config.host, self.config.port
        print()
        print("╔══════════════════════════════════════════════════════════════╗")
        print(f"║  {self.config.server_name} running")
        print(f"║  http://{host}:{port}")
        print(f"║  Workers: {self.config.min_workers}-{self.config.max_workers} threads")
        print(f"║  Files: {self.config.files_root} (strategy: {self.config.read_strategy})")
        print("║  Press Ctrl+C to stop")
        print("╚══════════════════════════════════════════════════════════════╝")
        self._router.print_routes()

    def _setup_logging(self):
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)
        logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        logging.getLogger("textserver").setLevel(level)

    def _shutdown(self):
        logger.info("Shutting down server...")
        self._running = False
        self._thread_pool.shutdown(wait=True, timeout=5.0)
        logger.info("Server stopped")

    # =========================================================================
    # CONNECTION HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """Runs on the accept thread: hand the connection to a worker."""
        submitted = self._thread_pool.submit(self._process_connection, args=(conn,), block=False)

        if not submitted:
            logger.warning(f"[{conn.id}] Thread pool full, rejecting connection")
            self._send_error(conn, HTTPStatus.SERVICE_UNAVAILABLE, "Server overloaded")
            conn.close()

    def _process_connection(self, conn: Connection):
        """Runs on a worker: the keep-alive loop for one connection."""
        with conn:
            while self._running:
                try:
                    raw_request = conn.read_request()
                except TimeoutError:
                    self._send_error(conn, HTTPStatus.REQUEST_TIMEOUT, "Request timeout")
                    break
                except RequestTooLargeError as e:
                    self._send_error(conn, HTTPStatus.PAYLOAD_TOO_LARGE, str(e))
                    break

                if raw_request is None:
                    break

                try:
                    request = self._parser.parse(raw_request, conn.address)
                except HTTPParseError as e:
                    self._send_error(conn, get_status(e.status_code), str(e))
                    break

                conn.state = ConnectionState.PROCESSING
                response = self.dispatch(request)

                keep_alive = request.is_keep_alive and self.config.keep_alive
                if keep_alive:
                    response.headers.setdefault("Connection", "keep-alive")
                    response.headers.setdefault(
                        "Keep-Alive", f"timeout={int(self.config.keep_alive_timeout)}"
                    )
                else:
                    response.headers["Connection"] = "close"

                if not conn.send_response(response.to_bytes(self.config.server_name)):
                    break
                if not keep_alive:
                    break

                conn.set_keep_alive()

    def dispatch(self, request: HTTPRequest) -> HTTPResponse:
        """
        Run one request through middleware and router.

        Never raises: a handler exception becomes a 500 JSON response.
        """
        handler = self._handler or self._middleware.wrap(self._router.handle)
        try:
            return handler(request)
        except Exception as e:
            logger.exception(f"Handler error for {request.method} {request.path}: {e}")
            return apply_security_headers(internal_error())

    def _send_error(self, conn: Connection, status: HTTPStatus, message: str):
        """Answer a request that never reached the pipeline."""
        response = apply_security_headers(error_json(status, message))
        conn.send_response(response.to_bytes(self.config.server_name))
