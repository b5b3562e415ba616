"""
Application factory: an HTTPServer with the text server's routes and
middleware already wired.

    GET /            welcome text
    GET /hello       greeting (?name=)
    GET /health      {"status": "ok"}
    GET /read-file   file contents (?file=)

Middleware order (outermost first): access logging, security headers.
"""

from typing import Optional

from .config import ServerConfig
from .handlers import FileReadHandler, HealthHandler, home, hello
from .middleware import LoggingMiddleware, SecurityHeadersMiddleware
from .server import HTTPServer


def create_app(config: Optional[ServerConfig] = None) -> HTTPServer:
    """
    Build a ready-to-run server.

    Example:
        app = create_app(ServerConfig(port=3000, files_root="/srv/notes"))
        app.run()
    """
    config = config or ServerConfig()
    server = HTTPServer(config)

    server.use(LoggingMiddleware(log_format=config.log_format))
    server.use(SecurityHeadersMiddleware())

    health = HealthHandler()
    files = FileReadHandler(config)

    server.get("/")(home)
    server.get("/hello")(hello)
    server.get("/health")(health.handle)
    server.get("/read-file")(files.handle)

    return server
