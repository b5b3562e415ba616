"""
=============================================================================
TEXTSERVER
=============================================================================

A small HTTP/1.1 server, built on raw sockets, that serves text files,
together with the file-reading toolkit it uses.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      PACKAGE LAYOUT                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   files/        validation, probing, 3 read strategies, streaming   │
    │   core/         socket server, connections, thread pool             │
    │   http/         request parser, responses, router, status codes     │
    │   middleware/   access logging, security headers                    │
    │   handlers/     /, /hello, /health, /read-file                      │
    │                                                                      │
    │   config.py     ServerConfig (defaults, env, validation)            │
    │   server.py     HTTPServer (keep-alive loop, error responses)       │
    │   app.py        create_app(): routes + middleware wired up          │
    │   demo.py       console demos for the file toolkit                  │
    │   __main__.py   CLI                                                  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Quick start:

    from textserver import create_app, ServerConfig

    create_app(ServerConfig(port=8080, files_root="./notes")).run()

or, without the server:

    from textserver.files import get_reader, stream_lines

    text = get_reader("lines").read("notes.txt")

=============================================================================
"""

__version__ = "1.0.0"

from .config import ServerConfig
from .server import HTTPServer
from .app import create_app

__all__ = ["HTTPServer", "ServerConfig", "create_app", "__version__"]
