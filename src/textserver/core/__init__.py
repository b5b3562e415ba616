"""
=============================================================================
CORE: sockets, connections and worker threads
=============================================================================

    ┌──────────────┐    Connection    ┌──────────────┐    task    ┌────────┐
    │ SocketServer │ ───────────────► │  HTTPServer  │ ─────────► │ Thread │
    │ accept loop  │                  │  callback    │            │  Pool  │
    └──────────────┘                  └──────────────┘            └────────┘

One connection is handled by one worker thread from start to close.
Nothing in here knows about HTTP.

=============================================================================
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState, RequestTooLargeError
from .thread_pool import ThreadPool

__all__ = [
    "SocketServer",
    "Connection",
    "ConnectionState",
    "RequestTooLargeError",
    "ThreadPool",
]
