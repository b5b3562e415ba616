"""
=============================================================================
ACCESS LOGGING
=============================================================================

One line per request on the "textserver.access" logger:

    [2026-10-18 14:03:07] GET /read-file - Status: 200 - Duration: 0.41ms - User-Agent: curl/8.0

or, with log_format="json":

    {"timestamp": "2026-10-18 14:03:07", "method": "GET", "path": "/read-file",
     "status": 200, "duration_ms": 0.41, "user_agent": "curl/8.0", ...}

The middleware only observes. It never adds headers and never changes the
response; a handler exception is logged and re-raised untouched.

=============================================================================
"""

import json
import logging
import time
from dataclasses import dataclass, asdict
from typing import Iterable, Optional

from .base import Middleware, NextHandler
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


logger = logging.getLogger("textserver.access")

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class RequestLog:
    """One access log entry."""

    timestamp: str
    method: str
    path: str
    status: int
    duration_ms: float
    user_agent: str
    client_ip: str
    content_length: int

    def to_dict(self) -> dict:
        entry = asdict(self)
        entry["duration_ms"] = round(self.duration_ms, 2)
        return entry

    def to_text(self) -> str:
        return (
            f"[{self.timestamp}] {self.method} {self.path} "
            f"- Status: {self.status} "
            f"- Duration: {self.duration_ms:.2f}ms "
            f"- User-Agent: {self.user_agent}"
        )


class LoggingMiddleware(Middleware):
    """
    Times the rest of the chain and logs the outcome.

    Usage:
        pipeline.add(LoggingMiddleware())                        # text
        pipeline.add(LoggingMiddleware(log_format="json"))
        pipeline.add(LoggingMiddleware(skip_paths=["/health"]))
    """

    def __init__(self, log_format: str = "text", log_level: int = logging.INFO,
                 skip_paths: Optional[Iterable[str]] = None):
        self.log_format = log_format
        self.log_level = log_level
        self.skip_paths = set(skip_paths or [])

    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        started_at = time.localtime()
        start = time.perf_counter()

        try:
            response = next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.error(
                f"Request failed: {request.method} {request.path} "
                f"- {type(e).__name__}: {e} ({duration_ms:.2f}ms)"
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000

        if request.path not in self.skip_paths:
            entry = RequestLog(
                timestamp=time.strftime(TIMESTAMP_FORMAT, started_at),
                method=request.method,
                path=request.path,
                status=int(response.status),
                duration_ms=duration_ms,
                user_agent=request.user_agent or "-",
                client_ip=request.client_address[0] or "-",
                content_length=len(response.body),
            )
            if self.log_format == "json":
                logger.log(self.log_level, json.dumps(entry.to_dict()))
            else:
                logger.log(self.log_level, entry.to_text())

        return response
