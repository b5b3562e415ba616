"""
Middleware: code that runs around every routed request.

    LoggingMiddleware            access log line per request
    SecurityHeadersMiddleware    nosniff / XSS / frame headers
"""

from .base import Middleware, MiddlewarePipeline, NextHandler
from .logging import LoggingMiddleware, RequestLog
from .security import SecurityHeadersMiddleware, SECURITY_HEADERS, apply_security_headers

__all__ = [
    "Middleware",
    "MiddlewarePipeline",
    "NextHandler",
    "LoggingMiddleware",
    "RequestLog",
    "SecurityHeadersMiddleware",
    "SECURITY_HEADERS",
    "apply_security_headers",
]
