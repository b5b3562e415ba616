"""
Request handlers.

    greeting.home / greeting.hello    GET /  and  GET /hello
    HealthHandler                     GET /health
    FileReadHandler                   GET /read-file
"""

from .greeting import home, hello, WELCOME_MESSAGE
from .health import HealthHandler
from .files import FileReadHandler

__all__ = [
    "home",
    "hello",
    "WELCOME_MESSAGE",
    "HealthHandler",
    "FileReadHandler",
]
