"""
=============================================================================
FILE READ ERRORS
=============================================================================

Every failure the file toolkit can report is a subclass of FileReadError.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      ERROR HIERARCHY                                │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   FileReadError                    (base, carries kind + path)      │
    │   ├── InvalidPathError             empty / whitespace-only path     │
    │   ├── NotFoundError                nothing exists at the path       │
    │   ├── PermissionDeniedError        entry exists, access refused     │
    │   ├── IsDirectoryError             entry is a directory             │
    │   ├── ReadIOError                  any other open/read failure      │
    │   └── ProcessingError              line processor raised (stream)   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Each error has two messages:

    str(error)              Full description, including the OS error text.
                            Meant for logs and the developer console.

    error.public_message    Category-level description with no OS detail
                            and no resolved filesystem path. This is what
                            the HTTP layer shows to clients by default.

The original OS exception is always kept as __cause__ (raise ... from exc),
so nothing is lost for debugging.

=============================================================================
INTERVIEW QUESTIONS ABOUT ERROR DESIGN
=============================================================================

Q: "Why not just let FileNotFoundError / PermissionError propagate?"
A: "Callers would have to know every OSError subclass and errno the
   platform can produce. A small closed set of kinds is easier to map
   to HTTP statuses and user-facing messages."

Q: "Why keep a separate public message?"
A: "OS error text leaks internals: absolute paths, usernames, mount
   points. Clients only need to know the category of the failure."

=============================================================================
"""

from enum import Enum
from typing import Optional, Union
import os


PathLike = Union[str, "os.PathLike[str]"]


class ErrorKind(Enum):
    """Categories of file read failures."""
    INVALID_PATH = "invalid_path"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    IS_DIRECTORY = "is_directory"
    IO = "io"
    PROCESSING = "processing"


class FileReadError(Exception):
    """
    Base class for all file toolkit errors.

    Attributes:
        kind: ErrorKind category of the failure.
        path: The path as the caller supplied it (may be empty).
        public_message: Description safe to show to remote clients.
    """

    kind: ErrorKind = ErrorKind.IO

    def __init__(self, message: str, path: PathLike = "", public_message: Optional[str] = None):
        super().__init__(message)
        self.path = os.fspath(path) if path is not None else ""
        self.public_message = public_message or message


class InvalidPathError(FileReadError):
    """The path is empty or consists only of whitespace."""

    kind = ErrorKind.INVALID_PATH

    def __init__(self, path: PathLike = ""):
        super().__init__("file path cannot be empty", path)


class NotFoundError(FileReadError):
    """Nothing exists at the path."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: PathLike):
        super().__init__(
            f"file does not exist: {os.fspath(path)}",
            path,
            public_message="file does not exist",
        )


class PermissionDeniedError(FileReadError):
    """The entry exists but the process may not read it."""

    kind = ErrorKind.PERMISSION_DENIED

    def __init__(self, path: PathLike):
        super().__init__(
            f"permission denied: cannot read file {os.fspath(path)}",
            path,
            public_message="permission denied",
        )


class IsDirectoryError(FileReadError):
    """The path names a directory, not a regular file."""

    kind = ErrorKind.IS_DIRECTORY

    def __init__(self, path: PathLike):
        super().__init__(
            f"path is a directory, not a file: {os.fspath(path)}",
            path,
            public_message="path is a directory, not a file",
        )


class ReadIOError(FileReadError):
    """
    Any other open, stat, read or decode failure.

    `reason` is usually the OS strerror ("Input/output error", ...).
    It appears in str(error) but never in public_message.
    """

    kind = ErrorKind.IO

    def __init__(self, path: PathLike, reason: str, action: str = "read"):
        super().__init__(
            f"failed to {action} file '{os.fspath(path)}': {reason}",
            path,
            public_message=f"failed to {action} file",
        )
        self.reason = reason


class ProcessingError(FileReadError):
    """
    The caller-supplied line processor raised while streaming.

    The processor's exception is chained as __cause__.
    """

    kind = ErrorKind.PROCESSING

    def __init__(self, path: PathLike, line_number: int, cause: BaseException):
        super().__init__(
            f"error processing line {line_number}: {cause}",
            path,
            public_message=f"error processing line {line_number}",
        )
        self.line_number = line_number


def describe_os_error(exc: OSError) -> str:
    """Short reason text for an OSError (strerror when available)."""
    return exc.strerror or str(exc) or type(exc).__name__
