"""
=============================================================================
RESOURCE PROBE
=============================================================================

Confirms that a validated path names a regular, accessible file.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      PROBE DECISION TABLE                           │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   os.stat(path)                                                      │
    │       │                                                              │
    │       ├── FileNotFoundError / NotADirectoryError → NotFoundError    │
    │       ├── PermissionError                        → PermissionDenied │
    │       ├── other OSError                          → ReadIOError      │
    │       │                                                              │
    │       └── stat result                                                │
    │               ├── S_ISDIR   → IsDirectoryError                      │
    │               ├── !S_ISREG  → ReadIOError ("not a regular file")    │
    │               └── S_ISREG   → OK, return stat result                │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Two entry points:

    probe_file(path)            Stat by path, BEFORE opening.
                                Used by the generic reader and the streamer.

    check_handle(handle, path)  fstat an already-open handle.
                                Used by the line-accumulating reader, which
                                opens first and checks afterwards.

NotADirectoryError maps to NotFoundError: "a/b.txt" where "a" is a regular
file means there is no such entry, which is what the caller needs to know.

=============================================================================
"""

import logging
import os
import stat
from typing import IO

from .errors import (
    PathLike,
    NotFoundError,
    PermissionDeniedError,
    IsDirectoryError,
    ReadIOError,
    describe_os_error,
)


logger = logging.getLogger(__name__)


def probe_file(path: PathLike) -> os.stat_result:
    """
    Stat `path` and make sure it is a regular file.

    Args:
        path: A path that already passed validate_path().

    Returns:
        The os.stat_result (callers use st_size for short-circuits).

    Raises:
        NotFoundError, PermissionDeniedError, IsDirectoryError, ReadIOError
    """
    try:
        info = os.stat(path)
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise NotFoundError(path) from exc
    except PermissionError as exc:
        raise PermissionDeniedError(path) from exc
    except OSError as exc:
        raise ReadIOError(path, describe_os_error(exc), action="access") from exc

    _check_mode(info, path)
    logger.debug(f"Probed {os.fspath(path)!r}: {info.st_size} bytes")
    return info


def check_handle(handle: IO, path: PathLike) -> os.stat_result:
    """
    Run the same type checks against an open file handle.

    Some platforms let open() succeed on a directory; this catches that
    case after the fact.
    """
    try:
        info = os.fstat(handle.fileno())
    except OSError as exc:
        raise ReadIOError(path, describe_os_error(exc), action="get file info for") from exc

    _check_mode(info, path)
    return info


def _check_mode(info: os.stat_result, path: PathLike) -> None:
    if stat.S_ISDIR(info.st_mode):
        raise IsDirectoryError(path)
    if not stat.S_ISREG(info.st_mode):
        raise ReadIOError(path, "not a regular file", action="read")
