"""
File-reading toolkit: validation, probing, read strategies and streaming.
"""

from .errors import (
    ErrorKind,
    FileReadError,
    InvalidPathError,
    NotFoundError,
    PermissionDeniedError,
    IsDirectoryError,
    ReadIOError,
    ProcessingError,
)
from .outcome import ReadOutcome
from .validation import validate_path, join_root
from .probe import probe_file, check_handle
from .readers import (
    ContentReader,
    LineAccumulatingReader,
    WholeFileReader,
    StreamDrainReader,
    READERS,
    get_reader,
    read_file,
    drain_stream,
    scoped_open,
    check_encoding,
)
from .streaming import iter_lines, stream_lines

__all__ = [
    "ErrorKind",
    "FileReadError",
    "InvalidPathError",
    "NotFoundError",
    "PermissionDeniedError",
    "IsDirectoryError",
    "ReadIOError",
    "ProcessingError",
    "ReadOutcome",
    "validate_path",
    "join_root",
    "probe_file",
    "check_handle",
    "ContentReader",
    "LineAccumulatingReader",
    "WholeFileReader",
    "StreamDrainReader",
    "READERS",
    "get_reader",
    "read_file",
    "drain_stream",
    "scoped_open",
    "check_encoding",
    "iter_lines",
    "stream_lines",
]
