"""
=============================================================================
CONTENT READERS
=============================================================================

Three interchangeable strategies for the same job: "read a file into a
string". They share one interface (ContentReader.read) and are picked by
name from the READERS registry.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      READ STRATEGIES                                │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   "lines"   LineAccumulatingReader                                  │
    │             validate → open → fstat check → readline loop → join    │
    │             + line endings normalized to "\n"                       │
    │             + differentiated errors (NotFound, IsDirectory, ...)    │
    │             - drops the final trailing newline                      │
    │                                                                      │
    │   "simple"  WholeFileReader                                         │
    │             validate → read_bytes() → decode                        │
    │             + fewest moving parts, exact bytes preserved            │
    │             - every OS failure is one undifferentiated ReadIOError  │
    │                                                                      │
    │   "generic" StreamDrainReader                                       │
    │             validate → probe → (size 0? return "") → open →         │
    │             drain_stream() → decode                                 │
    │             + differentiated errors, exact bytes preserved          │
    │             + empty files never opened                              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

They are ALTERNATIVES, not a fallback chain. For a well-formed file they
return the same text, modulo the line-ending normalization of "lines".

=============================================================================
SCOPED FILE HANDLES
=============================================================================

Every handle is opened through scoped_open(), a context manager that:

    1. Translates open() failures into FileReadError subclasses
    2. Yields the handle to the strategy
    3. Closes the handle on EVERY exit path (return, read error, failed
       type check after opening)
    4. Logs a close() failure as a WARNING instead of raising it; the
       read already succeeded or already failed for a better reason

=============================================================================
INTERVIEW QUESTIONS ABOUT FILE READING
=============================================================================

Q: "When would you read line by line instead of all at once?"
A: "When the file may be large or can be processed incrementally.
   Line iteration keeps one buffer-sized chunk in memory at a time;
   read() materializes everything."

Q: "Why probe with stat() before opening?"
A: "To report WHY a read cannot happen (missing, directory,
   permission) and to short-circuit cheap cases like empty files.
   The cost is a small race window between stat and open, which is
   why open() errors are still translated too."

Q: "Why read bytes and decode, instead of opening in text mode?"
A: "Text mode with universal newlines rewrites \\r\\n to \\n. Reading
   bytes keeps the content exactly as stored on disk."

=============================================================================
"""

import codecs
import logging
import os
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, IO, Type

from .errors import (
    PathLike,
    FileReadError,
    NotFoundError,
    PermissionDeniedError,
    IsDirectoryError,
    ReadIOError,
    describe_os_error,
)
from .outcome import ReadOutcome
from .probe import probe_file, check_handle
from .validation import validate_path


logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"
DEFAULT_CHUNK_SIZE = 64 * 1024  # 64 KB per read() call


# =============================================================================
# HANDLE HELPERS
# =============================================================================

def translate_open_error(exc: OSError, path: PathLike) -> FileReadError:
    """Map an open() failure to the matching FileReadError."""
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
        return NotFoundError(path)
    if isinstance(exc, PermissionError):
        return PermissionDeniedError(path)
    if isinstance(exc, IsADirectoryError):
        return IsDirectoryError(path)
    return ReadIOError(path, describe_os_error(exc), action="open")


@contextmanager
def scoped_open(path: PathLike, mode: str = "r", **kwargs) -> Iterator[IO]:
    """
    Open `path` for the duration of a with-block.

    Raises translated FileReadError subclasses for open() failures.
    Close failures are logged, never raised.
    """
    try:
        handle = open(path, mode, **kwargs)
    except OSError as exc:
        raise translate_open_error(exc, path) from exc

    try:
        yield handle
    finally:
        try:
            handle.close()
        except OSError as exc:
            logger.warning(f"Failed to close file '{os.fspath(path)}': {exc}")


def drain_stream(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """
    Read a binary stream to EOF into a single buffer.

    Works with any object that has read(n): files, sockets' makefile(),
    io.BytesIO, pipes. The equivalent of "read all" for a generic reader.
    """
    buffer = bytearray()
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        buffer.extend(chunk)
    return bytes(buffer)


def check_encoding(encoding: str) -> str:
    """
    Return `encoding` if Python has a codec for it.

    Raises:
        ValueError: If no codec is registered under that name.
    """
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise ValueError(f"Unknown encoding: {encoding}") from None
    return encoding


# =============================================================================
# INTERFACE
# =============================================================================

class ContentReader(ABC):
    """
    Interface for "read a whole file into a string".

    Subclasses implement read(). They must raise FileReadError subclasses
    (never bare OSError) and must not keep any state between calls.
    """

    name: str = ""

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        self.encoding = check_encoding(encoding)

    @abstractmethod
    def read(self, path: PathLike) -> str:
        """
        Read the file at `path`.

        Raises:
            FileReadError: On any failure (see subclasses for which kinds).
        """

    def read_outcome(self, path: PathLike) -> ReadOutcome:
        """Same as read(), but returns a ReadOutcome instead of raising."""
        return ReadOutcome.capture(self.read, path)

    def _decode(self, data: bytes, path: PathLike) -> str:
        try:
            return data.decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise ReadIOError(path, f"invalid {self.encoding} data: {exc.reason}") from exc

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(encoding={self.encoding!r})"


# =============================================================================
# STRATEGY 1: LINE-ACCUMULATING
# =============================================================================

class LineAccumulatingReader(ContentReader):
    """
    Read one line at a time and join with "\\n".

    Opens first, then checks the OPEN handle (fstat) for directory /
    non-regular file. Text mode with universal newlines turns "\\r\\n"
    and "\\r" into "\\n", so the result always uses "\\n" separators.

        "a\\r\\nb\\r\\n"  →  "a\\nb"
        "a\\nb"          →  "a\\nb"
        ""              →  ""
    """

    name = "lines"

    def read(self, path: PathLike) -> str:
        validate_path(path)

        with scoped_open(path, "r", encoding=self.encoding, newline=None) as handle:
            check_handle(handle, path)

            lines = []
            try:
                for raw in handle:
                    # Strip exactly one terminator; content whitespace stays
                    lines.append(raw[:-1] if raw.endswith("\n") else raw)
            except UnicodeDecodeError as exc:
                raise ReadIOError(path, f"invalid {self.encoding} data: {exc.reason}") from exc
            except OSError as exc:
                raise ReadIOError(path, describe_os_error(exc)) from exc

        logger.debug(f"Read {len(lines)} lines from {os.fspath(path)!r}")
        return "\n".join(lines)


# =============================================================================
# STRATEGY 2: WHOLE FILE (SIMPLE)
# =============================================================================

class WholeFileReader(ContentReader):
    """
    One read_bytes() call, no probing.

    Not-found, permission and is-a-directory failures all surface as
    ReadIOError; the OS error is available as __cause__ if needed.
    """

    name = "simple"

    def read(self, path: PathLike) -> str:
        validate_path(path)

        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise ReadIOError(path, describe_os_error(exc)) from exc

        return self._decode(data, path)


# =============================================================================
# STRATEGY 3: WHOLE FILE (GENERIC READER)
# =============================================================================

class StreamDrainReader(ContentReader):
    """
    Probe, then drain the file through drain_stream().

    A zero-length file returns "" straight from the probe result: the file
    is never opened and no read call is made.
    """

    name = "generic"

    def __init__(self, encoding: str = DEFAULT_ENCODING, chunk_size: int = DEFAULT_CHUNK_SIZE):
        super().__init__(encoding)
        if chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")
        self.chunk_size = chunk_size

    def read(self, path: PathLike) -> str:
        validate_path(path)
        info = probe_file(path)

        if info.st_size == 0:
            return ""

        with scoped_open(path, "rb") as stream:
            try:
                data = drain_stream(stream, self.chunk_size)
            except OSError as exc:
                raise ReadIOError(path, describe_os_error(exc)) from exc

        return self._decode(data, path)


# =============================================================================
# REGISTRY
# =============================================================================

READERS: Dict[str, Type[ContentReader]] = {
    LineAccumulatingReader.name: LineAccumulatingReader,
    WholeFileReader.name: WholeFileReader,
    StreamDrainReader.name: StreamDrainReader,
}


def get_reader(name: str = LineAccumulatingReader.name, encoding: str = DEFAULT_ENCODING) -> ContentReader:
    """
    Build a reader by strategy name.

    Raises:
        KeyError: If `name` is not in READERS.
    """
    try:
        reader_cls = READERS[name]
    except KeyError:
        choices = ", ".join(sorted(READERS))
        raise KeyError(f"Unknown read strategy {name!r} (choose from: {choices})") from None
    return reader_cls(encoding=encoding)


def read_file(path: PathLike, strategy: str = LineAccumulatingReader.name, encoding: str = DEFAULT_ENCODING) -> str:
    """One-shot convenience: get_reader(strategy).read(path)."""
    return get_reader(strategy, encoding=encoding).read(path)


# =============================================================================
# MODULE SUMMARY
# =============================================================================
#
# One capability, three implementations:
#
# 1. lines   - incremental, normalizes line endings, probes after open
# 2. simple  - single call, undifferentiated errors
# 3. generic - probes first, empty-file short-circuit, chunked drain
#
# All handles go through scoped_open(): translated open errors,
# guaranteed close, close failures logged as warnings.
# =============================================================================
