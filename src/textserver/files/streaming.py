"""
=============================================================================
LINE STREAMING
=============================================================================

Process a file one line at a time instead of loading it into memory.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      STREAMING FLOW                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   stream_lines(path, processor)                                     │
    │       │                                                              │
    │       └── for line, n in iter_lines(path):                          │
    │               │                                                      │
    │               ├── processor(line, n)   ← caller code                │
    │               │       │                                              │
    │               │       └── raises? → stop, ProcessingError(n)        │
    │               │                                                      │
    │               └── next line                                          │
    │                                                                      │
    │   iter_lines(path)   (generator)                                    │
    │       validate → probe → open → yield (line, n) ... → close         │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Only one line is held at a time. Nothing is accumulated, so a 10 GB log
file streams in constant memory.

The processor signals "stop" by raising. Whatever it raises becomes the
__cause__ of the ProcessingError, so the caller sees both the line number
and the original reason.

=============================================================================
INTERVIEW QUESTIONS ABOUT STREAMING
=============================================================================

Q: "What happens to the open file if the consumer stops iterating early?"
A: "The generator is suspended inside a with-block. Closing it (explicitly,
   via contextlib.closing, or when it is garbage collected) raises
   GeneratorExit at the yield, which runs the with-block's cleanup and
   closes the file."

Q: "Callback or iterator?"
A: "The iterator is the more flexible primitive: the consumer controls the
   pace and can break out. The callback form is a thin loop on top of it
   that adds line-number bookkeeping for failures."

=============================================================================
"""

import logging
import os
from contextlib import closing
from typing import Callable, Iterator, Tuple

from .errors import PathLike, ProcessingError, ReadIOError, describe_os_error
from .probe import probe_file
from .readers import DEFAULT_ENCODING, check_encoding, scoped_open
from .validation import validate_path


logger = logging.getLogger(__name__)

LineProcessor = Callable[[str, int], None]


def iter_lines(path: PathLike, encoding: str = DEFAULT_ENCODING) -> Iterator[Tuple[str, int]]:
    """
    Yield (line, line_number) for each line of the file.

    Numbers start at 1. One line terminator is stripped from each line.
    Validation and probing happen on the first next() call.

    Raises:
        InvalidPathError, NotFoundError, PermissionDeniedError,
        IsDirectoryError, ReadIOError
        ValueError: `encoding` names no known codec.
    """
    check_encoding(encoding)
    validate_path(path)
    probe_file(path)

    with scoped_open(path, "r", encoding=encoding, newline=None) as handle:
        line_number = 0
        while True:
            try:
                raw = handle.readline()
            except UnicodeDecodeError as exc:
                raise ReadIOError(path, f"invalid {encoding} data: {exc.reason}") from exc
            except OSError as exc:
                raise ReadIOError(path, describe_os_error(exc)) from exc

            if not raw:
                break

            line_number += 1
            yield (raw[:-1] if raw.endswith("\n") else raw), line_number


def stream_lines(path: PathLike, processor: LineProcessor, encoding: str = DEFAULT_ENCODING) -> int:
    """
    Call processor(line, line_number) for every line, in order.

    Args:
        path: File to stream.
        processor: Called once per line. Raise to stop streaming.
        encoding: Text encoding of the file.

    Returns:
        Number of lines delivered to the processor.

    Raises:
        ProcessingError: The processor raised; `line_number` says where.
        FileReadError: Any validation, probe or read failure.
    """
    delivered = 0

    with closing(iter_lines(path, encoding=encoding)) as lines:
        for line, line_number in lines:
            try:
                processor(line, line_number)
            except Exception as exc:
                raise ProcessingError(path, line_number, exc) from exc
            delivered = line_number

    logger.debug(f"Streamed {delivered} lines from {os.fspath(path)!r}")
    return delivered
