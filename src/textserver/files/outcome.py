"""
ReadOutcome: the value-level form of a read result.

The readers raise FileReadError subclasses, which is the normal Python way
to report failure. Some callers (the HTTP handler, the CLI diagnostics)
would rather branch on a value than wrap every call in try/except, so
ReadOutcome.capture() runs a reader and folds the error into the result.

    outcome = ReadOutcome.capture(reader.read, "notes.txt")
    if outcome.ok:
        print(outcome.content)
    else:
        print(outcome.error.kind, outcome.error.public_message)

Exactly one of `content` / `error` is set; never both, never neither.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from .errors import FileReadError, PathLike


@dataclass(frozen=True)
class ReadOutcome:
    """Either content (success) or a FileReadError (failure)."""

    content: Optional[str] = None
    error: Optional[FileReadError] = None

    def __post_init__(self):
        if (self.content is None) == (self.error is None):
            raise ValueError("ReadOutcome needs exactly one of content or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, content: str) -> "ReadOutcome":
        return cls(content=content)

    @classmethod
    def failure(cls, error: FileReadError) -> "ReadOutcome":
        return cls(error=error)

    @classmethod
    def capture(cls, read: Callable[[PathLike], str], path: PathLike) -> "ReadOutcome":
        """
        Call `read(path)` and wrap the result.

        Only FileReadError is captured. Anything else is a bug in the
        reader and propagates.
        """
        try:
            return cls.success(read(path))
        except FileReadError as exc:
            return cls.failure(exc)

    def unwrap(self) -> str:
        """Return the content, or raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.content
