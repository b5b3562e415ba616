"""
Unit tests for line streaming.
"""

from pathlib import Path

import pytest

from textserver.files import (
    IsDirectoryError,
    InvalidPathError,
    NotFoundError,
    ProcessingError,
    ReadIOError,
    iter_lines,
    stream_lines,
)


class TestStreamLines:
    """Tests for stream_lines()."""

    def test_delivers_every_line_in_order(self, text_files: Path):
        """Lines arrive in file order, numbered from 1, terminators stripped."""
        seen = []

        count = stream_lines(text_files / "numbers.txt", lambda line, n: seen.append((n, line)))

        assert count == 20
        assert seen[0] == (1, "line 1")
        assert seen[-1] == (20, "line 20")
        assert [n for n, _ in seen] == list(range(1, 21))

    def test_crlf_stripped(self, text_files: Path):
        seen = []
        stream_lines(text_files / "crlf.txt", lambda line, n: seen.append(line))
        assert seen == ["alpha", "beta"]

    def test_empty_file(self, text_files: Path):
        """Zero lines, processor never called, no error."""
        calls = []

        assert stream_lines(text_files / "empty.txt", lambda line, n: calls.append(n)) == 0
        assert calls == []

    def test_processor_failure_stops_streaming(self, text_files: Path):
        """A processor raising at line 10 of 20 sees exactly 10 calls."""
        calls = []

        def stop_at_ten(line: str, n: int) -> None:
            calls.append(n)
            if n == 10:
                raise RuntimeError("enough")

        with pytest.raises(ProcessingError) as exc_info:
            stream_lines(text_files / "numbers.txt", stop_at_ten)

        error = exc_info.value
        assert calls == list(range(1, 11))
        assert error.line_number == 10
        assert isinstance(error.__cause__, RuntimeError)
        assert str(error) == "error processing line 10: enough"
        assert error.public_message == "error processing line 10"

    def test_missing_file(self, text_files: Path):
        with pytest.raises(NotFoundError):
            stream_lines(text_files / "missing.txt", lambda line, n: None)

    def test_directory(self, text_files: Path):
        with pytest.raises(IsDirectoryError):
            stream_lines(text_files / "subdir", lambda line, n: None)

    def test_blank_path(self):
        with pytest.raises(InvalidPathError):
            stream_lines("  ", lambda line, n: None)

    def test_decode_error_mid_file(self, tmp_path: Path):
        """Lines before the bad bytes are delivered, then the read fails."""
        path = tmp_path / "bad.txt"
        path.write_bytes(b"good\n" * 3 + b"\xff\xfe\n")
        seen = []

        with pytest.raises(ReadIOError):
            stream_lines(path, lambda line, n: seen.append(line))

        assert all(line == "good" for line in seen)

    def test_unknown_encoding(self, text_files: Path):
        """A bad codec is rejected before any line is delivered."""
        seen = []

        with pytest.raises(ValueError, match="Unknown encoding"):
            stream_lines(text_files / "sample.txt", lambda line, n: seen.append(line), encoding="no-such-codec")

        assert seen == []


class TestIterLines:
    """Tests for the iter_lines() generator."""

    def test_lazy(self, text_files: Path):
        """Nothing is checked until the first next()."""
        lines = iter_lines(text_files / "missing.txt")

        with pytest.raises(NotFoundError):
            next(lines)

    def test_early_close(self, text_files: Path):
        """Closing the generator early is clean."""
        lines = iter_lines(text_files / "numbers.txt")

        assert next(lines) == ("line 1", 1)
        assert next(lines) == ("line 2", 2)
        lines.close()

        with pytest.raises(StopIteration):
            next(lines)
