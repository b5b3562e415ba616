"""
Unit tests for the three read strategies and ReadOutcome.
"""

import io
import logging
import os
from pathlib import Path

import pytest

from textserver.demo import SAMPLE_CONTENT
from textserver.files import (
    ErrorKind,
    FileReadError,
    InvalidPathError,
    IsDirectoryError,
    LineAccumulatingReader,
    NotFoundError,
    PermissionDeniedError,
    ReadIOError,
    ReadOutcome,
    READERS,
    StreamDrainReader,
    WholeFileReader,
    drain_stream,
    get_reader,
    read_file,
)
from textserver.files.readers import translate_open_error


ALL_STRATEGIES = sorted(READERS)


class TestCommonBehaviour:
    """What every strategy agrees on."""

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_empty_file_returns_empty_string(self, strategy, text_files: Path):
        """A zero-byte file is success with "", not an error."""
        assert get_reader(strategy).read(text_files / "empty.txt") == ""

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    @pytest.mark.parametrize("path", ["", "   ", "\t\n"])
    def test_blank_path_rejected(self, strategy, path, monkeypatch):
        """Validation runs before any filesystem access."""
        def no_filesystem(*args, **kwargs):
            raise AssertionError("filesystem touched for a blank path")

        reader = get_reader(strategy)
        monkeypatch.setattr("os.stat", no_filesystem)
        monkeypatch.setattr("builtins.open", no_filesystem)

        with pytest.raises(InvalidPathError):
            reader.read(path)

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_single_line_without_newline(self, strategy, tmp_path: Path):
        """A lone line with no terminator reads back exactly."""
        path = tmp_path / "one.txt"
        path.write_text("just one line", encoding="utf-8")

        assert get_reader(strategy).read(path) == "just one line"

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_invalid_utf8_is_io_error(self, strategy, tmp_path: Path):
        """Undecodable bytes surface as an I/O error, not UnicodeDecodeError."""
        path = tmp_path / "binary.txt"
        path.write_bytes(b"ok\n\xff\xfe\xfd\n")

        with pytest.raises(ReadIOError) as exc_info:
            get_reader(strategy).read(path)

        assert "invalid utf-8 data" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_non_ascii_counts_characters(self, strategy, tmp_path: Path):
        """len() of the result counts code points, not bytes."""
        path = tmp_path / "accents.txt"
        path.write_bytes("héllo wörld".encode("utf-8"))

        content = get_reader(strategy).read(path)
        assert content == "héllo wörld"
        assert len(content) == 11

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_other_encoding(self, strategy, tmp_path: Path):
        """The reader's encoding is used to decode."""
        path = tmp_path / "latin1.txt"
        path.write_bytes("café".encode("latin-1"))

        assert get_reader(strategy, encoding="latin-1").read(path) == "café"

    @pytest.mark.parametrize("name", ["sample.txt", "crlf.txt", "numbers.txt"])
    def test_same_line_count_across_strategies(self, name, text_files: Path):
        counts = {
            strategy: len(get_reader(strategy).read(text_files / name).splitlines())
            for strategy in ALL_STRATEGIES
        }
        assert len(set(counts.values())) == 1, counts

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_missing_file_fails(self, strategy, text_files: Path):
        """Every strategy fails on a missing file; the kind varies."""
        with pytest.raises(FileReadError) as exc_info:
            get_reader(strategy).read(text_files / "missing.txt")

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)


class TestLineAccumulatingReader:
    """Tests for the "lines" strategy."""

    def test_joins_lines_without_trailing_newline(self, text_files: Path):
        """Lines are joined with "\\n"; the final terminator is dropped."""
        content = LineAccumulatingReader().read(text_files / "sample.txt")
        assert content == SAMPLE_CONTENT[:-1]

    def test_crlf_normalized(self, text_files: Path):
        """Windows line endings become "\\n"."""
        assert LineAccumulatingReader().read(text_files / "crlf.txt") == "alpha\nbeta"

    def test_blank_lines_kept(self, tmp_path: Path):
        """Empty lines in the middle survive; only one trailing terminator goes."""
        path = tmp_path / "gaps.txt"
        path.write_text("a\n\nb\n\n", encoding="utf-8")

        assert LineAccumulatingReader().read(path) == "a\n\nb\n"

    def test_missing_file(self, text_files: Path):
        """Not-found is distinguished."""
        with pytest.raises(NotFoundError):
            LineAccumulatingReader().read(text_files / "missing.txt")

    def test_directory(self, text_files: Path):
        """A directory is reported as such."""
        with pytest.raises(IsDirectoryError):
            LineAccumulatingReader().read(text_files / "subdir")

    def test_permission_denied(self, text_files: Path, monkeypatch):
        """PermissionError from open maps to PermissionDeniedError."""
        def deny(path, *args, **kwargs):
            raise PermissionError(13, "Permission denied", os.fspath(path))

        monkeypatch.setattr("textserver.files.readers.open", deny, raising=False)

        with pytest.raises(PermissionDeniedError) as exc_info:
            LineAccumulatingReader().read(text_files / "sample.txt")

        assert exc_info.value.kind is ErrorKind.PERMISSION_DENIED
        assert isinstance(exc_info.value.__cause__, PermissionError)


class TestWholeFileReader:
    """Tests for the "simple" strategy."""

    def test_returns_bytes_verbatim(self, text_files: Path):
        """No line-ending normalization; trailing newline kept."""
        reader = WholeFileReader()

        assert reader.read(text_files / "sample.txt") == SAMPLE_CONTENT
        assert reader.read(text_files / "crlf.txt") == "alpha\r\nbeta\r\n"

    @pytest.mark.parametrize("name", ["missing.txt", "subdir"])
    def test_failures_are_undifferentiated(self, name, text_files: Path):
        """Not-found and directory both surface as a generic read failure."""
        with pytest.raises(ReadIOError) as exc_info:
            WholeFileReader().read(text_files / name)

        assert exc_info.value.kind is ErrorKind.IO
        assert exc_info.value.public_message == "failed to read file"


class TestStreamDrainReader:
    """Tests for the "generic" strategy."""

    def test_reads_whole_file(self, text_files: Path):
        """Content comes back exactly as stored."""
        assert StreamDrainReader().read(text_files / "sample.txt") == SAMPLE_CONTENT

    def test_small_chunks(self, text_files: Path):
        """Chunk size does not change the result."""
        expected = (text_files / "numbers.txt").read_text(encoding="utf-8")
        assert StreamDrainReader(chunk_size=3).read(text_files / "numbers.txt") == expected

    def test_invalid_chunk_size(self):
        """chunk_size must be positive."""
        with pytest.raises(ValueError):
            StreamDrainReader(chunk_size=0)

    def test_empty_file_is_never_opened(self, text_files: Path, monkeypatch):
        """A zero-length probe result short-circuits before any read."""
        def fail(*args, **kwargs):
            raise AssertionError("empty file should not be read")

        monkeypatch.setattr("textserver.files.readers.drain_stream", fail)
        monkeypatch.setattr("textserver.files.readers.scoped_open", fail)

        assert StreamDrainReader().read(text_files / "empty.txt") == ""

    def test_missing_file(self, text_files: Path):
        """Probe reports not-found before opening."""
        with pytest.raises(NotFoundError):
            StreamDrainReader().read(text_files / "missing.txt")

    def test_directory(self, text_files: Path):
        """Probe reports the directory before opening."""
        with pytest.raises(IsDirectoryError):
            StreamDrainReader().read(text_files / "subdir")

    def test_read_failure_mid_stream(self, text_files: Path, monkeypatch):
        """An OSError while draining is an I/O error with the OS reason."""
        def broken(stream, chunk_size):
            raise OSError(5, "Input/output error")

        monkeypatch.setattr("textserver.files.readers.drain_stream", broken)

        with pytest.raises(ReadIOError) as exc_info:
            StreamDrainReader().read(text_files / "sample.txt")

        assert "Input/output error" in str(exc_info.value)
        assert exc_info.value.public_message == "failed to read file"


class TestHelpers:
    """Tests for drain_stream(), translate_open_error() and the registry."""

    def test_close_failure_is_logged_not_raised(self, text_files: Path, monkeypatch, caplog):
        class CloseFails(io.BytesIO):
            def close(self):
                already_closed = self.closed
                super().close()
                if not already_closed:
                    raise OSError(5, "close failed")

        monkeypatch.setattr(
            "textserver.files.readers.open",
            lambda path, mode, **kwargs: CloseFails(b"payload"),
            raising=False,
        )
        caplog.set_level(logging.WARNING, logger="textserver.files.readers")

        assert StreamDrainReader().read(text_files / "sample.txt") == "payload"
        assert "Failed to close file" in caplog.text

    def test_drain_stream(self):
        """Reads to EOF across chunk boundaries."""
        data = bytes(range(256)) * 10
        assert drain_stream(io.BytesIO(data), chunk_size=7) == data

    def test_drain_empty_stream(self):
        assert drain_stream(io.BytesIO(b"")) == b""

    @pytest.mark.parametrize("exc, expected", [
        (FileNotFoundError(2, "No such file or directory"), NotFoundError),
        (NotADirectoryError(20, "Not a directory"), NotFoundError),
        (PermissionError(13, "Permission denied"), PermissionDeniedError),
        (IsADirectoryError(21, "Is a directory"), IsDirectoryError),
        (OSError(24, "Too many open files"), ReadIOError),
    ])
    def test_translate_open_error(self, exc, expected):
        """Each OSError subclass maps to its error kind."""
        assert type(translate_open_error(exc, "x.txt")) is expected

    def test_translate_other_error_mentions_open(self):
        error = translate_open_error(OSError(24, "Too many open files"), "x.txt")
        assert str(error) == "failed to open file 'x.txt': Too many open files"

    def test_registry_names(self):
        assert set(READERS) == {"lines", "simple", "generic"}

    def test_get_reader_default(self):
        assert isinstance(get_reader(), LineAccumulatingReader)

    def test_get_reader_unknown(self):
        with pytest.raises(KeyError, match="Unknown read strategy"):
            get_reader("mmap")

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_unknown_encoding_rejected_up_front(self, strategy):
        """A bad codec fails when the reader is built, not on the first read."""
        with pytest.raises(ValueError, match="Unknown encoding: no-such-codec"):
            get_reader(strategy, encoding="no-such-codec")

    def test_read_file(self, text_files: Path):
        """One-shot helper uses the named strategy."""
        assert read_file(text_files / "crlf.txt", "lines") == "alpha\nbeta"
        assert read_file(text_files / "crlf.txt", "generic") == "alpha\r\nbeta\r\n"


class TestReadOutcome:
    """Tests for ReadOutcome."""

    def test_success(self, text_files: Path):
        outcome = get_reader("lines").read_outcome(text_files / "sample.txt")

        assert outcome.ok
        assert outcome.error is None
        assert outcome.unwrap() == SAMPLE_CONTENT[:-1]

    def test_empty_content_is_success(self, text_files: Path):
        """An empty string is content, not absence of content."""
        outcome = get_reader("generic").read_outcome(text_files / "empty.txt")

        assert outcome.ok
        assert outcome.content == ""

    def test_failure(self, text_files: Path):
        outcome = get_reader("lines").read_outcome(text_files / "missing.txt")

        assert not outcome.ok
        assert outcome.content is None
        assert outcome.error.kind is ErrorKind.NOT_FOUND

        with pytest.raises(NotFoundError):
            outcome.unwrap()

    def test_needs_exactly_one_field(self):
        with pytest.raises(ValueError):
            ReadOutcome()
        with pytest.raises(ValueError):
            ReadOutcome(content="x", error=InvalidPathError(""))

    def test_capture_lets_bugs_through(self):
        """Only FileReadError is folded into the outcome."""
        def buggy(path):
            raise TypeError("bug")

        with pytest.raises(TypeError):
            ReadOutcome.capture(buggy, "x.txt")
