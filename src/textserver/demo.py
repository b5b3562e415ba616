"""
=============================================================================
FILE TOOLKIT DEMOS
=============================================================================

Console walkthroughs of the file toolkit, run from the CLI:

    python -m textserver create-test-files     write the demo files
    python -m textserver demo-file-reader      read sample.txt, show a preview
    python -m textserver test-file-reader      run every case on every strategy
    python -m textserver cleanup-test-files    remove the demo files

Every function takes the directory to work in and a stream to print to,
so tests can point them at tmp_path and io.StringIO. The stream
defaults to whatever sys.stdout is at call time.

=============================================================================
"""

import os
import sys
from typing import List, Optional, TextIO, Tuple

from .files import (
    FileReadError,
    ProcessingError,
    READERS,
    get_reader,
    join_root,
    stream_lines,
)


SAMPLE_FILE = "sample.txt"
EMPTY_FILE = "empty.txt"
LARGE_FILE = "large_test.txt"
TEST_FILES = (SAMPLE_FILE, EMPTY_FILE, LARGE_FILE)

SAMPLE_CONTENT = (
    "Hello from the text server!\n"
    "This is the second line of sample.txt.\n"
    "And this is the third and final line.\n"
)
LARGE_FILE_LINES = 1000
LARGE_LINE_TEMPLATE = "This is line {} of the large test file. It contains some content to make it larger.\n"

PREVIEW_LENGTH = 150
STREAM_DEMO_LIMIT = 10

# (label, path as given, expected outcome)
DIAGNOSTIC_CASES: List[Tuple[str, str, str]] = [
    ("Valid file with content", SAMPLE_FILE, "content returned"),
    ("Empty file", EMPTY_FILE, "empty string, no error"),
    ("Non-existent file", "nonexistent.txt", "error: file does not exist"),
    ("Directory instead of file", ".", "error: path is a directory"),
    ("Empty file path", "", "error: file path cannot be empty"),
    ("Whitespace-only path", "   ", "error: file path cannot be empty"),
]


class DemoLimitReached(Exception):
    """Raised by the streaming demo's processor to stop early."""


def _preview(content: str, limit: int) -> str:
    if len(content) > limit:
        return repr(content[:limit] + "... (truncated)")
    return repr(content)


# =============================================================================
# TEST FILES
# =============================================================================

def create_test_files(root: str = ".", out: Optional[TextIO] = None) -> int:
    """Write sample.txt, empty.txt and large_test.txt under `root`."""
    out = out or sys.stdout
    os.makedirs(root, exist_ok=True)

    with open(os.path.join(root, SAMPLE_FILE), "w", encoding="utf-8") as f:
        f.write(SAMPLE_CONTENT)
    print(f"Created {SAMPLE_FILE}", file=out)

    open(os.path.join(root, EMPTY_FILE), "w", encoding="utf-8").close()
    print(f"Created {EMPTY_FILE}", file=out)

    with open(os.path.join(root, LARGE_FILE), "w", encoding="utf-8") as f:
        for i in range(1, LARGE_FILE_LINES + 1):
            f.write(LARGE_LINE_TEMPLATE.format(i))
    print(f"Created {LARGE_FILE} with {LARGE_FILE_LINES} lines for testing", file=out)

    return 0


def cleanup_test_files(root: str = ".", out: Optional[TextIO] = None) -> int:
    """Remove the demo files. Missing files are fine; other failures warn."""
    out = out or sys.stdout
    for name in TEST_FILES:
        path = os.path.join(root, name)
        try:
            os.remove(path)
        except FileNotFoundError:
            continue
        except OSError as e:
            print(f"Warning: Could not remove {name}: {e}", file=out)
        else:
            print(f"Removed {name}", file=out)
    return 0


# =============================================================================
# DEMOS
# =============================================================================

def run_demo(root: str = ".", strategy: str = "lines", out: Optional[TextIO] = None) -> int:
    """Read sample.txt (creating the demo files first if needed)."""
    out = out or sys.stdout
    print("=== File Reading Demo ===", file=out)
    print("For the full case table, run: python -m textserver test-file-reader", file=out)
    print(file=out)

    sample = os.path.join(root, SAMPLE_FILE)
    if not os.path.exists(sample):
        print(f"Creating {SAMPLE_FILE} for demonstration...", file=out)
        create_test_files(root, out)
        print(file=out)

    print(f"Reading {SAMPLE_FILE} with the '{strategy}' strategy:", file=out)
    try:
        content = get_reader(strategy).read(sample)
    except FileReadError as e:
        print(f"Error: {e}", file=out)
        return 1

    print(f"Successfully read {len(content)} characters", file=out)
    print(f"Content preview: {_preview(content, PREVIEW_LENGTH)}", file=out)
    return 0


def run_diagnostics(root: str = ".", out: Optional[TextIO] = None) -> int:
    """Run DIAGNOSTIC_CASES against every strategy, then the streaming demos."""
    out = out or sys.stdout
    for strategy in READERS:
        reader = get_reader(strategy)
        print(f"=== Strategy: {strategy} ({type(reader).__name__}) ===", file=out)

        for number, (label, name, expected) in enumerate(DIAGNOSTIC_CASES, start=1):
            outcome = reader.read_outcome(join_root(root, name))

            print(f"Test {number}: {label}", file=out)
            print(f"File Path: {name!r}", file=out)
            print(f"Expected: {expected}", file=out)
            if outcome.ok:
                print(f"Result: SUCCESS - Content: {_preview(outcome.content, 200)}", file=out)
                print(f"Content Length: {len(outcome.content)} characters", file=out)
            else:
                print(f"Result: ERROR [{outcome.error.kind.value}] - {outcome.error}", file=out)
            print("-" * 60, file=out)

        print(file=out)

    _stream_demo(root, out)
    return 0


def _stream_demo(root: str, out: TextIO) -> None:
    large = os.path.join(root, LARGE_FILE)
    target = large if os.path.exists(large) else os.path.join(root, SAMPLE_FILE)

    print("=== Streaming File Processing ===", file=out)
    print(f"Processing {os.path.basename(target)} line by line:", file=out)

    def show_until_limit(line: str, line_number: int) -> None:
        print(f"  Line {line_number}: {line!r}", file=out)
        if line_number >= STREAM_DEMO_LIMIT:
            print(f"  ... (stopping at line {STREAM_DEMO_LIMIT} for demo)", file=out)
            raise DemoLimitReached("demo limit reached")

    try:
        delivered = stream_lines(target, show_until_limit)
        print(f"  Finished after {delivered} lines", file=out)
    except ProcessingError as e:
        if not isinstance(e.__cause__, DemoLimitReached):
            print(f"Unexpected streaming error: {e}", file=out)
    except FileReadError as e:
        print(f"Unexpected streaming error: {e}", file=out)

    print(file=out)
    print("Streaming an empty file:", file=out)
    try:
        delivered = stream_lines(os.path.join(root, EMPTY_FILE),
                                 lambda line, n: print(f"  Line {n}: {line!r}", file=out))
    except FileReadError as e:
        print(f"Empty file streaming error: {e}", file=out)
    else:
        print(f"  Empty file processed successfully ({delivered} lines)", file=out)
