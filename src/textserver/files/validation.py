"""
Path validation.

The first gate every read goes through: reject paths that cannot possibly
name a file before touching the filesystem.

Whitespace is trimmed only for the emptiness check. The path handed back
(and later passed to the OS) is exactly what the caller gave us, so a file
literally named " notes.txt" is still reachable.
"""

import os

from .errors import InvalidPathError, PathLike


def validate_path(path: PathLike) -> PathLike:
    """
    Reject empty or whitespace-only paths.

    Args:
        path: Candidate path (str or os.PathLike).

    Returns:
        The same path object, unchanged.

    Raises:
        InvalidPathError: If the path is None, empty, or blank.
    """
    if path is None:
        raise InvalidPathError("")
    if not os.fspath(path).strip():
        raise InvalidPathError(path)
    return path


def join_root(root: str, name: str) -> str:
    """
    Join `name` onto `root` with a plain os.path.join.

    A blank name is returned as given, so validate_path() rejects it instead
    of it silently becoming the root directory. Not a sandbox: an absolute
    name replaces `root` and ".." walks out of it.
    """
    if not name.strip():
        return name
    return os.path.join(root, name)
