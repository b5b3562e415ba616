"""
=============================================================================
FILE READ ENDPOINT
=============================================================================

    GET /read-file?file=notes.txt

Bridges HTTP to the file toolkit:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      FileReadHandler.handle()                       │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   name = ?file  (missing or "" → config.default_file)               │
    │        │                                                             │
    │        ▼                                                             │
    │   path = join_root(config.files_root, name)                         │
    │        │                                                             │
    │        ▼                                                             │
    │   outcome = reader.read_outcome(path)                               │
    │        │                                                             │
    │        ├── ok    → 200  "Content of '<name>' (<N> characters):\\n\\n" │
    │        │                 + content                                   │
    │        │                                                             │
    │        └── error → 400  "Error reading file '<name>': <desc>\\n"     │
    │                          + WARNING log with the full error          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

<N> counts characters (code points), not bytes.

<desc> is the error's public_message unless expose_error_details is on.
public_message names the failure category only; the OS error text and
the resolved path stay in the server log.

The join is NOT a sandbox. An absolute name replaces files_root
entirely and ".." walks out of it.

=============================================================================
"""

import logging
from typing import Optional

from ..config import ServerConfig
from ..files.errors import FileReadError
from ..files.validation import join_root
from ..files.readers import ContentReader, get_reader
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, ok, text
from ..http.status_codes import HTTPStatus


logger = logging.getLogger(__name__)


class FileReadHandler:
    """
    Serves file contents as text/plain.

    Usage:
        files = FileReadHandler(config)
        router.get("/read-file")(files.handle)
    """

    def __init__(self, config: ServerConfig, reader: Optional[ContentReader] = None):
        self.config = config
        self.reader = reader or get_reader(config.read_strategy, encoding=config.encoding)

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        name = request.get_query("file") or self.config.default_file
        path = join_root(self.config.files_root, name)

        outcome = self.reader.read_outcome(path)

        if not outcome.ok:
            return self._error_response(name, outcome.error)

        content = outcome.content
        return ok(f"Content of '{name}' ({len(content)} characters):\n\n{content}")

    def _error_response(self, name: str, error: FileReadError) -> HTTPResponse:
        logger.warning(f"read-file failed for {name!r} [{error.kind.value}]: {error}")

        description = str(error) if self.config.expose_error_details else error.public_message
        return text(HTTPStatus.BAD_REQUEST, f"Error reading file '{name}': {description}\n")
