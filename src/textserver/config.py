"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

One dataclass holds every knob. Three ways to fill it:

    ServerConfig()                       defaults (development)
    ServerConfig(port=9000, ...)         explicit, e.g. from the CLI
    ServerConfig.from_env()              TEXTSERVER_* environment variables

validate() is called once at startup so a bad value fails immediately,
not on the first request that happens to touch it.

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .files.readers import READERS, check_encoding


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class ServerConfig:
    """
    Configuration for the text server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK     host, port, backlog, buffer_size, timeout
    HTTP        keep_alive, keep_alive_timeout, max_request_size
    THREADING   min_workers, max_workers
    LOGGING     log_level, log_format
    IDENTITY    server_name
    FILES       files_root, default_file, read_strategy, encoding,
                expose_error_details

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"

    port: int = 8080
    """0 asks the OS for a free port (used by the tests)."""

    backlog: int = 128

    buffer_size: int = 8192

    timeout: Optional[float] = 30.0
    """Seconds to wait for the first request on a connection."""

    # ─────────────────────────────────────────────────────────────────────
    # HTTP
    # ─────────────────────────────────────────────────────────────────────

    keep_alive: bool = True

    keep_alive_timeout: float = 5.0

    max_request_size: int = 1024 * 1024

    # ─────────────────────────────────────────────────────────────────────
    # THREAD POOL
    # ─────────────────────────────────────────────────────────────────────

    min_workers: int = 4

    max_workers: int = 16

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"

    log_format: str = "text"
    """'text' for people, 'json' for log shippers."""

    # ─────────────────────────────────────────────────────────────────────
    # IDENTITY
    # ─────────────────────────────────────────────────────────────────────

    server_name: str = "TextServer/1.0"

    # ─────────────────────────────────────────────────────────────────────
    # FILES
    # ─────────────────────────────────────────────────────────────────────

    files_root: str = "."
    """
    Directory that /read-file names are joined onto.

    The join is a plain os.path.join: absolute names and ".." segments
    are NOT confined to this directory.
    """

    default_file: str = "sample.txt"
    """Read when /read-file has no (or an empty) ?file= parameter."""

    read_strategy: str = "lines"
    """One of the READERS names: lines, simple, generic."""

    encoding: str = "utf-8"

    expose_error_details: bool = False
    """
    False: clients see only the category of a read failure.
    True: clients see the full error text, OS message included.
    """

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """
        Build a config from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        TEXTSERVER_HOST            host (default 127.0.0.1)
        TEXTSERVER_PORT            port (default 8080)
        TEXTSERVER_WORKERS         max worker threads (default 16)
        TEXTSERVER_TIMEOUT         first-request timeout, seconds (default 30)
        TEXTSERVER_LOG_LEVEL       DEBUG / INFO / ... (default INFO)
        TEXTSERVER_LOG_FORMAT      text / json (default text)
        TEXTSERVER_FILES_ROOT      base directory for /read-file (default .)
        TEXTSERVER_DEFAULT_FILE    default file name (default sample.txt)
        TEXTSERVER_READ_STRATEGY   lines / simple / generic (default lines)
        TEXTSERVER_ENCODING        text encoding (default utf-8)
        TEXTSERVER_EXPOSE_ERRORS   1 / true / yes / on to expose details

        =====================================================================
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        max_workers = int(env.get("TEXTSERVER_WORKERS", defaults.max_workers))

        return cls(
            host=env.get("TEXTSERVER_HOST", defaults.host),
            port=int(env.get("TEXTSERVER_PORT", defaults.port)),
            max_workers=max_workers,
            min_workers=min(defaults.min_workers, max_workers),
            timeout=float(env.get("TEXTSERVER_TIMEOUT", defaults.timeout)),
            log_level=env.get("TEXTSERVER_LOG_LEVEL", defaults.log_level).upper(),
            log_format=env.get("TEXTSERVER_LOG_FORMAT", defaults.log_format).lower(),
            files_root=env.get("TEXTSERVER_FILES_ROOT", defaults.files_root),
            default_file=env.get("TEXTSERVER_DEFAULT_FILE", defaults.default_file),
            read_strategy=env.get("TEXTSERVER_READ_STRATEGY", defaults.read_strategy),
            encoding=env.get("TEXTSERVER_ENCODING", defaults.encoding),
            expose_error_details=env.get("TEXTSERVER_EXPOSE_ERRORS", "").strip().lower() in _TRUE_VALUES,
        )

    def validate(self) -> None:
        """
        Fail fast on values the server cannot run with.

        Raises:
            ValueError: Describing the first bad field.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")
        if self.min_workers < 1:
            raise ValueError("min_workers must be >= 1")
        if self.max_workers < self.min_workers:
            raise ValueError("max_workers must be >= min_workers")
        if self.buffer_size < 1024:
            raise ValueError("buffer_size must be >= 1024")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        if self.keep_alive_timeout <= 0:
            raise ValueError("keep_alive_timeout must be > 0")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}")
        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"Invalid log_format: {self.log_format}. Must be text or json.")
        if self.read_strategy not in READERS:
            raise ValueError(
                f"Invalid read_strategy: {self.read_strategy}. "
                f"Must be one of: {', '.join(sorted(READERS))}."
            )
        if not self.default_file.strip():
            raise ValueError("default_file cannot be empty")
        check_encoding(self.encoding)


# =============================================================================
# MODULE SUMMARY
# =============================================================================
#
# 1. Typed defaults in a dataclass
# 2. TEXTSERVER_* environment overrides
# 3. validate() at startup
#
# Note: files_root is a convenience prefix, not a sandbox.
# =============================================================================
