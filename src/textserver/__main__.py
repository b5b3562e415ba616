"""
=============================================================================
COMMAND LINE ENTRY POINT
=============================================================================

    python -m textserver                          serve with defaults
    python -m textserver serve --port 3000        custom port
    python -m textserver --root ./notes           serve files from ./notes
    python -m textserver --strategy generic       pick the read strategy
    python -m textserver demo-file-reader         console demo
    python -m textserver test-file-reader         diagnostic case table
    python -m textserver create-test-files        write demo files
    python -m textserver cleanup-test-files       remove demo files

Options not given on the command line fall back to TEXTSERVER_*
environment variables, then to the ServerConfig defaults.

Exit codes: 0 success, 1 server could not start, 2 bad configuration.

=============================================================================
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .app import create_app
from .config import LOG_FORMATS, LOG_LEVELS, ServerConfig
from .demo import cleanup_test_files, create_test_files, run_demo, run_diagnostics
from .files.readers import READERS


COMMANDS = ("serve", "demo-file-reader", "test-file-reader", "create-test-files", "cleanup-test-files")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textserver",
        description="Minimal HTTP/1.1 server that serves text files, plus file-reading demos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m textserver                         # Serve on 127.0.0.1:8080
  python -m textserver --port 3000             # Custom port
  python -m textserver --root ./notes          # Resolve ?file= against ./notes
  python -m textserver --expose-errors         # Show full read errors to clients
  python -m textserver test-file-reader        # Run the diagnostic cases
        """,
    )

    parser.add_argument(
        "command",
        nargs="?",
        choices=COMMANDS,
        default="serve",
        help="What to run (default: serve)",
    )
    parser.add_argument("--host", "-H", default=None, help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Port to listen on (default: 8080)")
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Minimum worker threads; the maximum is twice this (default: 4-16)",
    )
    parser.add_argument("--log-level", "-l", choices=LOG_LEVELS, default=None, help="Logging level (default: INFO)")
    parser.add_argument("--log-format", choices=LOG_FORMATS, default=None, help="Access log format (default: text)")
    parser.add_argument(
        "--root", "-r",
        default=None,
        help="Directory for /read-file names and the demo files (default: .)",
    )
    parser.add_argument(
        "--strategy", "-s",
        choices=sorted(READERS),
        default=None,
        help="File read strategy (default: lines)",
    )
    parser.add_argument(
        "--expose-errors",
        action="store_true",
        default=None,
        help="Include full OS error text in /read-file error responses",
    )
    parser.add_argument("--version", "-v", action="version", version=f"textserver {__version__}")

    return parser


def config_from_args(args: argparse.Namespace) -> ServerConfig:
    """Environment first, then command-line overrides."""
    config = ServerConfig.from_env()

    if args.host is not None:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    if args.workers is not None:
        config.min_workers = args.workers
        config.max_workers = args.workers * 2
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.log_format is not None:
        config.log_format = args.log_format
    if args.root is not None:
        config.files_root = args.root
    if args.strategy is not None:
        config.read_strategy = args.strategy
    if args.expose_errors:
        config.expose_error_details = True

    config.validate()
    return config


def serve(config: ServerConfig) -> int:
    server = create_app(config)
    try:
        server.run()
    except OSError as e:
        # SocketServer already logged the bind failure
        print(f"Error: server failed to start: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.command == "serve":
        return serve(config)
    if args.command == "demo-file-reader":
        return run_demo(config.files_root, config.read_strategy)
    if args.command == "test-file-reader":
        return run_diagnostics(config.files_root)
    if args.command == "create-test-files":
        return create_test_files(config.files_root)
    return cleanup_test_files(config.files_root)


if __name__ == "__main__":
    sys.exit(main())
