"""CLI entry point for nntm."""

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import Settings
from .exceptions import TodoFileError
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="nntm",
        description="Terminal viewer/editor for todo.txt-style task lists",
    )
    parser.add_argument(
        "todo_file",
        type=Path,
        help="Todo file to edit, or a named pipe to stream tasks from",
    )
    parser.add_argument(
        "--exec",
        dest="exec_hook",
        type=Path,
        default=None,
        metavar="SCRIPT",
        help='Run SCRIPT "<Added|Completed|Uncompleted>: <text>" on task events',
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Build settings from CLI args, on top of NNTM_* environment values."""
    settings_kwargs: dict = {"todo_file": args.todo_file}
    if args.exec_hook:
        settings_kwargs["exec_hook"] = args.exec_hook
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file
    return Settings(**settings_kwargs)


def main() -> None:
    """Main entry point."""
    args = parse_args()
    settings = build_settings(args)

    setup_logging(settings.verbose, settings.log_file)

    # Import here to keep --help fast
    from .app import run

    try:
        run(settings)
    except TodoFileError as e:
        print(f"nntm: {e}", file=sys.stderr)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
