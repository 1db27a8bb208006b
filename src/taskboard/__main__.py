"""CLI entry point for taskboard."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging
from .models import WireFormat


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Terminal kanban board for a remote task collection",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Server root exposing /tasks (default: http://localhost:8080)",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Directory containing taskboard.yml (default: current directory)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the board once and exit",
    )
    parser.add_argument(
        "--wire-format",
        choices=[fmt.value for fmt in WireFormat],
        default=None,
        help="Field naming for writes: standard (stage) or legacy (status/progress)",
    )
    parser.add_argument(
        "--serialize",
        action="store_true",
        help="Run one change at a time instead of letting them overlap",
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
    """Build settings from CLI args, falling back to environment and defaults."""
    settings_kwargs: dict = {}
    if args.api_url:
        settings_kwargs["api_url"] = args.api_url
    if args.project_root:
        settings_kwargs["project_root"] = args.project_root
    if args.serialize:
        settings_kwargs["serialize_mutations"] = True
    if args.wire_format:
        settings_kwargs["wire_format"] = args.wire_format
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file
    return Settings(**settings_kwargs)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    settings = build_settings(args)

    setup_logging(settings.verbose, settings.log_file, interactive=not args.list)

    if args.list:
        from .cli.board import run_list

        raise SystemExit(run_list(settings))

    # Import here so --list does not pay for loading Textual
    from .app import run

    run(settings)


if __name__ == "__main__":
    main()
