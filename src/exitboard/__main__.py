"""CLI entry point for exitboard."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="exitboard",
        description="Kanban task board for exit-planning engagements",
    )
    parser.add_argument(
        "--task-root",
        type=Path,
        default=None,
        help="Path to project root containing exitboard.yml (default: current directory)",
    )
    parser.add_argument(
        "--generate",
        action="store_true",
        help="Generate default exitboard.yml and task directory, then exit",
    )
    parser.add_argument(
        "--show",
        nargs="?",
        const="",
        default=None,
        metavar="QUERY",
        help="Print the board (optionally filtered by QUERY) instead of starting the TUI",
    )
    parser.add_argument(
        "--ask",
        default=None,
        metavar="QUESTION",
        help="Search the deal documents through the ML API and print the answer",
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
    return parser.parse_args()


def main() -> None:
    """Main entry point."""
    args = parse_args()

    # CLI flags win over EXITBOARD_* environment variables
    settings_kwargs: dict = {}
    if args.task_root:
        settings_kwargs["project_root"] = args.task_root
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)
    setup_logging(settings.verbose, settings.log_file)

    if args.generate:
        from .cli.generate import run_generate

        raise SystemExit(run_generate(settings.project_root))

    if args.show is not None:
        from .cli.show import run_show

        raise SystemExit(run_show(settings, args.show or None))

    if args.ask is not None:
        from .cli.ask import run_ask

        raise SystemExit(run_ask(settings, args.ask))

    # Import here so the CLI commands don't pay for Textual
    from .app import run

    run(settings)


if __name__ == "__main__":
    main()
