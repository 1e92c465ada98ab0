"""Main CLI entry point for nmgraph.

Provides commands: analyze
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from nmgraph import __version__
from nmgraph.cli.analyze import analyze_command
from nmgraph.graph import PROJECTIONS

logger = logging.getLogger("nmgraph.cli")


def setup_logging(
    verbose: bool = False,
    log_file: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        log_file: Also write plain log records to this file.
        console: Rich Console instance for coordinated output (optional).
    """
    level = logging.DEBUG if verbose else logging.WARNING

    handlers: list = [
        RichHandler(
            console=console or Console(stderr=True),
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            log_time_format="[%H:%M:%S]",
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] [%(levelname)s] %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def _positive_int(value: str) -> int:
    """argparse type for strictly positive integers."""
    try:
        result = int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError("not a number.")
    if result < 1:
        raise argparse.ArgumentTypeError("must be a positive integer.")
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nmgraph",
        description="Nmgraph - analyze installed npm dependencies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        "--debug",
        dest="verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-file",
        help="Also write logs to this file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Build the dependency graph of an installed project",
    )
    analyze_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory containing package.json (default: current directory)",
    )
    analyze_parser.add_argument(
        "-d",
        "--depth",
        type=_positive_int,
        help="Maximum recursive level (default: unlimited)",
    )
    analyze_parser.add_argument(
        "-j",
        "--json",
        metavar="DIR",
        help="Save result as DIR/dep-analyze.json instead of displaying it",
    )
    analyze_parser.add_argument(
        "-f",
        "--format",
        choices=PROJECTIONS,
        default="path",
        help="Shape of the saved JSON (default: path)",
    )
    analyze_parser.add_argument(
        "--dot",
        metavar="FILE",
        help="Also render the dependency graph to a DOT file",
    )
    analyze_parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional analysis configuration. Can be a path to a TOML/JSON "
            "file or an inline TOML/JSON string."
        ),
    )
    analyze_parser.add_argument(
        "-w",
        "--workers",
        type=_positive_int,
        help="Threads used to visit dependencies (default: 4)",
    )
    analyze_parser.add_argument(
        "--no-optional",
        action="store_true",
        help="Ignore optionalDependencies",
    )
    analyze_parser.add_argument(
        "--no-dev",
        action="store_true",
        help="Ignore the root project's devDependencies",
    )
    analyze_parser.add_argument("--host", help="Viewer host (default: 127.0.0.1)")
    analyze_parser.add_argument("--port", type=_positive_int, help="Viewer port (default: 8420)")
    analyze_parser.add_argument(
        "--no-open",
        action="store_true",
        help="Do not open a browser tab for the viewer",
    )
    return parser


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args()

    setup_logging(args.verbose, getattr(args, "log_file", None))
    logger.debug("nmgraph %s", __version__)

    if args.command == "analyze":
        return analyze_command(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
