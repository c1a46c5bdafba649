"""Main CLI entry point for slngen.

Provides commands: generate, graph, editors
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from slngen.cli.editors import editors_command
from slngen.cli.generate import generate_command
from slngen.cli.graph import graph_command

logger = logging.getLogger("slngen.cli")


def setup_logging(
    verbose: bool = False,
    console: Optional[Console] = None,
    log_file: Optional[str] = None,
) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
        log_file: Also write plain-text logs to this file (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )
    handlers: list[logging.Handler] = [handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] [%(levelname)s] %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="[%(name)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-u",
        "--units",
        required=True,
        help="JSON manifest listing the assembly units, in build order",
    )
    parser.add_argument(
        "-p",
        "--project-root",
        help="Directory receiving the generated files (default: current directory)",
    )
    parser.add_argument(
        "-s",
        "--source-root",
        help="Primary source tree (default: <project-root>/Assets)",
    )
    parser.add_argument(
        "--solution-name",
        help="Solution file name without extension (default: project root folder name)",
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional generation configuration. Can be a path to a TOML/JSON "
            "file or an inline TOML/JSON string. Command-line flags override "
            "values from the configuration."
        ),
    )
    parser.add_argument(
        "--include-external",
        action="store_true",
        help="Include units with a definition file outside the source tree",
    )
    parser.add_argument(
        "--analyzer",
        action="append",
        metavar="PATH",
        help="Extra analyzer assembly added to every project (repeatable)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for all commands."""
    parser = argparse.ArgumentParser(
        prog="slngen",
        description="slngen - IDE solution and project file generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-file",
        help="Also write logs to this file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate solution and project files",
    )
    _add_input_arguments(generate_parser)
    generate_parser.add_argument(
        "--no-clean",
        action="store_true",
        help="Keep descriptor files that were not produced by this run",
    )

    graph_parser = subparsers.add_parser(
        "graph",
        help="Show the resolved project graph without writing files",
    )
    _add_input_arguments(graph_parser)
    graph_parser.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Maximum number of cycles to report (default: 20, <=0 for no limit)",
    )
    graph_parser.add_argument(
        "--fail-on-cycle",
        action="store_true",
        help="Exit with non-zero status when project references form a cycle",
    )

    editors_parser = subparsers.add_parser(
        "editors",
        help="List supported editor installations",
    )
    editors_parser.add_argument(
        "--timeout",
        type=float,
        default=5.0,
        help="Seconds to wait for editor discovery (default: 5)",
    )

    return parser


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args()

    setup_logging(args.verbose, log_file=args.log_file)

    if args.command == "generate":
        return generate_command(args)
    elif args.command == "graph":
        return graph_command(args)
    elif args.command == "editors":
        return editors_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
