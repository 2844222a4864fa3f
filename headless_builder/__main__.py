"""Command-line entry point for ``headless-builder``."""

import argparse
import logging
import sys

from . import __version__
from .codegen.cli_integration import CLIError, console, create_codegen_subparsers
from .codegen.core.errors import GeneratorError
from .codegen.registry import RegistryError
from .logging_config import get_logger, setup_logging
from .store import StoreLoadError

logger = get_logger(__name__)

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="headless-builder",
        description="Export page components as ACF field groups and GraphQL schemas",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug)",
    )
    parser.add_argument("--log-file", metavar="FILE", help="Also log to FILE")

    subparsers = parser.add_subparsers(dest="command", required=True)
    create_codegen_subparsers(subparsers)
    return parser


def main(argv=None) -> int:
    """Parse arguments, run one subcommand and return its exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(LOG_LEVELS.get(args.verbose, logging.DEBUG), args.log_file)
    logger.debug("Running command %s", args.command)

    try:
        return args.func(args)
    except (CLIError, GeneratorError, StoreLoadError, RegistryError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
