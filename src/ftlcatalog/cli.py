"""Command-line interface.

Usage:
    ftlcatalog generate-schema PATH... --output FILE [--watch] [--quiet]
                               [--format {json,python}] [--allow-overrides]
                               [--interval SECONDS]
    ftlcatalog --version

generate-schema reads every .ftl file under the given paths, writes the
variable schema to --output, and with --watch keeps rewriting it as the
sources change until interrupted with Ctrl+C.

Exit codes:
    0: Schema written (or watch mode ended by SIGINT)
    1: Missing --output, no paths, a path that does not exist, or an
       unreadable source file
    2: Invalid command-line usage

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from typing import TYPE_CHECKING

from ftlcatalog import __version__
from ftlcatalog.constants import DEFAULT_POLL_INTERVAL, DEFAULT_SCHEMA_ALLOW_OVERRIDES
from ftlcatalog.enums import SchemaFormat
from ftlcatalog.schema.extractor import SchemaExtractor
from ftlcatalog.schema.watch import PollingWatcher, WatchCoordinator

if TYPE_CHECKING:
    from types import FrameType

__all__ = ["main"]

logger = logging.getLogger("ftlcatalog")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ftlcatalog",
        description="Fluent message catalog tooling.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subcommands = parser.add_subparsers(dest="command")

    generate = subcommands.add_parser(
        "generate-schema",
        help="Write the variables each message requires to a JSON or Python file.",
    )
    generate.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="FTL files or directories to read.",
    )
    generate.add_argument(
        "--output", "-o",
        help="Schema file to write (.json or .py).",
    )
    generate.add_argument(
        "--format", "-f",
        type=SchemaFormat,
        choices=list(SchemaFormat),
        default=None,
        help="Output format (default: inferred from the --output suffix).",
    )
    generate.add_argument(
        "--watch", "-w",
        action="store_true",
        help="Keep regenerating the schema when sources change.",
    )
    generate.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only report warnings and errors.",
    )
    generate.add_argument(
        "--allow-overrides",
        action="store_true",
        default=DEFAULT_SCHEMA_ALLOW_OVERRIDES,
        help="Let later definitions of a key replace earlier ones.",
    )
    generate.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL,
        help=f"Seconds between file checks in watch mode (default: {DEFAULT_POLL_INTERVAL}).",
    )
    return parser


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return _build_parser().parse_args(argv)


def _configure_logging(quiet: bool) -> None:
    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )


def _generate_schema(args: argparse.Namespace) -> int:
    if args.output is None or not args.output.strip():
        logger.error("specify the --output file.")
        return 1
    paths = [path for path in args.paths if path.strip()]
    if not paths:
        logger.error("specify at least one file/directory path to read.")
        return 1
    if args.interval <= 0:
        logger.error("--interval must be positive, got %s", args.interval)
        return 1

    coordinator = WatchCoordinator(
        paths,
        args.output,
        extractor=SchemaExtractor(allow_overrides=args.allow_overrides),
        fmt=args.format,
    )
    try:
        coordinator.start()
    except FileNotFoundError as e:
        logger.error("path does not exist: %s", e.filename or e)
        return 1
    except OSError as e:
        logger.error("failed to generate the schema: %s", e)
        return 1

    if not args.watch:
        return 0

    watcher = PollingWatcher(coordinator.roots, interval=args.interval)

    def _close(signum: int, frame: FrameType | None) -> None:
        watcher.close()

    previous = signal.signal(signal.SIGINT, _close)
    try:
        coordinator.run(watcher)
    except OSError as e:
        logger.error("failed to regenerate the schema: %s", e)
        return 1
    finally:
        signal.signal(signal.SIGINT, previous)

    logger.info("closed the file watcher")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the ftlcatalog command line."""
    args = _parse_args(argv)
    if args.command is None:
        print(f"ftlcatalog {__version__}")
        return 0

    _configure_logging(args.quiet)
    match args.command:
        case "generate-schema":
            return _generate_schema(args)
        case _:
            logger.error("unknown command: %s", args.command)
            return 1


if __name__ == "__main__":
    sys.exit(main())
