"""
Relay chain specification CLI entry point.

Build chain specification documents for the relay network families.

Usage::

    python -m relay_spec list-chains
    python -m relay_spec build-spec --chain dev
    python -m relay_spec build-spec --chain westend-local --output westend-local.json
    python -m relay_spec build-spec --chain ./custom-spec.json

Commands:
    build-spec   Print (or write) the chain specification of a chain
    list-chains  List every chain name `--chain` accepts

Options:
    --chain      Chain name ("dev", "<family>", "<family>-dev|-local|-staging") or JSON path
    --output     Write the document to a file instead of stdout
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from relay_spec.subspecs.chain import available_chains, resolve_chain_spec
from relay_spec.types import ChainSpecError

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
"""Exit status when a chain specification cannot be produced."""

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
"""Line layout shared by the plain and colored formatters."""

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """The plain log line, with its level name colored by severity."""

    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[38;5;244m",
        logging.INFO: "\x1b[38;5;40m",
        logging.WARNING: "\x1b[38;5;220m",
        logging.ERROR: "\x1b[38;5;196m",
    }

    def __init__(self) -> None:
        super().__init__(LOG_FORMAT, datefmt=DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return line
        # The timestamp holds no letters, so the first match is the level field.
        return line.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """
    Configure logging with optional colors.

    Logs go to stderr so that a document printed to stdout stays clean.
    """
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if no_color:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    else:
        handler.setFormatter(ColoredFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def build_spec(chain: str, output: Path | None = None) -> int:
    """
    Resolve a chain and emit its chain specification document.

    Returns:
        The process exit status.
    """
    try:
        spec = resolve_chain_spec(chain)
    except ChainSpecError as e:
        logger.error("%s", e.message)
        return EXIT_FAILURE

    document = spec.to_json_bytes()
    if output is None:
        sys.stdout.buffer.write(document)
        sys.stdout.flush()
    else:
        output.write_bytes(document)
        logger.info("Wrote %s chain specification to %s", spec.chain_id, output)
    return 0


def list_chains() -> int:
    """Print every accepted chain name, one per line."""
    for name in available_chains():
        print(name)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="relay_spec",
        description="Relay chain specification builder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    build = commands.add_parser("build-spec", help="Build a chain specification document")
    build.add_argument(
        "--chain",
        default="dev",
        help='Chain name or path to a chain specification JSON file (default: "dev")',
    )
    build.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the document to this file instead of stdout",
    )

    commands.add_parser("list-chains", help="List the chain names --chain accepts")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    match args.command:
        case "build-spec":
            return build_spec(args.chain, args.output)
        case "list-chains":
            return list_chains()
    return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
