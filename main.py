# main.py

"""Entry point for the productscout ingestion CLI."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging

logger = logging.getLogger("productscout.main")

DEFAULT_SEARCH_TERM = "WH1000XM4B"


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="productscout",
        description=(
            "Search the retail listing endpoint and resolve "
            "full-size product images."
        ),
    )
    parser.add_argument(
        "search_term",
        nargs="?",
        default=DEFAULT_SEARCH_TERM,
        help=f"Product code or search term (default: {DEFAULT_SEARCH_TERM}).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=None,
        help="Concurrent image-resolution workers (default: from settings).",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Run a connectivity health check on the search endpoint.",
    )
    return parser


def _run_cli(args: argparse.Namespace) -> None:
    """Run one ingestion and exit."""
    from src.cli.runner import cli_ingest

    exit_code = asyncio.run(
        cli_ingest(
            search_term=args.search_term,
            output_format=args.output_format,
            workers=args.workers,
        )
    )
    sys.exit(exit_code)


def _run_health_check() -> None:
    """Run search endpoint health check."""
    from src.cli.runner import run_health_check

    exit_code = asyncio.run(run_health_check())
    sys.exit(exit_code)


def main() -> None:
    """Route to the health check or a single ingestion run."""
    log_file = setup_logging()
    logger.info("productscout starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if args.health:
        _run_health_check()
    else:
        _run_cli(args)


if __name__ == "__main__":
    main()
