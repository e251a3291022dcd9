"""Command-line interface for melon-chart."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from typing import Any, Dict, Sequence

from .client import MelonChart
from .errors import ChartError
from .logging_utils import get_logger, setup_logging
from .models import ChartResult
from .periods import PeriodKind

LOG = get_logger(__name__)


def _options_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    if args.cut_line is not None:
        options["cutLine"] = args.cut_line
    if args.url:
        options["url"] = args.url
    return options


def print_result(result: ChartResult, as_json: bool = False) -> None:
    if as_json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    print(f"Chart window {result.window.start}..{result.window.end}")
    if not result.entries:
        print("(no chart entries)")
    for entry in result.entries:
        print(f"{entry.rank:>3}  {entry.title} - {entry.artist} [{entry.album}]")


def handle_chart(args: argparse.Namespace) -> int:
    kind = PeriodKind.parse(args.command)
    reference = args.date or date.today()

    try:
        chart = MelonChart(reference, _options_from_args(args))
        result = chart.chart(kind)
    except ChartError as exc:
        LOG.error("Could not load %s chart: %s", args.command, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print_result(result, as_json=args.json)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="melon-chart",
        description="Fetch Melon music charts",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subcommands = [
        ("daily", "Daily chart (today's when the date is in the future)"),
        ("weekly", "Weekly chart for the Monday-Sunday week of the date"),
        ("monthly", "Monthly chart for the month of the date"),
    ]

    for name, help_text in subcommands:
        subparser = subparsers.add_parser(name, help=help_text)
        subparser.set_defaults(func=handle_chart)
        subparser.add_argument(
            "--date",
            help="Reference date (YYYY-MM-DD or YYYYMMDD); defaults to today",
        )
        subparser.add_argument(
            "--cut-line",
            type=int,
            help="Maximum number of entries to return (default 50)",
        )
        subparser.add_argument("--url", help="Override the daily chart base URL")
        subparser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
        subparser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
