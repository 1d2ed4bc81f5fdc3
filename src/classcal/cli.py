"""Command line front end: compile class dates and periods into an .ics file.

Examples:
  classcal-cli --institution sample-u --class-name Algorithms \\
      --date 2024-04-10 --date 2024-04-17 --period 1 --period 2
  classcal-cli --config periods.json --class-name Seminar --dates-file dates.txt \\
      --period 3 -o seminar.ics
"""

import argparse
import logging
import sys
from datetime import datetime
from typing import List, Optional, TextIO

import pytz
from dateutil import parser as dateutil_parser

from classcal.config.constants import DEFAULT_ICS_FILENAME
from classcal.config.settings import load_calendar_config
from classcal.core.ics_builder import compile_schedule
from classcal.core.registry import PeriodRegistry, period_label
from classcal.core.schedule_model import ScheduleRequest
from classcal.exceptions.errors import ConfigLoadError, ScheduleValidationError
from classcal.storage.config_loader import load_default_registry
from classcal.storage.document_writer import write_document
from classcal.ui.error_messages import get_user_friendly_error
from classcal.utils.date_parsing import split_date_lines
from classcal.utils.paths import get_user_config_dir

logger = logging.getLogger(__name__)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 instant for --timestamp."""
    try:
        return dateutil_parser.isoparse(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid timestamp: '{value}'. Expected ISO 8601, e.g. 2024-04-01T00:00:00Z."
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="classcal-cli",
        description="Convert class dates and periods to an iCalendar file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("\n", 2)[2],
    )
    parser.add_argument("--config", help="Period configuration JSON file")
    parser.add_argument("--institution", help="Institution key from the configuration")
    parser.add_argument("--class-name", default="", help="Class name used in event titles")
    parser.add_argument("--location", help="Location override for every event")
    parser.add_argument(
        "--date", action="append", default=[], dest="dates",
        help="Class date (YYYY-MM-DD); repeatable"
    )
    parser.add_argument(
        "--dates-file",
        help="File with one date per line ('-' for stdin)"
    )
    parser.add_argument(
        "--period", action="append", default=[], dest="periods",
        help="Period number; repeatable"
    )
    parser.add_argument(
        "-o", "--output", default=DEFAULT_ICS_FILENAME,
        help=f"Output file path (default: {DEFAULT_ICS_FILENAME})"
    )
    parser.add_argument(
        "--timestamp", type=parse_timestamp, default=None,
        help="Creation instant for DTSTAMP (default: now)"
    )
    parser.add_argument(
        "--list", action="store_true",
        help="List institutions and their periods, then exit"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def print_registry(registry: PeriodRegistry, out: TextIO) -> None:
    """Print the period tables in a human-readable form."""
    tables = registry.institutions() if registry.is_institution_scoped else [registry.select(None)]
    for institution in tables:
        if institution.key:
            print(f"{institution.key}: {institution.name}", file=out)
            if institution.address:
                print(f"  {institution.address}", file=out)
        for period_id, times in institution.periods.items():
            print(f"  {period_label(period_id)} {times.label}", file=out)


def collect_dates(dates: List[str], dates_file: Optional[str]) -> List[str]:
    """Combine --date values with the lines of --dates-file, in that order."""
    collected = list(dates)
    if dates_file == "-":
        collected.extend(split_date_lines(sys.stdin.read()))
    elif dates_file:
        with open(dates_file, "r", encoding="utf-8") as f:
            collected.extend(split_date_lines(f.read()))
    return collected


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line front end."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = load_calendar_config(get_user_config_dir() / ".env")
        registry = load_default_registry(args.config)
    except ConfigLoadError as e:
        print(f"Error: {get_user_friendly_error(e)}", file=sys.stderr)
        return 1

    if args.list:
        print_registry(registry, sys.stdout)
        return 0

    try:
        raw_dates = collect_dates(args.dates, args.dates_file)
    except OSError as e:
        print(f"Error: could not read {args.dates_file}: {e}", file=sys.stderr)
        return 1

    request = ScheduleRequest(
        class_label=args.class_name,
        raw_dates=tuple(raw_dates),
        selected_periods=tuple(args.periods),
        location_override=args.location,
        institution_key=args.institution,
    )
    logger.debug("Compiling %s", request)
    now = args.timestamp or datetime.now(pytz.utc)

    try:
        document = compile_schedule(request, registry, now, config)
    except ScheduleValidationError as e:
        print(f"Error: {get_user_friendly_error(e)}", file=sys.stderr)
        return 1

    try:
        written = write_document(document, args.output)
    except OSError as e:
        print(f"Error: could not write {args.output}: {e}", file=sys.stderr)
        return 1

    print(f"Saved {document.event_count} event(s) to {written}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
