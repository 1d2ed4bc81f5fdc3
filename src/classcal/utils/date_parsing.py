"""Date and time parsing utilities."""

import re
from datetime import date, datetime, time
from typing import Iterable, List, Optional

from dateutil import parser as dateutil_parser

# Zero-padded 24-hour clock, e.g. "09:00" or "18:30"
CIVIL_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

# Two unrelated defaults: if parsing with each yields a different date, the
# input did not name a year, month and day on its own.
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def parse_civil_time(text: str) -> time:
    """Parse an 'HH:MM' wall-clock time.

    Args:
        text: Zero-padded 24-hour time string.

    Returns:
        The parsed time.

    Raises:
        ValueError: If the string is not a zero-padded HH:MM value.
    """
    match = CIVIL_TIME_PATTERN.match(str(text).strip())
    if not match:
        raise ValueError(f"Invalid time '{text}', expected zero-padded HH:MM")
    return time(int(match.group(1)), int(match.group(2)))


def parse_class_date(raw: str) -> Optional[date]:
    """Parse one line of a pasted date list into a calendar date.

    Args:
        raw: A date string such as '2024-04-10' or '2024/4/10'.

    Returns:
        The date, or None when the string does not denote a complete and
        valid calendar date.
    """
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text:
        return None

    try:
        first = dateutil_parser.parse(text, default=_DEFAULT_A)
        second = dateutil_parser.parse(text, default=_DEFAULT_B)
    except (ValueError, OverflowError):
        return None

    if first.date() != second.date():
        return None
    return first.date()


def split_date_lines(text: str) -> List[str]:
    """Split a multi-line date text into trimmed, non-blank entries."""
    if not text:
        return []
    return clean_date_entries(text.splitlines())


def clean_date_entries(entries: Iterable[str]) -> List[str]:
    """Trim entries and drop blank ones, keeping input order."""
    return [entry.strip() for entry in entries if entry and entry.strip()]
