"""Fixed-offset timezone helpers and UTC normalization."""

import logging
import re
from datetime import datetime, timedelta
from typing import Optional

import pytz

logger = logging.getLogger(__name__)

UTC_OFFSET_PATTERN = re.compile(r"^([+-])(\d{2})(\d{2})$")

# Reference instant used to read a zone's standard offset
_OFFSET_PROBE = datetime(2000, 1, 15)


def parse_utc_offset(offset_str: str) -> timedelta:
    """Parse an iCalendar UTC offset such as '+0900' or '-0530'.

    Args:
        offset_str: The offset string.

    Returns:
        The offset as a timedelta.

    Raises:
        ValueError: If the string is not a valid [+-]HHMM offset.
    """
    match = UTC_OFFSET_PATTERN.match((offset_str or "").strip())
    if not match:
        raise ValueError(f"Invalid UTC offset '{offset_str}', expected [+-]HHMM")

    sign, hours, minutes = match.groups()
    if int(hours) > 23 or int(minutes) > 59:
        raise ValueError(f"UTC offset out of range: '{offset_str}'")

    delta = timedelta(hours=int(hours), minutes=int(minutes))
    return -delta if sign == "-" else delta


def check_declared_offset(tz_name: str, offset_str: str) -> Optional[str]:
    """Compare a declared offset against the IANA zone of the same name.

    The generated VTIMEZONE always carries the declared offset. This only
    warns when a calendar application that trusts its own zone database
    would place events differently.

    Args:
        tz_name: The TZID written into the document.
        offset_str: The declared [+-]HHMM offset.

    Returns:
        A warning message, or None when the offset matches or the zone is
        unknown to pytz.
    """
    try:
        zone = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        logger.debug("Zone '%s' not in the tz database, relying on VTIMEZONE", tz_name)
        return None

    declared = parse_utc_offset(offset_str)
    actual = zone.utcoffset(_OFFSET_PROBE)
    if actual == declared:
        return None

    warning = (
        f"Declared offset {offset_str} differs from the standard offset of "
        f"'{tz_name}' ({format_utc_offset(actual)}). Calendar apps may shift events."
    )
    logger.warning(warning)
    return warning


def format_utc_offset(delta: timedelta) -> str:
    """Render a timedelta as an iCalendar [+-]HHMM offset."""
    total_minutes = int(delta.total_seconds() // 60)
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}{minutes:02d}"


def to_utc_stamp(instant: datetime) -> datetime:
    """Normalize an instant to a second-precision UTC datetime for DTSTAMP.

    Naive datetimes are taken to already be in UTC.

    Args:
        instant: The instant to normalize.

    Returns:
        A timezone-aware UTC datetime without microseconds.
    """
    if instant.tzinfo is None or instant.tzinfo.utcoffset(instant) is None:
        stamp = pytz.utc.localize(instant)
    else:
        stamp = instant.astimezone(pytz.utc)
    return stamp.replace(microsecond=0)
