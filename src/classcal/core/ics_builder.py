"""Schedule-to-calendar compiler.

Expands a ScheduleRequest against a PeriodRegistry into one VEVENT per
(date, period) pair and serializes the result as an iCalendar document
carrying a single fixed VTIMEZONE.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from icalendar import Calendar, Event, Timezone, TimezoneStandard, vText

from classcal.config.constants import (
    DESCRIPTION_TEMPLATE,
    ICS_MIME_TYPE,
    ICS_VERSION,
    SUMMARY_PREFIX_TEMPLATE,
    SUMMARY_TEMPLATE,
    VTIMEZONE_STANDARD_START,
)
from classcal.config.settings import CALENDAR_CONFIG, CalendarConfig
from classcal.core.registry import Institution, PeriodRegistry, period_label, period_sort_key
from classcal.core.schedule_model import ClassEvent, ScheduleRequest
from classcal.exceptions.errors import (
    EmptyResultError,
    MissingClassNameError,
    MissingDatesError,
    MissingInstitutionError,
    MissingPeriodsError,
)
from classcal.utils.date_parsing import parse_class_date
from classcal.utils.timezone_utils import parse_utc_offset, to_utc_stamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarDocument:
    """A compiled calendar, ready to be handed to a delivery layer."""

    text: str
    event_count: int
    filename: str
    mime_type: str = ICS_MIME_TYPE

    @property
    def lines(self) -> List[str]:
        return self.text.rstrip("\r\n").split("\r\n")

    def to_bytes(self) -> bytes:
        return self.text.encode("utf-8")


@dataclass
class ExpansionResult:
    """Events produced by one expansion, with skip counts for diagnostics."""

    events: List[ClassEvent]
    skipped_dates: int = 0
    skipped_periods: int = 0


def compile_schedule(
    request: ScheduleRequest,
    registry: PeriodRegistry,
    now: datetime,
    config: CalendarConfig = CALENDAR_CONFIG,
) -> CalendarDocument:
    """Compile a schedule request into an iCalendar document.

    Args:
        request: Class label, dates, periods and optional location.
        registry: Period times to expand against.
        now: Creation instant, stamped on every event. Naive means UTC.
        config: Calendar settings (zone, PRODID, UID domain).

    Returns:
        The complete CalendarDocument.

    Raises:
        MissingInstitutionError: Registry is institution-scoped and no known
            institution was selected.
        MissingClassNameError: Class label is empty.
        MissingDatesError: No non-blank date entries.
        MissingPeriodsError: No periods selected.
        EmptyResultError: Expansion produced no events.
    """
    institution = validate_request(request, registry)

    expansion = expand_events(request, institution)
    if not expansion.events:
        logger.info(
            "No events for '%s': %d date(s) unparseable, %d period(s) unmapped",
            request.class_label, expansion.skipped_dates, expansion.skipped_periods
        )
        raise EmptyResultError(expansion.skipped_dates, expansion.skipped_periods)

    dtstamp = to_utc_stamp(now)
    location = request.location or institution.address or config.default_location

    cal = _create_ics_calendar(config)
    cal.add_component(_create_vtimezone(config))
    for class_event in expansion.events:
        cal.add_component(
            _create_ics_event(class_event, request.class_label, institution, location, dtstamp, config)
        )

    logger.info(
        "Compiled %d event(s) for '%s' (%d date(s) and %d period(s) skipped)",
        len(expansion.events), request.class_label,
        expansion.skipped_dates, expansion.skipped_periods
    )
    return CalendarDocument(
        text=_format_ics_output(cal),
        event_count=len(expansion.events),
        filename=config.filename,
    )


def validate_request(request: ScheduleRequest, registry: PeriodRegistry) -> Institution:
    """Check the request fields before any expansion.

    Returns:
        The period table selected for this request.
    """
    institution = registry.select(request.institution_key)
    if institution is None:
        if request.institution_key:
            raise MissingInstitutionError(f"Unknown institution '{request.institution_key}'.")
        raise MissingInstitutionError()
    if not request.class_label:
        raise MissingClassNameError()
    if not request.date_entries:
        raise MissingDatesError()
    if not request.selected_periods:
        raise MissingPeriodsError()
    return institution


def expand_events(request: ScheduleRequest, institution: Institution) -> ExpansionResult:
    """Expand dates x selected periods into ClassEvents.

    Unparseable dates and periods missing from the table are skipped.
    """
    periods, unmapped = _resolve_periods(request.selected_periods, institution)
    result = ExpansionResult(events=[], skipped_periods=len(unmapped))

    for raw_date in request.date_entries:
        class_date = parse_class_date(raw_date)
        if class_date is None:
            logger.debug("Skipping unparseable date %r", raw_date)
            result.skipped_dates += 1
            continue

        for period_id, times in periods:
            result.events.append(ClassEvent(
                date=class_date,
                period=period_id,
                start_local=datetime.combine(class_date, times.start),
                end_local=datetime.combine(class_date, times.end),
            ))

    return result


def _resolve_periods(selected: Sequence[str], institution: Institution) -> Tuple[list, list]:
    """Deduplicate and order the selected ids, splitting mapped from unmapped."""
    mapped, unmapped = [], []
    for period_id in sorted(set(selected), key=period_sort_key):
        times = institution.lookup(period_id)
        if times is None:
            logger.debug("Skipping period %s, not defined for '%s'", period_id, institution.key)
            unmapped.append(period_id)
        else:
            mapped.append((period_id, times))
    return mapped, unmapped


def _create_ics_calendar(config: CalendarConfig) -> Calendar:
    """Create a new ICS calendar with standard headers."""
    cal = Calendar()
    cal.add("VERSION", ICS_VERSION)
    cal.add("PRODID", config.prodid)
    return cal


def _create_vtimezone(config: CalendarConfig) -> Timezone:
    """Create the fixed, DST-free VTIMEZONE every event refers to."""
    offset = parse_utc_offset(config.utc_offset)

    standard = TimezoneStandard()
    standard.add("DTSTART", datetime(*VTIMEZONE_STANDARD_START))
    standard.add("TZOFFSETFROM", offset)
    standard.add("TZOFFSETTO", offset)
    standard.add("TZNAME", config.timezone_name)

    tz = Timezone()
    tz.add("TZID", config.timezone_id)
    tz.add_component(standard)
    return tz


def _create_ics_event(
    class_event: ClassEvent,
    class_label: str,
    institution: Institution,
    location: str,
    dtstamp: datetime,
    config: CalendarConfig,
) -> Event:
    """Create the VEVENT for one (date, period) pair."""
    ve = Event()
    ve.add("UID", class_event.uid(config.uid_domain))
    ve.add("DTSTAMP", dtstamp)

    tz_params = {"TZID": config.timezone_id}
    ve.add("DTSTART", class_event.start_local, parameters=tz_params)
    ve.add("DTEND", class_event.end_local, parameters=tz_params)

    ve.add("SUMMARY", vText(_format_summary(class_label, class_event.period, institution)))
    ve.add("LOCATION", vText(location))
    ve.add("DESCRIPTION", vText(DESCRIPTION_TEMPLATE.format(class_label=class_label)))
    return ve


def _format_summary(class_label: str, period_id: str, institution: Optional[Institution]) -> str:
    prefix = ""
    if institution is not None and institution.name:
        prefix = SUMMARY_PREFIX_TEMPLATE.format(name=institution.name)
    return SUMMARY_TEMPLATE.format(
        prefix=prefix, class_label=class_label, period_label=period_label(period_id)
    )


def _format_ics_output(cal: Calendar) -> str:
    """Format calendar to ICS string with proper line endings."""
    raw_ical = cal.to_ical()
    decoded_ical = raw_ical.decode("utf-8", errors="replace")
    # Ensure CRLF line endings per RFC5545
    crlf_ical = decoded_ical.replace("\r\n", "\n").replace("\n", "\r\n")
    return crlf_ical
