import re
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest
import pytz
from icalendar import Calendar

from classcal.config.settings import CalendarConfig
from classcal.core.ics_builder import compile_schedule, expand_events
from classcal.core.registry import PeriodRegistry
from classcal.core.schedule_model import ScheduleRequest
from classcal.exceptions.errors import (
    EmptyResultError,
    MissingClassNameError,
    MissingDatesError,
    MissingInstitutionError,
    MissingPeriodsError,
)

NOW = datetime(2024, 4, 1, 12, 0, 0, tzinfo=pytz.utc)


@pytest.fixture
def single_registry() -> PeriodRegistry:
    return PeriodRegistry.from_dict({
        "1": {"start": "09:00", "end": "10:30"},
        "2": {"start": "10:40", "end": "12:10"},
        "3": {"start": "13:00", "end": "14:30"},
    })


@pytest.fixture
def campus_registry() -> PeriodRegistry:
    return PeriodRegistry.from_dict({
        "north": {
            "name": "North University",
            "address": "1 North Street",
            "periods": {
                "1": {"start": "09:00", "end": "10:30"},
                "2": {"start": "10:40", "end": "12:10"},
            },
        },
        "south": {
            "name": "South College",
            "address": "",
            "periods": {
                "1": {"start": "08:50", "end": "10:20"},
            },
        },
    })


def make_request(**overrides) -> ScheduleRequest:
    fields = {
        "class_label": "Algorithms",
        "raw_dates": ("2024-04-10",),
        "selected_periods": ("1",),
    }
    fields.update(overrides)
    return ScheduleRequest(**fields)


def vevents(text: str) -> list:
    return list(Calendar.from_ical(text.encode("utf-8")).walk("VEVENT"))


def uids(text: str) -> list:
    return re.findall(r"^UID:([^\r\n]+)", text, flags=re.MULTILINE)


def test_single_period_single_date(single_registry: PeriodRegistry) -> None:
    document = compile_schedule(make_request(), single_registry, NOW)

    assert document.event_count == 1
    assert document.text.count("BEGIN:VEVENT") == 1
    assert "DTSTART;TZID=Asia/Tokyo:20240410T090000" in document.text
    assert "DTEND;TZID=Asia/Tokyo:20240410T103000" in document.text
    assert "UID:2024-04-10-1@classcal" in document.text
    assert "DTSTAMP:20240401T120000Z" in document.text
    assert "SUMMARY:Algorithms (1限)" in document.text
    assert "DESCRIPTION:授業「Algorithms」の予定" in document.text
    assert "LOCATION:Campus" in document.text


def test_document_structure(single_registry: PeriodRegistry) -> None:
    document = compile_schedule(make_request(), single_registry, NOW)
    text = document.text

    assert text.startswith("BEGIN:VCALENDAR\r\n")
    assert text.endswith("END:VCALENDAR\r\n")
    assert "\n" not in text.replace("\r\n", "")
    assert "VERSION:2.0" in document.lines
    assert "PRODID:-//ClassCal//University Class Scheduler//EN" in document.lines
    assert text.index("BEGIN:VTIMEZONE") < text.index("BEGIN:VEVENT")

    for line in (
        "TZID:Asia/Tokyo",
        "DTSTART:19390101T000000",
        "TZOFFSETFROM:+0900",
        "TZOFFSETTO:+0900",
        "TZNAME:JST",
    ):
        assert line in document.lines
    assert "RRULE" not in text
    assert "METHOD" not in text


def test_vevent_property_order(single_registry: PeriodRegistry) -> None:
    lines = compile_schedule(make_request(), single_registry, NOW).lines
    body = lines[lines.index("BEGIN:VEVENT") + 1:lines.index("END:VEVENT")]
    names = [re.split(r"[:;]", line, maxsplit=1)[0] for line in body if not line.startswith(" ")]

    assert names == [
        "SUMMARY", "DTSTART", "DTEND", "DTSTAMP", "UID", "DESCRIPTION", "LOCATION",
    ]


def test_bare_date_string_is_one_date(single_registry: PeriodRegistry) -> None:
    request = make_request(raw_dates="2024-04-10", selected_periods="1")
    document = compile_schedule(request, single_registry, NOW)

    assert uids(document.text) == ["2024-04-10-1@classcal"]


def test_delivery_metadata(single_registry: PeriodRegistry) -> None:
    document = compile_schedule(make_request(), single_registry, NOW)

    assert document.mime_type == "text/calendar; charset=utf-8"
    assert document.filename == "schedule.ics"
    assert document.lines[0] == "BEGIN:VCALENDAR"
    assert document.lines[-1] == "END:VCALENDAR"
    assert document.to_bytes() == document.text.encode("utf-8")


def test_event_count_is_dates_times_periods(single_registry: PeriodRegistry) -> None:
    request = make_request(
        raw_dates=("2024-04-10", "2024-04-17", "2024-04-24"),
        selected_periods=("1", "2", "3"),
    )
    document = compile_schedule(request, single_registry, NOW)

    assert document.event_count == 9
    assert len(vevents(document.text)) == 9


def test_events_ordered_by_date_then_period(single_registry: PeriodRegistry) -> None:
    request = make_request(
        raw_dates=("2024-04-17", "2024-04-10"),
        selected_periods=("3", "1", "1"),
    )
    document = compile_schedule(request, single_registry, NOW)

    assert uids(document.text) == [
        "2024-04-17-1@classcal",
        "2024-04-17-3@classcal",
        "2024-04-10-1@classcal",
        "2024-04-10-3@classcal",
    ]


def test_unparseable_dates_are_skipped(single_registry: PeriodRegistry) -> None:
    request = make_request(
        raw_dates=("2024-04-10", "next week sometime", "2024-04-17", "2024-02-30"),
        selected_periods=("1", "2"),
    )
    document = compile_schedule(request, single_registry, NOW)

    assert document.event_count == 4


def test_blank_date_entries_are_ignored(single_registry: PeriodRegistry) -> None:
    request = make_request(raw_dates=("", "  2024-04-10  ", "   "))
    document = compile_schedule(request, single_registry, NOW)

    assert document.event_count == 1


def test_unmapped_periods_are_skipped(single_registry: PeriodRegistry) -> None:
    request = make_request(selected_periods=("1", "7"))
    document = compile_schedule(request, single_registry, NOW)

    assert document.event_count == 1
    assert uids(document.text) == ["2024-04-10-1@classcal"]


def test_only_invalid_dates_is_empty_result(single_registry: PeriodRegistry) -> None:
    with pytest.raises(EmptyResultError) as exc_info:
        compile_schedule(make_request(raw_dates=("not-a-date",)), single_registry, NOW)

    assert exc_info.value.skipped_dates == 1
    assert exc_info.value.kind == "EmptyResult"


def test_only_unmapped_periods_is_empty_result(single_registry: PeriodRegistry) -> None:
    with pytest.raises(EmptyResultError) as exc_info:
        compile_schedule(make_request(selected_periods=("9",)), single_registry, NOW)

    assert exc_info.value.skipped_periods == 1


def test_missing_class_name(single_registry: PeriodRegistry) -> None:
    with pytest.raises(MissingClassNameError):
        compile_schedule(make_request(class_label=""), single_registry, NOW)


def test_whitespace_class_name_is_missing(single_registry: PeriodRegistry) -> None:
    with pytest.raises(MissingClassNameError):
        compile_schedule(make_request(class_label="   "), single_registry, NOW)


def test_class_name_checked_before_dates(single_registry: PeriodRegistry) -> None:
    with pytest.raises(MissingClassNameError):
        compile_schedule(make_request(class_label="", raw_dates=()), single_registry, NOW)


def test_missing_dates(single_registry: PeriodRegistry) -> None:
    with pytest.raises(MissingDatesError):
        compile_schedule(make_request(raw_dates=("", "  ")), single_registry, NOW)


def test_missing_periods(single_registry: PeriodRegistry) -> None:
    with pytest.raises(MissingPeriodsError):
        compile_schedule(make_request(selected_periods=()), single_registry, NOW)


def test_missing_institution(campus_registry: PeriodRegistry) -> None:
    with pytest.raises(MissingInstitutionError):
        compile_schedule(make_request(), campus_registry, NOW)


def test_unknown_institution(campus_registry: PeriodRegistry) -> None:
    with pytest.raises(MissingInstitutionError) as exc_info:
        compile_schedule(make_request(institution_key="east"), campus_registry, NOW)

    assert "east" in str(exc_info.value)


def test_institution_name_and_address(campus_registry: PeriodRegistry) -> None:
    request = make_request(institution_key="north", selected_periods=("1", "2"))
    document = compile_schedule(request, campus_registry, NOW)

    events = vevents(document.text)
    assert len(events) == 2
    assert str(events[0].get("SUMMARY")) == "North University: Algorithms (1限)"
    assert str(events[1].get("SUMMARY")) == "North University: Algorithms (2限)"
    assert all(str(event.get("LOCATION")) == "1 North Street" for event in events)


def test_period_times_follow_selected_institution(campus_registry: PeriodRegistry) -> None:
    request = make_request(institution_key="south", selected_periods=("1", "2"))
    document = compile_schedule(request, campus_registry, NOW)

    assert document.event_count == 1
    assert "DTSTART;TZID=Asia/Tokyo:20240410T085000" in document.text
    assert "DTEND;TZID=Asia/Tokyo:20240410T102000" in document.text


def test_location_override_wins(campus_registry: PeriodRegistry) -> None:
    request = make_request(institution_key="north", location_override=" Room 301 ")
    event = vevents(compile_schedule(request, campus_registry, NOW).text)[0]

    assert str(event.get("LOCATION")) == "Room 301"


def test_location_falls_back_to_default(campus_registry: PeriodRegistry) -> None:
    request = make_request(institution_key="south", location_override="   ")
    event = vevents(compile_schedule(request, campus_registry, NOW).text)[0]

    assert str(event.get("LOCATION")) == "Campus"


def test_identical_inputs_give_identical_documents(single_registry: PeriodRegistry) -> None:
    request = make_request(
        raw_dates=("2024-04-10", "2024-04-17"),
        selected_periods=("1", "2"),
    )
    first = compile_schedule(request, single_registry, NOW)
    second = compile_schedule(request, single_registry, NOW)

    assert first.text == second.text


def test_all_events_share_one_dtstamp(single_registry: PeriodRegistry) -> None:
    request = make_request(
        raw_dates=("2024-04-10", "2024-04-17"),
        selected_periods=("1", "2", "3"),
    )
    text = compile_schedule(request, single_registry, NOW).text

    stamps = re.findall(r"^DTSTAMP:([^\r\n]+)", text, flags=re.MULTILINE)
    assert stamps == ["20240401T120000Z"] * 6


def test_dtstamp_is_converted_to_utc(single_registry: PeriodRegistry) -> None:
    jst_now = datetime(2024, 4, 1, 21, 0, 0, 123456, tzinfo=timezone(timedelta(hours=9)))
    text = compile_schedule(make_request(), single_registry, jst_now).text

    assert "DTSTAMP:20240401T120000Z" in text


def test_naive_now_is_treated_as_utc(single_registry: PeriodRegistry) -> None:
    naive = compile_schedule(make_request(), single_registry, datetime(2024, 4, 1, 12, 0, 0))
    aware = compile_schedule(make_request(), single_registry, NOW)

    assert naive.text == aware.text


def test_duplicate_dates_are_not_deduplicated(single_registry: PeriodRegistry) -> None:
    request = make_request(raw_dates=("2024-04-10", "2024-04-10"))
    document = compile_schedule(request, single_registry, NOW)

    assert document.event_count == 2
    assert uids(document.text) == ["2024-04-10-1@classcal"] * 2


def test_every_registry_period_starts_before_it_ends(campus_registry: PeriodRegistry) -> None:
    for institution in campus_registry.institutions():
        request = make_request(
            institution_key=institution.key,
            selected_periods=tuple(institution.period_ids),
        )
        for event in vevents(compile_schedule(request, campus_registry, NOW).text):
            start = event.get("DTSTART").dt
            end = event.get("DTEND").dt
            assert start < end
            assert start.date() == end.date()


def test_custom_calendar_config(single_registry: PeriodRegistry) -> None:
    config = CalendarConfig(
        timezone_id="Europe/Warsaw",
        utc_offset="+0100",
        timezone_name="CET",
        uid_domain="example.edu",
        default_location="Main Building",
        filename="classes.ics",
    )
    document = compile_schedule(make_request(), single_registry, NOW, config)

    assert "DTSTART;TZID=Europe/Warsaw:20240410T090000" in document.text
    assert "TZOFFSETTO:+0100" in document.lines
    assert "TZNAME:CET" in document.lines
    assert "UID:2024-04-10-1@example.edu" in document.text
    assert "LOCATION:Main Building" in document.text
    assert document.filename == "classes.ics"


def test_expand_events_builds_local_datetimes(single_registry: PeriodRegistry) -> None:
    request = make_request(raw_dates=("2024/04/10", "bogus"), selected_periods=("2",))
    result = expand_events(request, single_registry.select(None))

    assert result.skipped_dates == 1
    assert len(result.events) == 1
    event = result.events[0]
    assert event.start_local == datetime(2024, 4, 10, 10, 40)
    assert event.end_local == datetime(2024, 4, 10, 12, 10)
    assert event.start_local.tzinfo is None
    assert event.uid("classcal") == "2024-04-10-2@classcal"


def test_concurrent_compiles_agree(single_registry: PeriodRegistry) -> None:
    request = make_request(
        raw_dates=("2024-04-10", "2024-04-17", "2024-04-24"),
        selected_periods=("1", "3"),
    )
    with ThreadPoolExecutor(max_workers=8) as executor:
        futures = [
            executor.submit(compile_schedule, request, single_registry, NOW)
            for _ in range(20)
        ]
        texts = {future.result().text for future in futures}

    assert len(texts) == 1
