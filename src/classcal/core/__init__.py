"""Core business logic for ClassCal."""

from classcal.core.registry import Institution, PeriodRegistry, PeriodTime
from classcal.core.schedule_model import ClassEvent, ScheduleRequest
from classcal.core.ics_builder import CalendarDocument, compile_schedule, expand_events

__all__ = [
    "Institution",
    "PeriodRegistry",
    "PeriodTime",
    "ClassEvent",
    "ScheduleRequest",
    "CalendarDocument",
    "compile_schedule",
    "expand_events",
]
