"""
ClassCal - University Class Schedule to iCalendar

Turns a list of class dates and the selected class periods of an
institution's timetable into an .ics file any calendar application can
import.
"""

__version__ = "1.0.0"

# Public API - import commonly used components
from classcal.config.settings import CALENDAR_CONFIG, CalendarConfig
from classcal.exceptions.errors import (
    ClassCalError,
    ConfigLoadError,
    ScheduleValidationError,
    MissingInstitutionError,
    MissingClassNameError,
    MissingDatesError,
    MissingPeriodsError,
    EmptyResultError,
)
from classcal.core.registry import Institution, PeriodRegistry, PeriodTime
from classcal.core.schedule_model import ScheduleRequest
from classcal.core.ics_builder import CalendarDocument, compile_schedule

__all__ = [
    # Version
    "__version__",
    # Config
    "CALENDAR_CONFIG",
    "CalendarConfig",
    # Exceptions
    "ClassCalError",
    "ConfigLoadError",
    "ScheduleValidationError",
    "MissingInstitutionError",
    "MissingClassNameError",
    "MissingDatesError",
    "MissingPeriodsError",
    "EmptyResultError",
    # Core
    "Institution",
    "PeriodRegistry",
    "PeriodTime",
    "ScheduleRequest",
    "CalendarDocument",
    "compile_schedule",
]
