"""Exception types for ClassCal."""

from typing import Optional


class ClassCalError(Exception):
    """Base class for all ClassCal errors."""


class ConfigLoadError(ClassCalError):
    """The period configuration or calendar settings could not be loaded.

    Raised at startup. Generation stays disabled for the rest of the session.
    """

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load configuration from {source}: {reason}")


class ScheduleValidationError(ClassCalError):
    """A schedule request was rejected and no document was produced."""

    kind = "ValidationError"
    default_message = "The schedule request is invalid."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class MissingInstitutionError(ScheduleValidationError):
    kind = "MissingInstitution"
    default_message = "No institution selected."


class MissingClassNameError(ScheduleValidationError):
    kind = "MissingClassName"
    default_message = "Class name is empty."


class MissingDatesError(ScheduleValidationError):
    kind = "MissingDates"
    default_message = "No dates entered."


class MissingPeriodsError(ScheduleValidationError):
    kind = "MissingPeriods"
    default_message = "No periods selected."


class EmptyResultError(ScheduleValidationError):
    """Every date was unparseable or every period unmapped."""

    kind = "EmptyResult"
    default_message = "No valid (date, period) combination produced an event."

    def __init__(self, skipped_dates: int = 0, skipped_periods: int = 0):
        self.skipped_dates = skipped_dates
        self.skipped_periods = skipped_periods
        super().__init__(
            f"{self.default_message} "
            f"Skipped {skipped_dates} date(s) and {skipped_periods} period(s)."
        )
