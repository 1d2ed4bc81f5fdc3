"""Custom exceptions for ClassCal."""

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

__all__ = [
    "ClassCalError",
    "ConfigLoadError",
    "ScheduleValidationError",
    "MissingInstitutionError",
    "MissingClassNameError",
    "MissingDatesError",
    "MissingPeriodsError",
    "EmptyResultError",
]
