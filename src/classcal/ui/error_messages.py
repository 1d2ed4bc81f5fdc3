"""User-friendly error message handling."""

from classcal.exceptions.errors import (
    ConfigLoadError,
    EmptyResultError,
    ScheduleValidationError,
)


# Error kind -> message shown to the user
ERROR_MAPPINGS = {
    "MissingInstitution": "Please select an institution.",
    "MissingClassName": "Please enter a class name.",
    "MissingDates": "Please enter at least one date (one per line).",
    "MissingPeriods": "Please select at least one period.",
    "EmptyResult": (
        "No calendar file was created: none of the dates could be read, or the "
        "selected periods are not defined for this institution. "
        "Check the date format (YYYY-MM-DD) and the period selection."
    ),
}


def get_user_friendly_error(error: Exception) -> str:
    """Convert an exception to a user-friendly error message.

    Args:
        error: The exception to convert.

    Returns:
        A user-friendly error message string.
    """
    if isinstance(error, ConfigLoadError):
        return (
            f"The period configuration could not be loaded ({error.reason}). "
            "Calendar generation is disabled."
        )

    if isinstance(error, EmptyResultError):
        return ERROR_MAPPINGS[EmptyResultError.kind]

    if isinstance(error, ScheduleValidationError):
        return ERROR_MAPPINGS.get(error.kind, str(error))

    # Default message
    return f"An error occurred: {str(error)}"

