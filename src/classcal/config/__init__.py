"""Configuration module for ClassCal."""

from classcal.config.settings import (
    CALENDAR_CONFIG,
    UI_CONFIG,
    CalendarConfig,
    UIConfig,
    load_calendar_config,
)
from classcal.config.constants import (
    ICS_PRODID,
    ICS_MIME_TYPE,
    DEFAULT_ICS_FILENAME,
    PERIODS_FILE_ENV_VAR,
)

__all__ = [
    "CALENDAR_CONFIG",
    "UI_CONFIG",
    "CalendarConfig",
    "UIConfig",
    "load_calendar_config",
    "ICS_PRODID",
    "ICS_MIME_TYPE",
    "DEFAULT_ICS_FILENAME",
    "PERIODS_FILE_ENV_VAR",
]
