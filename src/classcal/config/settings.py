"""Calendar and UI settings.

Defaults live in frozen dataclasses. ``load_calendar_config`` layers a
``.env`` file and then the process environment on top of them.
"""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional, Tuple

from dotenv import dotenv_values

from classcal.config.constants import (
    DEFAULT_ICS_FILENAME,
    DEFAULT_LOCATION,
    DEFAULT_LOCATION_ENV_VAR,
    DEFAULT_TIMEZONE_ID,
    DEFAULT_TIMEZONE_NAME,
    DEFAULT_UTC_OFFSET,
    ICS_PRODID,
    TIMEZONE_ENV_VAR,
    TIMEZONE_NAME_ENV_VAR,
    UID_DOMAIN,
    UID_DOMAIN_ENV_VAR,
    UTC_OFFSET_ENV_VAR,
)
from classcal.utils.timezone_utils import check_declared_offset, parse_utc_offset
from classcal.exceptions.errors import ConfigLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarConfig:
    """Settings that shape the generated calendar document."""

    timezone_id: str = DEFAULT_TIMEZONE_ID
    utc_offset: str = DEFAULT_UTC_OFFSET
    timezone_name: str = DEFAULT_TIMEZONE_NAME
    prodid: str = ICS_PRODID
    uid_domain: str = UID_DOMAIN
    default_location: str = DEFAULT_LOCATION
    filename: str = DEFAULT_ICS_FILENAME


@dataclass(frozen=True)
class UIConfig:
    """Desktop window settings."""

    window_title: str = "University Class Scheduler"
    min_window_size: Tuple[int, int] = (480, 560)
    default_window_size: Tuple[int, int] = (560, 680)
    dates_placeholder: str = "2024-04-10\n2024-04-17\n2024-04-24"


CALENDAR_CONFIG = CalendarConfig()
UI_CONFIG = UIConfig()

# Environment variable -> CalendarConfig field
_ENV_OVERRIDES = {
    TIMEZONE_ENV_VAR: "timezone_id",
    UTC_OFFSET_ENV_VAR: "utc_offset",
    TIMEZONE_NAME_ENV_VAR: "timezone_name",
    UID_DOMAIN_ENV_VAR: "uid_domain",
    DEFAULT_LOCATION_ENV_VAR: "default_location",
}


def _collect_overrides(values: Dict[str, Optional[str]]) -> Dict[str, str]:
    overrides = {}
    for env_var, field_name in _ENV_OVERRIDES.items():
        value = values.get(env_var)
        if value is not None and str(value).strip():
            overrides[field_name] = str(value).strip()
    return overrides


def load_calendar_config(env_file: Optional[Path] = None) -> CalendarConfig:
    """Build the calendar settings from defaults, a .env file and the environment.

    Process environment variables win over the .env file. The file is parsed
    without touching ``os.environ``.

    Args:
        env_file: Optional path to a .env file.

    Returns:
        The resolved CalendarConfig.

    Raises:
        ConfigLoadError: If the configured UTC offset is malformed.
    """
    overrides: Dict[str, str] = {}
    if env_file is not None and Path(env_file).exists():
        overrides.update(_collect_overrides(dotenv_values(env_file)))
    overrides.update(_collect_overrides(dict(os.environ)))

    config = replace(CALENDAR_CONFIG, **overrides)

    try:
        parse_utc_offset(config.utc_offset)
    except ValueError as e:
        raise ConfigLoadError(UTC_OFFSET_ENV_VAR, str(e)) from e

    check_declared_offset(config.timezone_id, config.utc_offset)

    if overrides:
        logger.info("Calendar settings overridden: %s", ", ".join(sorted(overrides)))
    return config
