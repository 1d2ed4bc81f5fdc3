"""Centralized constants for ClassCal.

Everything the compiler writes into a calendar document that is not user
input lives here, together with the names of the environment variables the
settings layer reads.
"""

# Application identity
APP_NAME = "ClassCal"

# ICS calendar constants
ICS_PRODID = "-//ClassCal//University Class Scheduler//EN"
ICS_VERSION = "2.0"
ICS_MIME_TYPE = "text/calendar; charset=utf-8"
ICS_EXTENSION = ".ics"
DEFAULT_ICS_FILENAME = "schedule.ics"
UID_DOMAIN = "classcal"

# The fixed civil timezone every event is qualified with
DEFAULT_TIMEZONE_ID = "Asia/Tokyo"
DEFAULT_UTC_OFFSET = "+0900"
DEFAULT_TIMEZONE_NAME = "JST"
VTIMEZONE_STANDARD_START = (1939, 1, 1)

# Event text templates
PERIOD_LABEL_TEMPLATE = "{period}限"
SUMMARY_TEMPLATE = "{prefix}{class_label} ({period_label})"
SUMMARY_PREFIX_TEMPLATE = "{name}: "
DESCRIPTION_TEMPLATE = "授業「{class_label}」の予定"
DEFAULT_LOCATION = "Campus"

# Configuration resource
PERIODS_FILENAME = "periods.json"
BUNDLED_PERIODS_RESOURCE = "data/periods.json"

# Environment variable names
PERIODS_FILE_ENV_VAR = "CLASSCAL_PERIODS_FILE"
TIMEZONE_ENV_VAR = "CLASSCAL_TIMEZONE"
UTC_OFFSET_ENV_VAR = "CLASSCAL_UTC_OFFSET"
TIMEZONE_NAME_ENV_VAR = "CLASSCAL_TIMEZONE_NAME"
UID_DOMAIN_ENV_VAR = "CLASSCAL_UID_DOMAIN"
DEFAULT_LOCATION_ENV_VAR = "CLASSCAL_DEFAULT_LOCATION"

# Status messages shown by the front ends
STATUS_READY = "Select the periods and paste one date per line."
STATUS_SAVED = "Saved {count} event(s) to {path}."
STATUS_CANCELLED = "Save cancelled."
STATUS_CONFIG_FAILED = "Could not load the period configuration: {error}"
