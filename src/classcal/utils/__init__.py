"""Utility functions for ClassCal."""

from classcal.utils.date_parsing import parse_civil_time, parse_class_date, split_date_lines
from classcal.utils.paths import get_resource_path, get_user_config_dir
from classcal.utils.timezone_utils import parse_utc_offset, to_utc_stamp

__all__ = [
    "parse_civil_time",
    "parse_class_date",
    "split_date_lines",
    "get_resource_path",
    "get_user_config_dir",
    "parse_utc_offset",
    "to_utc_stamp",
]
