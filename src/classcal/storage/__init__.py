"""Configuration loading and document delivery for ClassCal."""

from classcal.storage.config_loader import (
    candidate_paths,
    find_periods_file,
    load_registry,
    load_default_registry,
    get_user_periods_path,
    get_bundled_periods_path,
)
from classcal.storage.document_writer import ensure_ics_suffix, write_document

__all__ = [
    "candidate_paths",
    "find_periods_file",
    "load_registry",
    "load_default_registry",
    "get_user_periods_path",
    "get_bundled_periods_path",
    "ensure_ics_suffix",
    "write_document",
]
