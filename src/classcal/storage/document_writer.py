"""Writing compiled calendar documents to disk."""

import logging
from pathlib import Path
from typing import Union

from classcal.config.constants import ICS_EXTENSION
from classcal.core.ics_builder import CalendarDocument

logger = logging.getLogger(__name__)


def ensure_ics_suffix(path: Union[str, Path]) -> Path:
    """Append .ics unless the path already ends with it (case-insensitive)."""
    path = Path(path)
    if path.suffix.lower() != ICS_EXTENSION:
        path = path.with_name(path.name + ICS_EXTENSION)
    return path


def write_document(document: CalendarDocument, output_path: Union[str, Path]) -> Path:
    """Write a calendar document as UTF-8 bytes.

    Args:
        document: The compiled document.
        output_path: Target file path. A directory gets the document's
            suggested filename appended.

    Returns:
        The path actually written.
    """
    target = Path(output_path).expanduser()
    if target.is_dir():
        target = target / document.filename
    target = ensure_ics_suffix(target)

    target.parent.mkdir(parents=True, exist_ok=True)
    # Binary mode keeps the CRLF line endings intact on every platform
    with open(target, "wb") as f:
        f.write(document.to_bytes())

    logger.info("Wrote %d event(s) to %s", document.event_count, target)
    return target
