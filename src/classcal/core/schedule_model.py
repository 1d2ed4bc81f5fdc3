"""Data model for schedule requests and the class events they expand into."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Tuple

from classcal.utils.date_parsing import clean_date_entries, split_date_lines


def _as_entries(values) -> tuple:
    """Tuple of entries; a single string or int counts as one entry."""
    if not values:
        return ()
    if isinstance(values, (str, int)):
        return (values,)
    return tuple(values)


@dataclass(frozen=True)
class ScheduleRequest:
    """Everything the user entered for one compile call."""

    class_label: str
    raw_dates: Tuple[str, ...]
    selected_periods: Tuple[str, ...]
    location_override: Optional[str] = None
    institution_key: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "class_label", (self.class_label or "").strip())
        object.__setattr__(self, "raw_dates", _as_entries(self.raw_dates))
        object.__setattr__(
            self, "selected_periods", tuple(str(p) for p in _as_entries(self.selected_periods))
        )

    @classmethod
    def from_form(
        cls,
        class_label: str,
        dates_text: str,
        selected_periods: Iterable[str],
        location_override: Optional[str] = None,
        institution_key: Optional[str] = None,
    ) -> "ScheduleRequest":
        """Create a request from raw form values.

        Args:
            class_label: Class name as typed.
            dates_text: One date per line, blank lines allowed.
            selected_periods: Checked period ids.
            location_override: Optional location typed by the user.
            institution_key: Selected institution, if any.

        Returns:
            A ScheduleRequest.
        """
        return cls(
            class_label=class_label,
            raw_dates=tuple(split_date_lines(dates_text)),
            selected_periods=tuple(selected_periods),
            location_override=location_override,
            institution_key=institution_key or None,
        )

    @property
    def date_entries(self) -> Tuple[str, ...]:
        """Raw dates with blank entries trimmed away."""
        return tuple(clean_date_entries(self.raw_dates))

    @property
    def location(self) -> Optional[str]:
        if self.location_override and self.location_override.strip():
            return self.location_override.strip()
        return None


@dataclass(frozen=True)
class ClassEvent:
    """One (date, period) occurrence, in naive local civil time."""

    date: date
    period: str
    start_local: datetime
    end_local: datetime

    def uid(self, domain: str) -> str:
        return f"{self.date.isoformat()}-{self.period}@{domain}"
