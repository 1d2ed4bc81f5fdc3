"""Period registry: period identifiers mapped to civil start/end times."""

import logging
from dataclasses import dataclass, field
from datetime import time
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from classcal.config.constants import PERIOD_LABEL_TEMPLATE
from classcal.utils.date_parsing import parse_civil_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeriodTime:
    """Start and end wall-clock time of one period."""

    start: time
    end: time

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError(
                f"Period start {self.start:%H:%M} must be before end {self.end:%H:%M}"
            )

    @classmethod
    def from_dict(cls, data: Mapping) -> "PeriodTime":
        """Create a PeriodTime from {"start": "HH:MM", "end": "HH:MM"}.

        Raises:
            ValueError: If a field is missing or malformed.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Period times must be an object, got {type(data).__name__}")
        missing = {"start", "end"} - set(data.keys())
        if missing:
            raise ValueError(f"Period times missing fields: {sorted(missing)}")
        return cls(start=parse_civil_time(data["start"]), end=parse_civil_time(data["end"]))

    @property
    def label(self) -> str:
        return f"{self.start:%H:%M}-{self.end:%H:%M}"


def period_sort_key(period_id: str):
    """Order period ids numerically, anything non-numeric last."""
    text = str(period_id)
    return (0, int(text), "") if text.isdigit() else (1, 0, text)


def period_label(period_id: str) -> str:
    return PERIOD_LABEL_TEMPLATE.format(period=period_id)


def _validate_period_id(period_id) -> str:
    text = str(period_id).strip()
    if not text.isdigit() or int(text) <= 0:
        raise ValueError(f"Period id must be a positive integer, got '{period_id}'")
    return text


def parse_period_table(data: Mapping) -> Mapping[str, PeriodTime]:
    """Parse a period-id -> times object into an immutable, ordered table.

    Raises:
        ValueError: On any malformed entry or duplicate id.
    """
    if not isinstance(data, Mapping) or not data:
        raise ValueError("Period table must be a non-empty object")

    table: Dict[str, PeriodTime] = {}
    for raw_id, times in data.items():
        period_id = _validate_period_id(raw_id)
        if period_id in table:
            raise ValueError(f"Duplicate period id '{period_id}'")
        try:
            table[period_id] = PeriodTime.from_dict(times)
        except ValueError as e:
            raise ValueError(f"Period {period_id}: {e}") from e

    ordered = {pid: table[pid] for pid in sorted(table, key=period_sort_key)}
    return MappingProxyType(ordered)


@dataclass(frozen=True)
class Institution:
    """A named period table with a postal address.

    The single-table configuration is represented by an institution with an
    empty key, name and address.
    """

    key: str
    name: str
    address: str
    periods: Mapping[str, PeriodTime] = field(default_factory=lambda: MappingProxyType({}))

    def lookup(self, period_id: str) -> Optional[PeriodTime]:
        return self.periods.get(str(period_id))

    @property
    def period_ids(self) -> List[str]:
        return list(self.periods.keys())

    @classmethod
    def from_dict(cls, key: str, data: Mapping) -> "Institution":
        if not isinstance(data, Mapping):
            raise ValueError(f"Institution '{key}' must be an object")
        if "periods" not in data:
            raise ValueError(f"Institution '{key}' has no periods")
        try:
            periods = parse_period_table(data["periods"])
        except ValueError as e:
            raise ValueError(f"Institution '{key}': {e}") from e
        return cls(
            key=str(key),
            name=str(data.get("name") or key),
            address=str(data.get("address") or ""),
            periods=periods,
        )


class PeriodRegistry:
    """Immutable lookup of period times, optionally scoped by institution."""

    def __init__(
        self,
        institutions: Optional[Mapping[str, Institution]] = None,
        periods: Optional[Mapping[str, PeriodTime]] = None,
    ):
        if (institutions is None) == (periods is None):
            raise ValueError("Provide either institutions or a single period table")

        if institutions is not None:
            self._institutions = MappingProxyType(dict(institutions))
            self._default: Optional[Institution] = None
        else:
            self._institutions = MappingProxyType({})
            self._default = Institution(
                key="", name="", address="", periods=MappingProxyType(dict(periods))
            )

    @property
    def is_institution_scoped(self) -> bool:
        return self._default is None

    def institutions(self) -> List[Institution]:
        """Institutions in configuration order (empty for a single table)."""
        return list(self._institutions.values())

    def select(self, institution_key: Optional[str] = None) -> Optional[Institution]:
        """Return the period table the compiler should use.

        For a single-table registry the key is ignored.
        """
        if self._default is not None:
            return self._default
        if not institution_key:
            return None
        return self._institutions.get(institution_key)

    def lookup(self, period_id: str, institution_key: Optional[str] = None) -> Optional[PeriodTime]:
        """Look up a period's times. Absent means the caller should skip it."""
        institution = self.select(institution_key)
        if institution is None:
            return None
        return institution.lookup(period_id)

    @classmethod
    def from_dict(cls, data: Mapping) -> "PeriodRegistry":
        """Build a registry from either configuration shape.

        Args:
            data: Either {"1": {"start", "end"}, ...} or
                {"key": {"name", "address", "periods": {...}}, ...}.

        Returns:
            The registry.

        Raises:
            ValueError: If the data matches neither shape or is malformed.
        """
        if not isinstance(data, Mapping) or not data:
            raise ValueError("Configuration must be a non-empty object")

        scoped = [isinstance(v, Mapping) and "periods" in v for v in data.values()]
        if all(scoped):
            institutions = {
                str(key): Institution.from_dict(str(key), value)
                for key, value in data.items()
            }
            logger.debug("Loaded %d institution(s)", len(institutions))
            return cls(institutions=institutions)
        if any(scoped):
            raise ValueError("Configuration mixes institutions and bare periods")

        periods = parse_period_table(data)
        logger.debug("Loaded single period table with %d period(s)", len(periods))
        return cls(periods=periods)
