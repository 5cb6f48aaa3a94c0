"""Data models for date-range filtering."""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Tuple

from spendtrack.utils.exceptions import ValidationError


class FilterMode(str, Enum):
    """Reporting window selected in the expense list."""
    ALL = "all"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class DateRange:
    """Calendar-date range, inclusive on both ends."""
    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise ValidationError(f"Range start {self.start} is after end {self.end}")

    @property
    def days(self) -> int:
        """Number of calendar days covered, both ends included."""
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def as_params(self) -> Tuple[str, str]:
        """ISO strings for a `date BETWEEN ? AND ?` query."""
        return self.start.isoformat(), self.end.isoformat()
