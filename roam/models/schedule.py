from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict

from roam.core.errors import InvalidDateRange
from .constants import TripStatus


@dataclass(frozen=True)
class DateRange:
    """Inclusive span of whole calendar days; ``start <= end`` always holds."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidDateRange(
                f"end date {self.end.isoformat()} is before start date {self.start.isoformat()}"
            )

    @classmethod
    def from_optional(
        cls, start: Optional[date], end: Optional[date]
    ) -> Optional["DateRange"]:
        """Return a range when both days are present, ``None`` when neither is.

        An end day without a start day is malformed and rejected.
        """
        if end is not None and start is None:
            raise InvalidDateRange("end date requires a start date")
        if start is None or end is None:
            return None
        return cls(start, end)

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


class DayMark(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_range_start: bool
    is_range_end: bool
    color: str
    status: Optional[TripStatus] = None
    trip_id: Optional[int] = None


class PendingRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Optional[date] = None
    end: Optional[date] = None


class SelectionIn(BaseModel):
    pending: PendingRange = PendingRange()
    day: date


class SelectionOut(BaseModel):
    pending: PendingRange
    complete: bool
    marks: dict[date, DayMark]


class ScheduleOut(BaseModel):
    marks: dict[date, DayMark]


class DayLookupOut(BaseModel):
    day: date
    trip_id: Optional[int] = None
