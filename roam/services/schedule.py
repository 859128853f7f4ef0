"""Calendar schedule: per-day marks for trip date ranges.

Two jobs:

* Range expansion. Every dated trip is expanded into one `DayMark` per
  calendar day (inclusive) and the per-trip maps are folded into a single
  day -> mark mapping. When trips overlap, the `combine(existing, incoming)`
  argument decides the winner; the default `last_write_wins` keeps the mark of
  the trip that appears later in the input, so callers control which trip owns
  a shared day through the order they pass trips in.
* Two-tap range selection used when creating a trip, plus the preview marks
  shown while picking.

Day stepping is injected (`step`) and defaults to whole calendar days on naive
`date` values; there is no clock or timezone involved anywhere here.
"""

from __future__ import annotations

from datetime import date, timedelta
from functools import reduce
from typing import Callable, Dict, Iterable, Iterator, Mapping, Optional

from roam.core.errors import MissingDateRange
from roam.db.dal import Database
from roam.models.constants import (
    SELECTION_ENDPOINT_COLOR,
    SELECTION_INTERIOR_COLOR,
    STATUS_COLORS,
)
from roam.models.schedule import DateRange, DayMark, PendingRange
from roam.models.trip import Trip, trips_from_rows
from roam.services.status_pipeline import StatusLike, parse_status

ONE_DAY = timedelta(days=1)

DayStep = Callable[[date], date]
MarkCombiner = Callable[[DayMark, DayMark], DayMark]
ScheduleMap = Dict[date, DayMark]


def next_day(day: date) -> date:
    return day + ONE_DAY


def iter_days(date_range: DateRange, step: DayStep = next_day) -> Iterator[date]:
    day = date_range.start
    while day <= date_range.end:
        yield day
        day = step(day)


def color_for(status: StatusLike) -> str:
    return STATUS_COLORS[parse_status(status)]


def expand_trip(trip: Trip, step: DayStep = next_day) -> ScheduleMap:
    date_range = trip.date_range
    if date_range is None:
        raise MissingDateRange(f"trip {trip.id} has no start and end date")
    color = color_for(trip.status)
    return {
        day: DayMark(
            is_range_start=day == date_range.start,
            is_range_end=day == date_range.end,
            color=color,
            status=trip.status,
            trip_id=trip.id,
        )
        for day in iter_days(date_range, step)
    }


def last_write_wins(existing: DayMark, incoming: DayMark) -> DayMark:
    return incoming


def merge_marks(
    acc: Mapping[date, DayMark],
    marks: Mapping[date, DayMark],
    combine: MarkCombiner = last_write_wins,
) -> ScheduleMap:
    merged = dict(acc)
    for day, mark in marks.items():
        merged[day] = combine(merged[day], mark) if day in merged else mark
    return merged


def expand_schedule(
    trips: Iterable[Trip],
    combine: MarkCombiner = last_write_wins,
    step: DayStep = next_day,
) -> ScheduleMap:
    """Fold all dated trips into one day -> mark map; undated trips are skipped."""
    dated = (t for t in trips if t.start_date and t.end_date)
    return reduce(
        lambda acc, trip: merge_marks(acc, expand_trip(trip, step), combine),
        dated,
        {},
    )


def lookup_trip_for_day(marks: Mapping[date, DayMark], day: date) -> Optional[int]:
    mark = marks.get(day)
    return mark.trip_id if mark else None


# ---------------------------------------------------------------------------
# Two-tap range selection


def select_day(pending: PendingRange, day: date) -> PendingRange:
    """Apply one tap to the pending selection.

    - nothing picked yet, or a range already complete: start over at `day`
    - start picked and `day` is earlier: `day` becomes the new start
    - start picked otherwise: complete the range (same day allowed)
    """
    if pending.start is None or pending.end is not None:
        return PendingRange(start=day)
    if day < pending.start:
        return PendingRange(start=day)
    return PendingRange(start=pending.start, end=day)


def preview_marks(pending: PendingRange, step: DayStep = next_day) -> ScheduleMap:
    if pending.start is None:
        return {}
    if pending.end is None:
        return {
            pending.start: DayMark(
                is_range_start=True,
                is_range_end=False,
                color=SELECTION_ENDPOINT_COLOR,
            )
        }
    date_range = DateRange(pending.start, pending.end)
    marks: ScheduleMap = {}
    for day in iter_days(date_range, step):
        is_start = day == date_range.start
        is_end = day == date_range.end
        marks[day] = DayMark(
            is_range_start=is_start,
            is_range_end=is_end,
            color=SELECTION_ENDPOINT_COLOR
            if is_start or is_end
            else SELECTION_INTERIOR_COLOR,
        )
    return marks


# ---------------------------------------------------------------------------
# Store glue


def load_schedule(
    db: Database,
    order_by: str = "id",
    descending: bool = False,
    combine: MarkCombiner = last_write_wins,
) -> ScheduleMap:
    trips = trips_from_rows(db.list_trips(order_by=order_by, descending=descending))
    return expand_schedule(trips, combine=combine)


__all__ = [
    "next_day",
    "iter_days",
    "color_for",
    "expand_trip",
    "last_write_wins",
    "merge_marks",
    "expand_schedule",
    "lookup_trip_for_day",
    "select_day",
    "preview_marks",
    "load_schedule",
]
