"""Dashboard overview: trips grouped by lifecycle stage and the next trip.

`today` is always passed in by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional

from roam.models.constants import STATUS_ORDER, TripStatus
from roam.models.trip import Trip


def group_by_status(trips: Iterable[Trip]) -> Dict[TripStatus, List[Trip]]:
    groups: Dict[TripStatus, List[Trip]] = {status: [] for status in STATUS_ORDER}
    for trip in trips:
        groups[trip.status].append(trip)
    return groups


def next_trip(trips: Iterable[Trip], today: date) -> Optional[Trip]:
    """Earliest-starting confirmed trip that has not ended before `today`."""
    upcoming = [
        t
        for t in trips
        if t.status == TripStatus.CONFIRMED
        and t.date_range is not None
        and t.date_range.end >= today
    ]
    if not upcoming:
        return None
    return min(upcoming, key=lambda t: (t.date_range.start, t.id))


@dataclass(frozen=True)
class Overview:
    today: date
    next_trip: Optional[Trip]
    days_until_next: Optional[int]
    groups: Dict[TripStatus, List[Trip]] = field(default_factory=dict)


def build_overview(trips: Iterable[Trip], today: date) -> Overview:
    trips = list(trips)
    upcoming = next_trip(trips, today)
    days_until = None
    if upcoming is not None:
        days_until = max((upcoming.date_range.start - today).days, 0)
    return Overview(
        today=today,
        next_trip=upcoming,
        days_until_next=days_until,
        groups=group_by_status(trips),
    )
