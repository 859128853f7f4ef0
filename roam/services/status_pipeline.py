"""Trip lifecycle: ideated -> planned -> confirmed, forward only.

`next_status` and `advance` are pure; `advance_trip_status` is the store glue
used by the API. Deletion is not a status: it is legal from any stage and
handled by the store's cascade.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from roam.core.errors import InvalidTransition, NotFound
from roam.db.dal import Database
from roam.models.constants import STATUS_ORDER, TripStatus
from roam.models.trip import Trip, trip_from_row

logger = logging.getLogger("roam.status")

StatusLike = Union[TripStatus, str]


def parse_status(value: StatusLike) -> TripStatus:
    try:
        return TripStatus(value)
    except ValueError:
        raise InvalidTransition(f"unknown trip status {value!r}") from None


def next_status(current: StatusLike) -> Optional[TripStatus]:
    """Return the single legal successor of `current`, or None when terminal."""
    rank = parse_status(current).rank
    if rank + 1 < len(STATUS_ORDER):
        return STATUS_ORDER[rank + 1]
    return None


def advance(trip: Trip, requested: StatusLike) -> Trip:
    """Move `trip` to `requested` if that is its next status.

    Returns a copy with only ``status`` changed. Anything else, including
    repeating an advance that already happened, raises InvalidTransition.
    """
    target = parse_status(requested)
    expected = next_status(trip.status)
    if expected is None:
        raise InvalidTransition(
            f"trip {trip.id} is {trip.status.value}; no further status is available"
        )
    if target != expected:
        raise InvalidTransition(
            f"trip {trip.id} cannot move from {trip.status.value} to {target.value}; "
            f"next status is {expected.value}"
        )
    return trip.model_copy(update={"status": target})


def load_trip(db: Database, trip_id: int) -> Trip:
    row = db.get_trip(trip_id)
    if not row:
        raise NotFound(f"trip {trip_id} not found")
    return trip_from_row(row)


def advance_trip_status(db: Database, trip_id: int, requested: StatusLike) -> Trip:
    trip = load_trip(db, trip_id)
    updated = advance(trip, requested)
    db.update_trip_status(trip_id, updated.status.value)
    logger.info(
        "trip %s advanced %s -> %s", trip_id, trip.status.value, updated.status.value
    )
    return load_trip(db, trip_id)


__all__ = [
    "parse_status",
    "next_status",
    "advance",
    "load_trip",
    "advance_trip_status",
]
