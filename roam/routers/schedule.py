from datetime import date

from fastapi import APIRouter, Depends, Query

from roam.db.dal import Database
from roam.models.schedule import (
    DayLookupOut,
    ScheduleOut,
    SelectionIn,
    SelectionOut,
)
from roam.routers.deps import get_db
from roam.routers.trips import TripOrder
from roam.services.schedule import (
    load_schedule,
    lookup_trip_for_day,
    preview_marks,
    select_day,
)

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.get("", response_model=ScheduleOut, summary="Calendar marks for all trips")
async def get_schedule(
    order_by: TripOrder = Query(
        "id", description="Trip order; on overlapping days the later trip wins"
    ),
    descending: bool = Query(False),
    db: Database = Depends(get_db),
):
    marks = load_schedule(db, order_by=order_by, descending=descending)
    return ScheduleOut(marks=dict(sorted(marks.items())))


@router.get("/{day}", response_model=DayLookupOut, summary="Trip owning a day")
async def lookup_day(
    day: date,
    order_by: TripOrder = Query("id"),
    descending: bool = Query(False),
    db: Database = Depends(get_db),
):
    marks = load_schedule(db, order_by=order_by, descending=descending)
    return DayLookupOut(day=day, trip_id=lookup_trip_for_day(marks, day))


@router.post(
    "/selection",
    response_model=SelectionOut,
    summary="Apply one tap to a pending date range selection",
)
async def select(payload: SelectionIn):
    pending = select_day(payload.pending, payload.day)
    return SelectionOut(
        pending=pending,
        complete=pending.end is not None,
        marks=preview_marks(pending),
    )
