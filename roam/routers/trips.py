from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query, Response, status

from roam.core.config import Settings
from roam.db.dal import Database
from roam.models.budget import BudgetIn, BudgetSummary
from roam.models.schedule import DateRange, ScheduleOut
from roam.models.trip import (
    StatusAdvanceIn,
    Trip,
    TripCreate,
    TripDetail,
    TripUpdate,
    trips_from_rows,
)
from roam.routers.deps import get_app_settings, get_db
from roam.services.budget import get_budget_summary, update_trip_budget_amount
from roam.services.schedule import expand_trip
from roam.services.status_pipeline import advance_trip_status, load_trip, next_status

router = APIRouter(prefix="/trips", tags=["trips"])

TripOrder = Literal["id", "start_date", "created_at", "title", "status"]


def _detail(trip: Trip) -> TripDetail:
    return TripDetail(**trip.model_dump(), next_status=next_status(trip.status))


@router.get("", response_model=list[Trip], summary="List trips")
async def list_trips(
    order_by: TripOrder = Query("id", description="Column to order trips by"),
    descending: bool = Query(False, description="Reverse the ordering"),
    db: Database = Depends(get_db),
):
    return trips_from_rows(db.list_trips(order_by=order_by, descending=descending))


@router.post(
    "",
    response_model=TripDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create trip",
)
async def create_trip(payload: TripCreate, db: Database = Depends(get_db)):
    trip_id = db.create_trip(
        title=payload.title,
        destination=payload.destination,
        status=payload.status.value,
        start_date=payload.start_date,
        end_date=payload.end_date,
        notes=payload.notes,
        cover_image=payload.cover_image,
    )
    return _detail(load_trip(db, trip_id))


@router.get("/{trip_id}", response_model=TripDetail, summary="Get trip details")
async def get_trip(trip_id: int, db: Database = Depends(get_db)):
    return _detail(load_trip(db, trip_id))


@router.patch("/{trip_id}", response_model=TripDetail, summary="Update trip details")
async def update_trip(
    trip_id: int, payload: TripUpdate, db: Database = Depends(get_db)
):
    current = load_trip(db, trip_id)
    updates = {
        field: getattr(payload, field) for field in payload.model_fields_set
    }
    # validate the resulting pair, not just the fields sent
    DateRange.from_optional(
        updates.get("start_date", current.start_date),
        updates.get("end_date", current.end_date),
    )
    db.update_trip(trip_id, **updates)
    return _detail(load_trip(db, trip_id))


@router.delete(
    "/{trip_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete trip with its expenses, documents and photos",
)
async def delete_trip(trip_id: int, db: Database = Depends(get_db)):
    db.delete_trip(trip_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{trip_id}/status", response_model=TripDetail, summary="Advance trip status"
)
async def advance_status(
    trip_id: int, payload: StatusAdvanceIn, db: Database = Depends(get_db)
):
    return _detail(advance_trip_status(db, trip_id, payload.status))


@router.get(
    "/{trip_id}/budget", response_model=BudgetSummary, summary="Budget summary"
)
async def budget_summary(
    trip_id: int,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    return get_budget_summary(db, trip_id, warn_pct=settings.budget_warn_pct)


@router.put(
    "/{trip_id}/budget",
    response_model=BudgetSummary,
    summary="Set trip budget (major units)",
)
async def set_budget(
    trip_id: int,
    payload: BudgetIn,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    update_trip_budget_amount(db, trip_id, payload.amount)
    return get_budget_summary(db, trip_id, warn_pct=settings.budget_warn_pct)


@router.get(
    "/{trip_id}/schedule",
    response_model=ScheduleOut,
    summary="Calendar marks for one trip",
)
async def trip_schedule(trip_id: int, db: Database = Depends(get_db)):
    return ScheduleOut(marks=expand_trip(load_trip(db, trip_id)))
