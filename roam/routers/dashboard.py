from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from roam.db.dal import Database
from roam.models.constants import TripStatus
from roam.models.trip import Trip, trips_from_rows
from roam.routers.deps import get_db
from roam.services.overview import build_overview

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class DashboardOut(BaseModel):
    today: date
    next_trip: Optional[Trip] = None
    days_until_next: Optional[int] = None
    ideated: List[Trip]
    planned: List[Trip]
    confirmed: List[Trip]


@router.get("", response_model=DashboardOut, summary="Trips grouped by status")
async def dashboard(
    today: Optional[date] = Query(
        None, description="Reference day for the next trip (defaults to server date)"
    ),
    db: Database = Depends(get_db),
):
    trips = trips_from_rows(db.list_trips(order_by="start_date", descending=True))
    overview = build_overview(trips, today or date.today())
    return DashboardOut(
        today=overview.today,
        next_trip=overview.next_trip,
        days_until_next=overview.days_until_next,
        ideated=overview.groups[TripStatus.IDEATED],
        planned=overview.groups[TripStatus.PLANNED],
        confirmed=overview.groups[TripStatus.CONFIRMED],
    )
