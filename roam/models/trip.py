from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .constants import TripStatus
from .schedule import DateRange


def _not_blank(value: str, field: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{field} cannot be empty")
    return value.strip()


class TripBase(BaseModel):
    title: str
    destination: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None
    cover_image: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        return _not_blank(value, "title")

    @field_validator("destination")
    @classmethod
    def _destination_not_blank(cls, value: str) -> str:
        return _not_blank(value, "destination")

    @model_validator(mode="after")
    def _dates_consistent(self) -> "TripBase":
        if self.end_date and not self.start_date:
            raise ValueError("end_date requires start_date")
        if self.end_date and self.start_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class TripCreate(TripBase):
    status: TripStatus = TripStatus.IDEATED


class TripUpdate(BaseModel):
    """Partial update. Status and budget have dedicated endpoints."""

    title: Optional[str] = None
    destination: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None
    cover_image: Optional[str] = None

    @model_validator(mode="after")
    def _at_least_one(self) -> "TripUpdate":
        if not self.model_fields_set:
            raise ValueError("at least one field must be provided")
        for required in ("title", "destination"):
            if required in self.model_fields_set and getattr(self, required) is None:
                raise ValueError(f"{required} cannot be cleared")
        return self

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: Optional[str]) -> Optional[str]:
        return _not_blank(value, "title") if value is not None else None

    @field_validator("destination")
    @classmethod
    def _destination_not_blank(cls, value: Optional[str]) -> Optional[str]:
        return _not_blank(value, "destination") if value is not None else None


class Trip(TripBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: TripStatus = TripStatus.IDEATED
    budget: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def date_range(self) -> Optional[DateRange]:
        return DateRange.from_optional(self.start_date, self.end_date)


class TripDetail(Trip):
    next_status: Optional[TripStatus] = None


class StatusAdvanceIn(BaseModel):
    status: str


def trip_from_row(row: Dict[str, Any]) -> Trip:
    start_raw = row.get("start_date")
    end_raw = row.get("end_date")
    created_raw = row.get("created_at")
    return Trip(
        id=int(row["id"]),
        title=row["title"],
        destination=row["destination"],
        status=row["status"],
        start_date=date.fromisoformat(start_raw) if start_raw else None,
        end_date=date.fromisoformat(end_raw) if end_raw else None,
        budget=row.get("budget"),
        notes=row.get("notes"),
        cover_image=row.get("cover_image"),
        created_at=datetime.fromisoformat(created_raw.replace("Z", ""))
        if isinstance(created_raw, str)
        else created_raw,
    )


def trips_from_rows(rows: List[Dict[str, Any]]) -> List[Trip]:
    return [trip_from_row(r) for r in rows]
