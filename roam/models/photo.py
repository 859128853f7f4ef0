from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class PhotoIn(BaseModel):
    uri: str
    caption: Optional[str] = None

    @field_validator("uri")
    @classmethod
    def _uri_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("uri cannot be empty")
        return value.strip()


class Photo(PhotoIn):
    model_config = ConfigDict(from_attributes=True)

    id: int
    trip_id: int
    created_at: Optional[int] = None
