from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

DocumentType = Literal["transport", "stay", "activity"]


class DocumentIn(BaseModel):
    type: DocumentType = "transport"
    title: str
    subtitle: Optional[str] = None
    link: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("title cannot be empty")
        return value.strip()

    @field_validator("subtitle", "link")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()


class Document(DocumentIn):
    model_config = ConfigDict(from_attributes=True)

    id: int
    trip_id: int
