from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator

from roam.core.config import Settings
from roam.db.dal import Database
from roam.models.trip import trips_from_rows
from roam.routers.deps import get_app_settings, get_db
from roam.services.assistant import GREETING, TextGenerator, ask, make_text_generator

router = APIRouter(prefix="/assistant", tags=["assistant"])


class ChatIn(BaseModel):
    message: str

    @field_validator("message")
    @classmethod
    def _message_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("message cannot be empty")
        return value.strip()


class ChatOut(BaseModel):
    reply: str


def get_text_generator(settings: Settings = Depends(get_app_settings)) -> TextGenerator:
    return make_text_generator(settings)


@router.get("/greeting", response_model=ChatOut, summary="Assistant opening line")
async def greeting():
    return ChatOut(reply=GREETING)


@router.post("/chat", response_model=ChatOut, summary="Ask the travel assistant")
def chat(
    payload: ChatIn,
    db: Database = Depends(get_db),
    generator: TextGenerator = Depends(get_text_generator),
):
    trips = trips_from_rows(db.list_trips())
    return ChatOut(reply=ask(generator, trips, payload.message))
