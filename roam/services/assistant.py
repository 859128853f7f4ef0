"""Travel assistant glue.

The assistant itself is an external text generator; this module only builds
the trip snapshot it is given and the prompt around the user's message.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Protocol

from roam.core.config import Settings
from roam.core.errors import AssistantUnavailable
from roam.models.trip import Trip
from roam.services.http_client import HttpError, post_json

logger = logging.getLogger("roam.assistant")

GREETING = (
    "Hey! I'm Roam AI. I know all about your upcoming trips. "
    "Ask me for recommendations, packing tips, or budget advice!"
)

SYSTEM_PREAMBLE = """You are Roam AI, a helpful travel assistant for a study abroad student.

Here are the user's current trips:
{trips}

When answering:
- Be concise and friendly.
- Use their specific trip details (dates, locations) in your advice.
- If they ask about a location not in the list, help them plan it as a new "Ideated" trip."""


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


def describe_trip(trip: Trip) -> str:
    start = trip.start_date.isoformat() if trip.start_date else "?"
    end = trip.end_date.isoformat() if trip.end_date else "?"
    return f"- {trip.title} to {trip.destination} ({trip.status.value}) from {start} to {end}"


def build_trip_context(trips: Iterable[Trip]) -> str:
    lines = [describe_trip(t) for t in trips]
    return SYSTEM_PREAMBLE.format(trips="\n".join(lines) or "(no trips yet)")


def build_prompt(context: str, message: str) -> str:
    return f"{context}\n\nUser: {message.strip()}\nAI:"


class GeminiTextGenerator:
    """Calls the Gemini `generateContent` REST endpoint."""

    def __init__(
        self, api_key: str, model: str, base_url: str, timeout: float = 10.0
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def generate(self, prompt: str) -> str:
        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            data = post_json(
                url,
                payload,
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout,
            )
        except HttpError as exc:
            raise AssistantUnavailable(str(exc)) from exc
        return _extract_text(data)


def _extract_text(data: Dict[str, Any]) -> str:
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        raise AssistantUnavailable("assistant returned no candidates") from None
    return "".join(p.get("text", "") for p in parts)


def make_text_generator(settings: Settings) -> TextGenerator:
    if not settings.assistant_api_key:
        raise AssistantUnavailable("assistant API key is not configured")
    return GeminiTextGenerator(
        api_key=settings.assistant_api_key,
        model=settings.assistant_model,
        base_url=settings.assistant_base_url,
        timeout=settings.http_timeout_seconds,
    )


def ask(generator: TextGenerator, trips: Iterable[Trip], message: str) -> str:
    prompt = build_prompt(build_trip_context(trips), message)
    logger.debug("assistant prompt of %s chars", len(prompt))
    return generator.generate(prompt)


__all__ = [
    "GREETING",
    "TextGenerator",
    "GeminiTextGenerator",
    "build_trip_context",
    "build_prompt",
    "describe_trip",
    "make_text_generator",
    "ask",
]
