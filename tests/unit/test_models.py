from datetime import date

import pytest
from pydantic import ValidationError

from roam.models.document import DocumentIn
from roam.models.trip import TripCreate, TripUpdate, trip_from_row

VALID_TRIP = dict(title="Rome weekend", destination="Rome")


def test_trip_create_defaults_to_ideated():
    trip = TripCreate(**VALID_TRIP)
    assert trip.status.value == "ideated"


def test_trip_create_strips_and_requires_title():
    assert TripCreate(**{**VALID_TRIP, "title": "  Rome  "}).title == "Rome"
    with pytest.raises(ValidationError):
        TripCreate(**{**VALID_TRIP, "title": "   "})
    with pytest.raises(ValidationError):
        TripCreate(**{**VALID_TRIP, "destination": ""})


def test_trip_create_rejects_reversed_dates():
    with pytest.raises(ValidationError):
        TripCreate(**VALID_TRIP, start_date=date(2024, 6, 3), end_date=date(2024, 6, 1))


def test_trip_create_rejects_end_without_start():
    with pytest.raises(ValidationError):
        TripCreate(**VALID_TRIP, end_date=date(2024, 6, 1))


def test_trip_create_rejects_unknown_status():
    with pytest.raises(ValidationError):
        TripCreate(**VALID_TRIP, status="archived")


def test_trip_update_requires_a_field():
    with pytest.raises(ValidationError):
        TripUpdate()
    with pytest.raises(ValidationError):
        TripUpdate(title=None)
    assert TripUpdate(notes=None).model_fields_set == {"notes"}


def test_trip_from_row():
    trip = trip_from_row(
        {
            "id": 3,
            "title": "Alps",
            "destination": "Chamonix",
            "status": "planned",
            "start_date": "2024-06-01",
            "end_date": "2024-06-03",
            "budget": 120000,
            "notes": None,
            "cover_image": None,
            "created_at": "2024-05-01T10:00:00.000Z",
        }
    )
    assert trip.date_range.days == 3
    assert trip.budget == 120000
    assert trip.created_at.year == 2024


def test_document_blank_optionals_become_none():
    doc = DocumentIn(type="stay", title="Hotel", subtitle="  ", link="")
    assert doc.subtitle is None
    assert doc.link is None


def test_document_type_is_closed():
    with pytest.raises(ValidationError):
        DocumentIn(type="visa", title="Visa")
