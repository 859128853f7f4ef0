"""Shared test fixtures for Roam."""

from datetime import date
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from roam.core.config import Settings
from roam.db.dal import Database
from roam.db.migrate import apply_migrations
from roam.main import create_app
from roam.models.trip import Trip


def make_trip(
    trip_id: int = 1,
    status: str = "ideated",
    start: Optional[str] = None,
    end: Optional[str] = None,
    budget: Optional[int] = None,
    title: str = "Rome weekend",
    destination: str = "Rome",
) -> Trip:
    return Trip(
        id=trip_id,
        title=title,
        destination=destination,
        status=status,
        start_date=date.fromisoformat(start) if start else None,
        end_date=date.fromisoformat(end) if end else None,
        budget=budget,
    )


@pytest.fixture
def settings(tmp_path):
    s = Settings(
        data_dir=tmp_path,
        db_filename="test.sqlite3",
        assistant_api_key=None,
        debug=False,
    )
    s.init_post_load()
    return s


@pytest.fixture
def db(settings):
    apply_migrations(settings.db_path)
    return Database(settings.db_path)


@pytest.fixture
def app(settings):
    return create_app(settings_override=settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
