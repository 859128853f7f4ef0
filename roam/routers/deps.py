"""Shared FastAPI dependencies.

Settings come from the application instance so an app built with a settings
override (tests, alternate data dirs) never touches the cached defaults.
"""

from fastapi import Request

from roam.core.config import Settings, get_settings
from roam.db.dal import Database


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_db(request: Request) -> Database:
    settings = get_app_settings(request)
    return Database(settings.db_path)
