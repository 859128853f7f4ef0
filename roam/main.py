import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .db.migrate import apply_migrations
from .routers import assistant, dashboard, documents, expenses, photos, schedule, trips


def create_app(settings_override: Settings | None = None) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp DB). Falls back to cached get_settings().
    """
    settings = settings_override or get_settings()
    if settings.db_path is None:
        settings.init_post_load()
    init_logging(debug=settings.debug)

    # Ensure database schema (idempotent) so fresh DBs have tables
    try:
        apply_migrations(settings.db_path)  # type: ignore[arg-type]
    except Exception:
        # Failing to init DB is fatal; re-raise after logging
        logging.getLogger("roam").exception("failed to apply migrations on startup")
        raise

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.settings = settings

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(errors.RoamError, errors.roam_error_handler)
    app.add_exception_handler(StarletteHTTPException, errors.not_found_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(trips.router)
    app.include_router(expenses.router)
    app.include_router(documents.router)
    app.include_router(photos.router)
    app.include_router(schedule.router)
    app.include_router(dashboard.router)
    app.include_router(assistant.router)

    @app.get("/")
    async def root():
        return {"message": "Roam Trip Tracker API", "version": settings.version}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
