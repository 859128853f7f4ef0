"""Domain exceptions and HTTP error handlers.

Core services raise `RoamError` subclasses synchronously to their caller; the
FastAPI application maps them to JSON bodies of the shape
``{"error": <code>, "detail": <message>}``.
"""

import logging
from enum import Enum

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger("roam.errors")


class ErrorCode(str, Enum):
    INVALID_TRANSITION = "invalid_transition"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_EXPENSE = "invalid_expense"
    MISSING_DATE_RANGE = "missing_date_range"
    INVALID_DATE_RANGE = "invalid_date_range"
    NOT_FOUND = "not_found"
    ASSISTANT_UNAVAILABLE = "assistant_unavailable"


HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_AMOUNT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EXPENSE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MISSING_DATE_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_DATE_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ASSISTANT_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


class RoamError(Exception):
    """Base exception for all domain failures.

    Concrete subclasses set `code`; the base class itself is never raised.
    """

    code: ErrorCode

    def __init__(self, message: str):
        if not hasattr(self, "code"):
            raise TypeError(f"{type(self).__name__} does not define an error code")
        self.message = message
        super().__init__(message)

    @property
    def http_status(self) -> int:
        return HTTP_STATUS[self.code]


class InvalidTransition(RoamError):
    """Status advance requested out of order, or unknown status value."""

    code = ErrorCode.INVALID_TRANSITION


class InvalidAmount(RoamError):
    code = ErrorCode.INVALID_AMOUNT


class InvalidExpense(RoamError):
    code = ErrorCode.INVALID_EXPENSE


class MissingDateRange(RoamError):
    """Range-based operation on a trip lacking start or end date."""

    code = ErrorCode.MISSING_DATE_RANGE


class InvalidDateRange(RoamError):
    code = ErrorCode.INVALID_DATE_RANGE


class NotFound(RoamError):
    code = ErrorCode.NOT_FOUND


class AssistantUnavailable(RoamError):
    code = ErrorCode.ASSISTANT_UNAVAILABLE


def roam_error_handler(request: Request, exc: RoamError):  # type: ignore
    logger.info("%s: %s", exc.code.value, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content={"error": exc.code.value, "detail": exc.message},
    )


def not_found_handler(request: Request, exc):  # type: ignore
    if exc.status_code != status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "http_error", "detail": exc.detail},
        )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "not_found",
            "detail": f"No route for {request.method} {request.url.path}",
        },
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": jsonable_errors(exc),
        },
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # pydantic puts the raised exception object under ctx; keep only its text
    errors = []
    for err in exc.errors():
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        errors.append(err)
    return errors


__all__ = [
    "ErrorCode",
    "RoamError",
    "InvalidTransition",
    "InvalidAmount",
    "InvalidExpense",
    "MissingDateRange",
    "InvalidDateRange",
    "NotFound",
    "AssistantUnavailable",
    "roam_error_handler",
    "not_found_handler",
    "validation_error_handler",
    "server_error_handler",
]
