"""Pydantic domain models for the Roam trip tracker."""

from .constants import (
    TripStatus,
    BudgetTier,
    STATUS_COLORS,
)  # re-export
from .schedule import DateRange, DayMark, PendingRange
from .trip import Trip, TripCreate, TripUpdate, TripDetail
from .expense import Expense, ExpenseIn
from .budget import BudgetIn, BudgetSummary
from .document import Document, DocumentIn
from .photo import Photo, PhotoIn

__all__ = [
    "TripStatus",
    "BudgetTier",
    "STATUS_COLORS",
    "DateRange",
    "DayMark",
    "PendingRange",
    "Trip",
    "TripCreate",
    "TripUpdate",
    "TripDetail",
    "Expense",
    "ExpenseIn",
    "BudgetIn",
    "BudgetSummary",
    "Document",
    "DocumentIn",
    "Photo",
    "PhotoIn",
]
