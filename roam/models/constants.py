"""Domain constants and enumerations for validation.

Expense categories are free-form with a default; trip statuses are closed.
"""

from enum import Enum
from typing import Dict


class TripStatus(str, Enum):
    IDEATED = "ideated"
    PLANNED = "planned"
    CONFIRMED = "confirmed"

    @property
    def rank(self) -> int:
        return STATUS_ORDER.index(self)


STATUS_ORDER = (TripStatus.IDEATED, TripStatus.PLANNED, TripStatus.CONFIRMED)


class BudgetTier(str, Enum):
    OK = "ok"
    WARN = "warn"
    OVER = "over"


DEFAULT_EXPENSE_CATEGORY = "food"

# Calendar colors per lifecycle stage
STATUS_COLORS: Dict[TripStatus, str] = {
    TripStatus.IDEATED: "#EF4444",  # red
    TripStatus.PLANNED: "#F59E0B",  # amber
    TripStatus.CONFIRMED: "#10B981",  # emerald
}

# Range picker preview
SELECTION_ENDPOINT_COLOR = "#1E3A8A"
SELECTION_INTERIOR_COLOR = "#E2E8F0"
