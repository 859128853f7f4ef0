"""Budget aggregation for a single trip.

Reduces a trip's expenses to a spend total, an unclamped percent of budget, a
progress-bar ratio clamped to [0, 100] and a display tier. A missing or
non-positive budget yields 0 percent rather than a division error; that is
the only degraded default in this module.

Also owns conversion of user-entered decimal amounts (budget and expense
forms) into integer minor units.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Iterable, Optional, Union

from roam.core.errors import InvalidAmount, InvalidExpense
from roam.db.dal import Database
from roam.models.budget import BudgetSummary
from roam.models.constants import BudgetTier, DEFAULT_EXPENSE_CATEGORY
from roam.models.expense import Expense
from roam.models.trip import Trip
from roam.services.money import parse_decimal, to_minor_units
from roam.services.status_pipeline import load_trip

logger = logging.getLogger("roam.budget")

DEFAULT_WARN_PCT = 75.0

RawAmount = Union[str, float, int]


def total_spent(expenses: Iterable[Expense]) -> int:
    return sum(e.amount for e in expenses)


def percent_spent(total: int, budget: Optional[int]) -> float:
    if not budget or budget <= 0:
        return 0.0
    return total * 100 / budget


def tier(percent: float, warn_pct: float = DEFAULT_WARN_PCT) -> BudgetTier:
    if percent > 100:
        return BudgetTier.OVER
    if percent > warn_pct:
        return BudgetTier.WARN
    return BudgetTier.OK


def display_ratio(percent: float) -> float:
    return min(max(percent, 0.0), 100.0)


def compute_budget_summary(
    trip: Trip, expenses: Iterable[Expense], warn_pct: float = DEFAULT_WARN_PCT
) -> BudgetSummary:
    total = total_spent(expenses)
    pct = percent_spent(total, trip.budget)
    remaining = max((trip.budget or 0) - total, 0)
    return BudgetSummary(
        budget=trip.budget,
        total_spent=total,
        percent_spent=pct,
        display_ratio=display_ratio(pct),
        tier=tier(pct, warn_pct),
        remaining=remaining,
    )


def set_budget(trip: Trip, amount: RawAmount) -> int:
    """Validate a budget entered in major units and return it in minor units.

    Zero is accepted (it clears the spend ratio); negative or non-numeric
    input raises InvalidAmount.
    """
    try:
        if parse_decimal(amount) < 0:
            raise InvalidAmount(f"budget for trip {trip.id} cannot be negative")
        return to_minor_units(amount)
    except ValueError as exc:
        raise InvalidAmount(str(exc)) from None


@dataclass(frozen=True)
class ExpenseDraft:
    title: str
    amount: int
    category: str


def prepare_expense(
    title: Optional[str], amount: RawAmount, category: Optional[str] = None
) -> ExpenseDraft:
    if not title or not title.strip():
        raise InvalidExpense("expense title cannot be empty")
    try:
        minor = to_minor_units(amount)
    except ValueError as exc:
        raise InvalidExpense(str(exc)) from None
    if minor <= 0:
        raise InvalidExpense("expense amount must be positive")
    category = (category or "").strip() or DEFAULT_EXPENSE_CATEGORY
    return ExpenseDraft(title=title.strip(), amount=minor, category=category)


# ---------------------------------------------------------------------------
# Store glue


def list_trip_expenses(db: Database, trip_id: int) -> list[Expense]:
    return [Expense(**row) for row in db.list_expenses(trip_id)]


def get_budget_summary(
    db: Database, trip_id: int, warn_pct: float = DEFAULT_WARN_PCT
) -> BudgetSummary:
    trip = load_trip(db, trip_id)
    return compute_budget_summary(trip, list_trip_expenses(db, trip_id), warn_pct)


def update_trip_budget_amount(db: Database, trip_id: int, amount: RawAmount) -> Trip:
    trip = load_trip(db, trip_id)
    minor = set_budget(trip, amount)
    db.update_trip_budget(trip_id, minor)
    logger.info("trip %s budget set to %s", trip_id, minor)
    return load_trip(db, trip_id)


def add_expense(
    db: Database,
    trip_id: int,
    title: Optional[str],
    amount: RawAmount,
    category: Optional[str] = None,
    created_at: Optional[int] = None,
) -> Expense:
    draft = prepare_expense(title, amount, category)
    if created_at is None:
        created_at = int(time.time() * 1000)
    expense_id = db.insert_expense(
        trip_id=trip_id,
        title=draft.title,
        amount=draft.amount,
        category=draft.category,
        created_at=created_at,
    )
    logger.debug("expense %s added to trip %s", expense_id, trip_id)
    return Expense(
        id=expense_id,
        trip_id=trip_id,
        title=draft.title,
        amount=draft.amount,
        category=draft.category,
        created_at=created_at,
    )


__all__ = [
    "total_spent",
    "percent_spent",
    "tier",
    "display_ratio",
    "compute_budget_summary",
    "set_budget",
    "prepare_expense",
    "ExpenseDraft",
    "list_trip_expenses",
    "get_budget_summary",
    "update_trip_budget_amount",
    "add_expense",
]
