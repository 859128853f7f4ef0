import random

import pytest

from roam.core.errors import InvalidAmount, InvalidExpense
from roam.models.constants import BudgetTier
from roam.models.expense import Expense
from roam.services.budget import (
    compute_budget_summary,
    display_ratio,
    percent_spent,
    prepare_expense,
    set_budget,
    tier,
    total_spent,
)
from roam.services.money import to_minor_units
from tests.conftest import make_trip


def _expense(amount: int, expense_id: int = 1) -> Expense:
    return Expense(
        id=expense_id,
        trip_id=1,
        title=f"item {expense_id}",
        amount=amount,
        category="food",
        created_at=1_700_000_000_000,
    )


# --- totals ---


def test_total_spent_empty():
    assert total_spent([]) == 0


def test_total_spent_is_order_independent():
    expenses = [_expense(a, i) for i, a in enumerate([1250, 99, 40000, 1])]
    shuffled = expenses[:]
    random.Random(7).shuffle(shuffled)
    assert total_spent(expenses) == total_spent(shuffled) == 41350


# --- percent / tier / display ---


@pytest.mark.parametrize("total", [0, 1, 150, 10_000])
def test_percent_spent_zero_budget(total):
    assert percent_spent(total, 0) == 0
    assert percent_spent(total, None) == 0
    assert percent_spent(total, -100) == 0


def test_percent_spent_not_clamped():
    assert percent_spent(150, 100) == 150
    assert percent_spent(50, 200) == 25


def test_percent_spent_exact_for_whole_percentages():
    assert percent_spent(11_500, 10_000) == 115
    assert percent_spent(7_000, 10_000) == 70


@pytest.mark.parametrize(
    "percent,expected",
    [
        (0.0, BudgetTier.OK),
        (75.0, BudgetTier.OK),
        (75.01, BudgetTier.WARN),
        (100.0, BudgetTier.WARN),
        (100.01, BudgetTier.OVER),
        (400.0, BudgetTier.OVER),
    ],
)
def test_tier_boundaries(percent, expected):
    assert tier(percent) == expected


def test_tier_custom_warn_threshold():
    assert tier(85.0, warn_pct=90) == BudgetTier.OK
    assert tier(91.0, warn_pct=90) == BudgetTier.WARN


@pytest.mark.parametrize("percent", [0.0, 42.0, 100.0, 100.5, 250.0])
def test_display_ratio_in_bounds(percent):
    ratio = display_ratio(percent)
    assert 0 <= ratio <= 100
    assert ratio == min(percent, 100)


def test_summary_over_budget_keeps_unclamped_percent():
    trip = make_trip(budget=10_000)
    summary = compute_budget_summary(trip, [_expense(12_000)])
    assert summary.total_spent == 12_000
    assert summary.percent_spent == 120
    assert summary.display_ratio == 100
    assert summary.tier == BudgetTier.OVER
    assert summary.remaining == 0


def test_summary_without_budget():
    summary = compute_budget_summary(make_trip(), [_expense(500)])
    assert summary.budget is None
    assert summary.percent_spent == 0
    assert summary.tier == BudgetTier.OK


# --- amount parsing ---


@pytest.mark.parametrize(
    "raw,expected",
    [("42.5", 4250), (42.5, 4250), ("0", 0), ("10", 1000), ("0.005", 1), ("1.234", 123)],
)
def test_to_minor_units(raw, expected):
    assert to_minor_units(raw) == expected


@pytest.mark.parametrize("raw", ["1e20", "-1e20", "92233720368547758.08"])
def test_to_minor_units_rejects_values_beyond_integer_storage(raw):
    with pytest.raises(ValueError):
        to_minor_units(raw)


def test_to_minor_units_accepts_largest_storable_value():
    assert to_minor_units("92233720368547758.07") == 2**63 - 1


def test_set_budget_converts_major_units():
    assert set_budget(make_trip(), "42.5") == 4250


@pytest.mark.parametrize("raw", ["-1", "-0.001", "abc", "", "nan", "inf", "1e40", "1e20"])
def test_set_budget_rejects_bad_input(raw):
    with pytest.raises(InvalidAmount):
        set_budget(make_trip(), raw)


def test_set_budget_allows_zero():
    assert set_budget(make_trip(), "0") == 0


def test_prepare_expense():
    draft = prepare_expense("  Pizza  ", "12.99", "")
    assert draft.title == "Pizza"
    assert draft.amount == 1299
    assert draft.category == "food"


def test_prepare_expense_keeps_free_form_category():
    assert prepare_expense("Museum", 15, "culture").category == "culture"


@pytest.mark.parametrize(
    "title,amount",
    [("", "10"), ("   ", "10"), ("Taxi", "abc"), ("Taxi", "0"), ("Taxi", "-5"), ("Taxi", "1e20")],
)
def test_prepare_expense_rejects(title, amount):
    with pytest.raises(InvalidExpense):
        prepare_expense(title, amount)
