"""Money / rounding helpers.

Centralized so budgets and expenses convert user input with identical
rounding semantics. Amounts are stored as integer minor units (cents).
"""

from __future__ import annotations
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

MINOR_PER_MAJOR = 100
# SQLite INTEGER is a signed 64-bit value
MAX_MINOR_UNITS = 2**63 - 1


def parse_decimal(raw: Union[str, float, int]) -> Decimal:
    """Parse user input into a finite Decimal; raise ValueError otherwise."""
    if isinstance(raw, bool):
        raise ValueError("amount must be numeric")
    text = str(raw).strip()
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"amount {raw!r} is not numeric") from None
    if not value.is_finite():
        raise ValueError(f"amount {raw!r} is not finite")
    return value


def to_minor_units(raw: Union[str, float, int]) -> int:
    """Convert a decimal major-unit amount to integer minor units.

    Rounds half away from zero: ``"0.005"`` becomes 1, ``"42.5"`` becomes 4250.
    """
    value = parse_decimal(raw) * MINOR_PER_MAJOR
    try:
        minor = int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise ValueError(f"amount {raw!r} is out of range") from None
    if abs(minor) > MAX_MINOR_UNITS:
        raise ValueError(f"amount {raw!r} is out of range")
    return minor
