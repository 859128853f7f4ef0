from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel

from .constants import BudgetTier


class BudgetIn(BaseModel):
    amount: Union[float, str]


class BudgetSummary(BaseModel):
    budget: Optional[int] = None
    total_spent: int
    percent_spent: float
    display_ratio: float
    tier: BudgetTier
    remaining: int = 0
