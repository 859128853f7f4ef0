from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class ExpenseIn(BaseModel):
    """Raw expense form input.

    Amount arrives as the user typed it (decimal major units, string or number);
    conversion and rejection of bad values happen in the budget service so they
    surface as `InvalidExpense` rather than a schema error.
    """

    title: str = ""
    amount: Union[float, str]
    category: Optional[str] = None


class Expense(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    trip_id: int
    title: str
    amount: int
    category: str
    created_at: Optional[int] = None
