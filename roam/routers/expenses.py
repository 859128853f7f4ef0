from fastapi import APIRouter, Depends, Response, status

from roam.db.dal import Database
from roam.models.expense import Expense, ExpenseIn
from roam.routers.deps import get_db
from roam.services.budget import add_expense, list_trip_expenses
from roam.services.status_pipeline import load_trip

router = APIRouter(tags=["expenses"])


@router.get(
    "/trips/{trip_id}/expenses",
    response_model=list[Expense],
    summary="List trip expenses (newest first)",
)
async def list_expenses(trip_id: int, db: Database = Depends(get_db)):
    load_trip(db, trip_id)
    return list_trip_expenses(db, trip_id)


@router.post(
    "/trips/{trip_id}/expenses",
    response_model=Expense,
    status_code=status.HTTP_201_CREATED,
    summary="Log an expense",
)
async def create_expense(
    trip_id: int, payload: ExpenseIn, db: Database = Depends(get_db)
):
    return add_expense(
        db,
        trip_id,
        title=payload.title,
        amount=payload.amount,
        category=payload.category,
    )


@router.delete(
    "/expenses/{expense_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an expense",
)
async def delete_expense(expense_id: int, db: Database = Depends(get_db)):
    db.delete_expense(expense_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
