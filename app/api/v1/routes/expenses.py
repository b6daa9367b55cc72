# app/api/v1/routes/expenses.py
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from datetime import date
import uuid

from app.schemas.expense import ExpenseCreate, ExpenseRead, ExpenseUpdate
from app.models.expense import ExpenseCategory
from app.crud.expense import (
    create_expense_for_user,
    delete_expense,
    get_expense_by_id,
    get_expenses_for_day,
    get_expenses_for_month,
    get_expenses_for_user,
    update_expense,
)
from app.api.deps import Clock, get_clock, get_current_user
from app.core.database import get_async_session
from app.core.auth import User
from app.core.exceptions import NotFoundError, ValidationError

router = APIRouter(prefix="/expenses", tags=["expenses"])

@router.get("", response_model=List[ExpenseRead])
async def read_expenses(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    start_date: Optional[date] = Query(None, description="First day to include"),
    end_date: Optional[date] = Query(None, description="Last day to include"),
    category: Optional[ExpenseCategory] = None,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """List expenses, newest first."""
    if start_date and end_date and start_date > end_date:
        raise ValidationError("start_date must not be after end_date")
    return await get_expenses_for_user(
        user.id, db, limit=limit, start_date=start_date, end_date=end_date, category=category
    )

@router.get("/today", response_model=List[ExpenseRead])
async def read_today_expenses(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    return await get_expenses_for_day(user.id, clock.today(), db)

@router.get("/month/{year}/{month}", response_model=List[ExpenseRead])
async def read_month_expenses(
    year: int = Path(..., ge=1970, le=9999),
    month: int = Path(..., ge=1, le=12),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_expenses_for_month(user.id, year, month, db)

@router.post("", response_model=ExpenseRead, status_code=status.HTTP_201_CREATED)
async def create_expense(
    ex_in: ExpenseCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await create_expense_for_user(user.id, ex_in, db)

@router.get("/{expense_id}", response_model=ExpenseRead)
async def read_expense(
    expense_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    expense = await get_expense_by_id(expense_id, user.id, db)
    if not expense:
        raise NotFoundError("Expense not found")
    return expense

@router.patch("/{expense_id}", response_model=ExpenseRead)
async def update_expense_endpoint(
    expense_id: uuid.UUID,
    ex_in: ExpenseUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    expense = await get_expense_by_id(expense_id, user.id, db)
    if not expense:
        raise NotFoundError("Expense not found")
    return await update_expense(expense, ex_in, db)

@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense_endpoint(
    expense_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    expense = await get_expense_by_id(expense_id, user.id, db)
    if not expense:
        raise NotFoundError("Expense not found")
    await delete_expense(expense, db)
    return None
