# app/crud/expense.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc
from app.models.expense import Expense, ExpenseCategory
from app.core.db_utils import with_db_retry
from app.utils.periods import month_bounds
from datetime import date, datetime, time, timedelta
from typing import List, Optional
import uuid
from app.schemas.expense import ExpenseCreate, ExpenseUpdate

# Fields an update may explicitly clear with null
NULLABLE_FIELDS = {"notes"}

@with_db_retry()
async def get_expenses_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    limit: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    category: Optional[ExpenseCategory] = None,
) -> List[Expense]:
    """Newest first. Date bounds are whole days, both ends included."""
    query = select(Expense).where(Expense.user_id == user_id)
    if start_date:
        query = query.where(Expense.date >= datetime.combine(start_date, time.min))
    if end_date:
        query = query.where(Expense.date < datetime.combine(end_date + timedelta(days=1), time.min))
    if category:
        query = query.where(Expense.category == category)
    query = query.order_by(desc(Expense.date))
    if limit:
        query = query.limit(limit)
    result = await db.execute(query)
    return result.scalars().all()

async def get_expenses_for_day(user_id: uuid.UUID, day: date, db: AsyncSession) -> List[Expense]:
    return await get_expenses_for_user(user_id, db, start_date=day, end_date=day)

async def get_expenses_for_month(user_id: uuid.UUID, year: int, month: int, db: AsyncSession) -> List[Expense]:
    start, end = month_bounds(year, month)
    return await get_expenses_for_user(user_id, db, start_date=start, end_date=end)

@with_db_retry()
async def get_expense_by_id(expense_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Expense]:
    result = await db.execute(
        select(Expense).where(Expense.id == expense_id, Expense.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_expense_for_user(user_id: uuid.UUID, ex_in: ExpenseCreate, db: AsyncSession) -> Expense:
    new_ex = Expense(**ex_in.model_dump(), user_id=user_id)
    db.add(new_ex)
    await db.commit()
    await db.refresh(new_ex)
    return new_ex

async def update_expense(expense: Expense, ex_in: ExpenseUpdate, db: AsyncSession) -> Expense:
    for field, value in ex_in.model_dump(exclude_unset=True).items():
        if value is None and field not in NULLABLE_FIELDS:
            continue
        setattr(expense, field, value)
    db.add(expense)
    await db.commit()
    await db.refresh(expense)
    return expense

async def delete_expense(expense: Expense, db: AsyncSession) -> None:
    await db.delete(expense)
    await db.commit()
