# app/api/v1/routes/bills.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional
import uuid

from app.schemas.bill import (
    BillCreate,
    BillPaymentCreate,
    BillPaymentRead,
    BillRead,
    BillStatusResponse,
    BillUpdate,
)
from app.schemas.expense import ExpenseRead
from app.crud.bill import (
    create_bill_for_user,
    delete_bill,
    get_bill_by_id,
    get_bills_for_user,
    update_bill,
)
from app.crud.bill_payment import get_payments_for_period
from app.utils.bill_payments import mark_bill_as_paid
from app.utils.bill_status import bill_statuses, bill_stats, bills_due_soon
from app.utils.periods import parse_period_key, period_key
from app.api.deps import Clock, get_clock, get_current_user
from app.core.database import get_async_session
from app.core.auth import User
from app.core.exceptions import NotFoundError

router = APIRouter(prefix="/bills", tags=["bills"])

PERIOD_QUERY = Query(None, description="Calendar month as YYYY-MM, defaults to the current month")

def _resolve_period(period: Optional[str], clock: Clock) -> str:
    if period is None:
        return period_key(clock.today())
    parse_period_key(period)
    return period

@router.get("", response_model=List[BillRead])
async def read_bills(
    include_inactive: bool = False,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Bills ordered by due day; inactive bills only on request."""
    return await get_bills_for_user(user.id, db, active_only=not include_inactive)

@router.post("", response_model=BillRead, status_code=status.HTTP_201_CREATED)
async def create_bill(
    bill_in: BillCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await create_bill_for_user(user.id, bill_in, db)

@router.get("/status", response_model=BillStatusResponse)
async def read_bill_statuses(
    period: Optional[str] = PERIOD_QUERY,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    """
    Paid / pending / overdue status of every active bill for a month,
    plus paid vs. pending totals and the
    unpaid bills due within the next few days.
    """
    period = _resolve_period(period, clock)
    bills = await get_bills_for_user(user.id, db)
    payments = await get_payments_for_period(user.id, period, db)
    return {
        "period": period,
        "bills": [
            {**row, "bill": BillRead.model_validate(row["bill"])}
            for row in bill_statuses(bills, period, clock.today(), payments)
        ],
        "stats": bill_stats(bills, period, payments),
        "due_soon": [
            BillRead.model_validate(bill)
            for bill in bills_due_soon(bills, period, clock.today(), payments)
        ],
    }

@router.get("/paid", response_model=List[BillPaymentRead])
async def read_bill_payments(
    period: Optional[str] = PERIOD_QUERY,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    """Payments recorded for a month, including those of deleted bills."""
    return await get_payments_for_period(user.id, _resolve_period(period, clock), db)

@router.get("/{bill_id}", response_model=BillRead)
async def read_bill(
    bill_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    bill = await get_bill_by_id(bill_id, user.id, db)
    if not bill:
        raise NotFoundError("Bill not found")
    return bill

@router.patch("/{bill_id}", response_model=BillRead)
async def update_bill_endpoint(
    bill_id: uuid.UUID,
    bill_in: BillUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    bill = await get_bill_by_id(bill_id, user.id, db)
    if not bill:
        raise NotFoundError("Bill not found")
    return await update_bill(bill, bill_in, db)

@router.delete("/{bill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bill_endpoint(
    bill_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    bill = await get_bill_by_id(bill_id, user.id, db)
    if not bill:
        raise NotFoundError("Bill not found")
    await delete_bill(bill, db)
    return None

@router.post("/{bill_id}/pay", status_code=status.HTTP_201_CREATED)
async def pay_bill(
    bill_id: uuid.UUID,
    payment_in: BillPaymentCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
) -> Dict[str, Any]:
    """
    Mark a bill as paid for the month of `paid_date` and record the
    matching expense. Returns 409 if the bill is already paid that month.
    """
    bill = await get_bill_by_id(bill_id, user.id, db)
    if not bill:
        raise NotFoundError("Bill not found")
    payment, expense = await mark_bill_as_paid(
        db,
        user.id,
        bill,
        payment_in.payment_mode,
        paid_date=payment_in.paid_date,
        clock=clock,
    )
    return {
        "success": True,
        "payment": BillPaymentRead.model_validate(payment),
        "expense": ExpenseRead.model_validate(expense),
    }
