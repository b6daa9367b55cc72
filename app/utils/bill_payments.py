# app/utils/bill_payments.py
"""
Marking a bill as paid.

A payment row and the matching "bills" expense are written in one
transaction, so either both exist or neither does. The (user, bill, period)
unique constraint on bills_paid is the real duplicate guard; the lookup
before the insert only gives the common case a clean early exit.
"""
import logging
import uuid
from datetime import datetime
from typing import Optional, Tuple, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import Clock, system_clock
from app.core.exceptions import DuplicatePaymentError, ValidationError
from app.crud.bill_payment import get_payment_for_bill
from app.models.bill import Bill
from app.models.bill_payment import BillPayment
from app.models.expense import Expense, ExpenseCategory, PaymentMode
from app.utils.periods import period_key

logger = logging.getLogger(__name__)


def bill_expense_item(bill_name: str) -> str:
    return f"Bill Payment: {bill_name}"


def bill_expense_notes(month_year: str) -> str:
    return f"Recurring bill payment for {month_year}"


async def mark_bill_as_paid(
    db: AsyncSession,
    user_id: uuid.UUID,
    bill: Bill,
    payment_mode: Union[PaymentMode, str],
    paid_date: Optional[datetime] = None,
    clock: Clock = system_clock,
) -> Tuple[BillPayment, Expense]:
    """
    Record ``bill`` as paid for the calendar month of ``paid_date`` and book
    the expense for it.

    Raises DuplicatePaymentError if the bill is already paid for that month;
    nothing is written in that case.
    """
    try:
        mode = PaymentMode(payment_mode)
    except ValueError:
        raise ValidationError(f"Invalid payment mode '{payment_mode}'")
    if bill.amount is None or bill.amount <= 0:
        raise ValidationError("Bill amount must be positive")

    paid_date = paid_date or clock.now()
    month_year = period_key(paid_date)
    # Snapshot now: a rollback below expires the bill instance
    bill_id, bill_name, amount = bill.id, bill.name, float(bill.amount)

    existing = await get_payment_for_bill(user_id, bill_id, month_year, db)
    if existing:
        logger.info(f"Bill {bill_id} already paid for {month_year} by user {user_id}")
        raise DuplicatePaymentError(f"Bill already paid for {month_year}")

    payment = BillPayment(
        user_id=user_id,
        bill_id=bill_id,
        bill_name=bill_name,
        amount=amount,
        payment_mode=mode.value,
        paid_date=paid_date,
        month_year=month_year,
    )
    # Always booked as "bills", whatever tag the bill itself carries
    expense = Expense(
        user_id=user_id,
        item=bill_expense_item(bill_name),
        amount=amount,
        category=ExpenseCategory.bills,
        payment_mode=mode,
        date=paid_date,
        notes=bill_expense_notes(month_year),
    )
    db.add_all([payment, expense])
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning(f"Concurrent payment for bill {bill_id} in {month_year} rejected by unique constraint")
        raise DuplicatePaymentError(f"Bill already paid for {month_year}")

    await db.refresh(payment)
    await db.refresh(expense)
    logger.info(f"Bill {bill_name} marked paid for {month_year} by user {user_id} via {mode.value}")
    return payment, expense
