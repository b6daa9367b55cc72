from datetime import datetime

import pytest
from sqlalchemy import func, select

from app.core.exceptions import DuplicatePaymentError, ValidationError
from app.models.bill_payment import BillPayment
from app.models.expense import Expense, ExpenseCategory, PaymentMode
from app.utils import bill_payments
from app.utils.bill_payments import mark_bill_as_paid


async def _count(session_factory, model):
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


async def test_paying_a_bill_books_a_bills_expense(db, user, wifi_bill):
    payment, expense = await mark_bill_as_paid(
        db, user.id, wifi_bill, "upi", paid_date=datetime(2024, 3, 10, 18, 45)
    )

    assert payment.month_year == "2024-03"
    assert payment.bill_id == wifi_bill.id
    assert payment.bill_name == "WiFi"
    assert payment.amount == 599
    assert payment.payment_mode == "upi"

    # The bill is tagged "personal" but bill payments always land in "bills"
    assert expense.category == ExpenseCategory.bills
    assert expense.item == "Bill Payment: WiFi"
    assert expense.amount == 599
    assert expense.payment_mode == PaymentMode.upi
    assert expense.date == datetime(2024, 3, 10, 18, 45)
    assert expense.notes == "Recurring bill payment for 2024-03"
    assert expense.user_id == user.id


async def test_paying_twice_in_a_month_is_rejected(db, session_factory, user, wifi_bill):
    await mark_bill_as_paid(db, user.id, wifi_bill, "upi", paid_date=datetime(2024, 3, 10))

    with pytest.raises(DuplicatePaymentError):
        await mark_bill_as_paid(db, user.id, wifi_bill, "cash", paid_date=datetime(2024, 3, 28))

    assert await _count(session_factory, BillPayment) == 1
    assert await _count(session_factory, Expense) == 1


async def test_period_comes_from_the_paid_date_not_the_clock(db, user, wifi_bill, clock):
    # Clock says March; paying late for February is a separate period
    march, _ = await mark_bill_as_paid(db, user.id, wifi_bill, "card", clock=clock)
    february, _ = await mark_bill_as_paid(
        db, user.id, wifi_bill, "card", paid_date=datetime(2024, 2, 27), clock=clock
    )

    assert march.month_year == "2024-03"
    assert march.paid_date == clock.now()
    assert february.month_year == "2024-02"


async def test_database_constraint_catches_a_race(db, session_factory, user, wifi_bill, monkeypatch):
    async def no_existing_payment(*args, **kwargs):
        return None

    # Simulate two requests that both passed the lookup before either inserted
    monkeypatch.setattr(bill_payments, "get_payment_for_bill", no_existing_payment)
    await mark_bill_as_paid(db, user.id, wifi_bill, "upi", paid_date=datetime(2024, 3, 10))

    with pytest.raises(DuplicatePaymentError):
        await mark_bill_as_paid(db, user.id, wifi_bill, "upi", paid_date=datetime(2024, 3, 11))

    # The losing request wrote neither the payment nor its expense
    assert await _count(session_factory, BillPayment) == 1
    assert await _count(session_factory, Expense) == 1


async def test_snapshot_survives_bill_edits(db, session_factory, user, wifi_bill):
    await mark_bill_as_paid(db, user.id, wifi_bill, "upi", paid_date=datetime(2024, 3, 10))

    wifi_bill.name = "Fibre"
    wifi_bill.amount = 799
    await db.commit()

    async with session_factory() as session:
        payment = (await session.execute(select(BillPayment))).scalar_one()
    assert (payment.bill_name, payment.amount) == ("WiFi", 599)


async def test_invalid_payment_mode_is_rejected_before_writing(db, session_factory, user, wifi_bill):
    with pytest.raises(ValidationError):
        await mark_bill_as_paid(db, user.id, wifi_bill, "cheque", paid_date=datetime(2024, 3, 10))

    assert await _count(session_factory, BillPayment) == 0
