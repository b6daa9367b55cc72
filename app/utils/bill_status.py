# app/utils/bill_status.py
"""
Bill status for a calendar period: ``paid``, ``pending`` or ``overdue``.

A bill is paid for a period when a payment row exists for (bill, period).
Otherwise it is overdue once ``today`` is past the period's due date, where
the due date is the bill's due day clamped to the length of that month
(a bill due on the 31st is due on the 30th in April). For the current month
this reduces to "day of month > due day"; later months are always pending
and earlier unpaid months are overdue.

Pending bills whose due date is at most DUE_SOON_DAYS away are also
reported as due soon; that is a reminder list, not a fourth status.
"""
from datetime import date
from typing import Any, Dict, Iterable, List, Literal

from app.utils.periods import days_in_month, parse_period_key

BillStatus = Literal["paid", "pending", "overdue"]

# Unpaid bills due within this many days are flagged as due soon
DUE_SOON_DAYS = 3


def due_date_for_period(due_day: int, period: str) -> date:
    year, month = parse_period_key(period)
    return date(year, month, min(due_day, days_in_month(year, month)))


def is_paid(bill: Any, period: str, payments: Iterable[Any]) -> bool:
    return any(p.bill_id == bill.id and p.month_year == period for p in payments)


def resolve_bill_status(bill: Any, period: str, today: date, payments: Iterable[Any]) -> BillStatus:
    if is_paid(bill, period, payments):
        return "paid"
    if today > due_date_for_period(bill.due_date, period):
        return "overdue"
    return "pending"


def is_due_soon(bill: Any, period: str, today: date, payments: Iterable[Any]) -> bool:
    """Unpaid and due today or within the next DUE_SOON_DAYS days."""
    if is_paid(bill, period, payments):
        return False
    days_left = (due_date_for_period(bill.due_date, period) - today).days
    return 0 <= days_left <= DUE_SOON_DAYS


def bills_due_soon(bills: Iterable[Any], period: str, today: date, payments: Iterable[Any]) -> List[Any]:
    payments = list(payments)
    return [bill for bill in bills if is_due_soon(bill, period, today, payments)]


def bill_statuses(bills: Iterable[Any], period: str, today: date, payments: Iterable[Any]) -> List[Dict[str, Any]]:
    payments = list(payments)
    rows = []
    for bill in bills:
        status = resolve_bill_status(bill, period, today, payments)
        rows.append({"bill": bill, "status": status, "is_paid": status == "paid"})
    return rows


def bill_stats(bills: Iterable[Any], period: str, payments: Iterable[Any]) -> Dict[str, Any]:
    """Counts and amounts of paid vs. pending bills for one period."""
    bills = list(bills)
    paid_by_bill = {p.bill_id: p for p in payments if p.month_year == period}

    paid = [b for b in bills if b.id in paid_by_bill]
    unpaid = [b for b in bills if b.id not in paid_by_bill]
    # Paid amounts come from the payment snapshot, not the (possibly edited) bill
    paid_amount = sum(float(paid_by_bill[b.id].amount) for b in paid)
    pending_amount = sum(float(b.amount) for b in unpaid)

    return {
        "total": len(bills),
        "paid": len(paid),
        "pending": len(unpaid),
        "total_amount": paid_amount + pending_amount,
        "paid_amount": paid_amount,
        "pending_amount": pending_amount,
    }
