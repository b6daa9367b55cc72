# app/utils/aggregation.py
"""
Expense aggregation: totals, grouped breakdowns and budget arithmetic.

Every function here is pure. Inputs are any objects exposing ``amount``,
``category``, ``payment_mode`` and ``date`` (ORM rows or plain records) and
are never mutated.
"""
from collections import defaultdict
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence

from app.models.expense import ExpenseCategory, PaymentMode
from app.utils.periods import day_of, days_in_month, month_bounds, week_bounds

# Group order used to break ties between equal amounts
CATEGORY_ORDER = [c.value for c in ExpenseCategory]
PAYMENT_MODE_ORDER = [m.value for m in PaymentMode]

SMALL_TRANSACTION_LIMIT = 100
SMALL_TRANSACTION_COUNT = 20
HIGH_CATEGORY_SHARE = 30.0
CATEGORY_CHANGE_THRESHOLD = 20.0


def _key(value: Any) -> str:
    return getattr(value, "value", value)


def _group_indian(digits: str) -> str:
    # Last three digits, then pairs: 12345678 -> 1,23,45,678
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while head:
        groups.insert(0, head[-2:])
        head = head[:-2]
    return ",".join(groups + [tail])


def format_currency(amount: float, currency: str = "₹") -> str:
    """Two decimals with Indian digit grouping, e.g. ``₹1,23,456.00``."""
    whole, fraction = f"{abs(amount):.2f}".split(".")
    sign = "-" if round(amount, 2) < 0 else ""
    return f"{currency}{sign}{_group_indian(whole)}.{fraction}"


# ────────────────────────────────────────────────────────────────────────────────
# TOTALS & FILTERS
# ────────────────────────────────────────────────────────────────────────────────
def total(expenses: Iterable[Any]) -> float:
    return sum((float(e.amount) for e in expenses), 0.0)


def filter_by_period(expenses: Iterable[Any], start: date, end: date) -> List[Any]:
    """Expenses dated on any day from ``start`` to ``end``, both days included."""
    start_day, end_day = day_of(start), day_of(end)
    return [e for e in expenses if start_day <= day_of(e.date) <= end_day]


def today_expenses(expenses: Iterable[Any], today: date) -> List[Any]:
    return filter_by_period(expenses, today, today)


def week_expenses(expenses: Iterable[Any], today: date, start_of_week: int = 1) -> List[Any]:
    return filter_by_period(expenses, *week_bounds(today, start_of_week))


def month_expenses(expenses: Iterable[Any], today: date) -> List[Any]:
    return filter_by_period(expenses, *month_bounds(today.year, today.month))


# ────────────────────────────────────────────────────────────────────────────────
# BREAKDOWNS
# ────────────────────────────────────────────────────────────────────────────────
def _breakdown(expenses: Sequence[Any], attr: str, order: List[str], label: str) -> List[Dict[str, Any]]:
    grand_total = total(expenses)
    sums: Dict[str, float] = defaultdict(float)
    for e in expenses:
        sums[_key(getattr(e, attr))] += float(e.amount)

    # Known groups first in enum order, then anything else as first seen;
    # sorted() is stable so this order settles ties.
    keys = [k for k in order if k in sums] + [k for k in sums if k not in order]
    rows = [
        {
            label: k,
            "amount": sums[k],
            "percentage": (sums[k] / grand_total * 100) if grand_total > 0 else 0.0,
        }
        for k in keys
    ]
    return sorted(rows, key=lambda row: row["amount"], reverse=True)


def category_breakdown(expenses: Iterable[Any]) -> List[Dict[str, Any]]:
    return _breakdown(list(expenses), "category", CATEGORY_ORDER, "category")


def payment_mode_breakdown(expenses: Iterable[Any]) -> List[Dict[str, Any]]:
    return _breakdown(list(expenses), "payment_mode", PAYMENT_MODE_ORDER, "mode")


def top_categories(expenses: Iterable[Any], limit: int = 3) -> List[Dict[str, Any]]:
    return category_breakdown(expenses)[:limit]


def daily_totals(expenses: Iterable[Any], week_start: date) -> List[Dict[str, Any]]:
    """Seven zero-filled day buckets starting at ``week_start``."""
    days = [week_start + timedelta(days=i) for i in range(7)]
    buckets = {d: 0.0 for d in days}
    for e in expenses:
        d = day_of(e.date)
        if d in buckets:
            buckets[d] += float(e.amount)
    return [{"date": d.isoformat(), "amount": buckets[d]} for d in days]


def daily_average(expenses: Iterable[Any], days: int = 7) -> float:
    if days <= 0:
        return 0.0
    return total(expenses) / days


# ────────────────────────────────────────────────────────────────────────────────
# BUDGET
# ────────────────────────────────────────────────────────────────────────────────
def budget_progress(spent: float, budget: float) -> float:
    """Percentage of the budget used, capped at 100; 0 without a budget."""
    if budget <= 0:
        return 0.0
    return min(100.0, spent / budget * 100)


def remaining_budget(spent: float, budget: float) -> float:
    """Negative when overspent."""
    return budget - spent


# ────────────────────────────────────────────────────────────────────────────────
# INSIGHTS & SUGGESTIONS
# ────────────────────────────────────────────────────────────────────────────────
def spending_insights(
    expenses: Sequence[Any],
    previous_month_expenses: Optional[Sequence[Any]] = None,
    currency: str = "₹",
) -> List[Dict[str, str]]:
    insights: List[Dict[str, str]] = []
    expenses = list(expenses)
    previous = list(previous_month_expenses or [])

    per_day: Dict[date, float] = defaultdict(float)
    for e in expenses:
        per_day[day_of(e.date)] += float(e.amount)
    if per_day:
        # max() keeps the earliest day on ties
        top_day = max(sorted(per_day), key=lambda d: per_day[d])
        insights.append({
            "kind": "top_day",
            "text": f"Highest spending day: {top_day.strftime('%d %b')} ({format_currency(per_day[top_day], currency)})",
        })

    if previous:
        current_totals = {row["category"]: row["amount"] for row in category_breakdown(expenses)}
        previous_totals = {row["category"]: row["amount"] for row in category_breakdown(previous)}
        for category in [k for k in CATEGORY_ORDER if k in current_totals]:
            before = previous_totals.get(category, 0.0)
            if before <= 0:
                continue
            change = (current_totals[category] - before) / before * 100
            if abs(change) > CATEGORY_CHANGE_THRESHOLD:
                direction = "increased" if change > 0 else "decreased"
                insights.append({
                    "kind": "category_change",
                    "text": f"{category.capitalize()} {direction} by {abs(change):.1f}% from last month",
                })

    average = total(expenses) / len(expenses) if expenses else 0.0
    insights.append({
        "kind": "average_transaction",
        "text": f"Average transaction: {format_currency(average, currency)}",
    })

    counts: Dict[str, int] = defaultdict(int)
    for e in expenses:
        counts[_key(e.payment_mode)] += 1
    if counts:
        modes = [m for m in PAYMENT_MODE_ORDER if m in counts] + [m for m in counts if m not in PAYMENT_MODE_ORDER]
        most_used = max(modes, key=lambda m: counts[m])
        insights.append({
            "kind": "payment_mode",
            "text": f"Most used payment: {most_used.upper()} ({counts[most_used]} transactions)",
        })

    return insights


def savings_suggestions(
    expenses: Sequence[Any],
    budget: float,
    today: date,
    currency: str = "₹",
) -> List[Dict[str, str]]:
    suggestions: List[Dict[str, str]] = []
    expenses = list(expenses)
    spent = total(expenses)

    if spent > budget:
        suggestions.append({
            "kind": "warning",
            "text": f"You've overspent by {format_currency(spent - budget, currency)} this month. Consider reviewing your expenses.",
        })
    elif budget > 0:
        saved = budget - spent
        suggestions.append({
            "kind": "success",
            "text": f"Great job! You've saved {format_currency(saved, currency)} ({saved / budget * 100:.1f}% of budget) this month.",
        })

    for row in category_breakdown(expenses):
        if row["percentage"] > HIGH_CATEGORY_SHARE:
            suggestions.append({
                "kind": "info",
                "text": f"{row['category'].capitalize()} accounts for {row['percentage']:.1f}% of your spending. Consider ways to reduce this.",
            })

    month_days = days_in_month(today.year, today.month)
    days_remaining = month_days - today.day
    projected = spent / today.day * month_days
    if projected > budget and days_remaining > 0 and spent < budget:
        recommended = (budget - spent) / days_remaining
        suggestions.append({
            "kind": "warning",
            "text": f"At current rate, you'll exceed budget. Try to spend less than {format_currency(recommended, currency)} per day for rest of month.",
        })

    small = [e for e in expenses if float(e.amount) < SMALL_TRANSACTION_LIMIT]
    if len(small) > SMALL_TRANSACTION_COUNT:
        suggestions.append({
            "kind": "info",
            "text": f"You have {len(small)} small transactions totaling {format_currency(total(small), currency)}. Small expenses add up!",
        })

    return suggestions
