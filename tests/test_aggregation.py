from datetime import date, datetime
from types import SimpleNamespace

import pytest

from app.utils import aggregation


def _expense(category, amount, when=datetime(2024, 3, 10, 12, 0), mode="cash"):
    return SimpleNamespace(category=category, amount=amount, date=when, payment_mode=mode)


def test_total_sums_amounts_and_is_zero_for_empty():
    expenses = [_expense("food", 120.5), _expense("transport", 30), _expense("bills", 599)]

    assert aggregation.total(expenses) == pytest.approx(749.5)
    assert aggregation.total([]) == 0


def test_category_breakdown_groups_sorts_and_computes_percentages():
    expenses = [_expense("food", 100), _expense("food", 50), _expense("transport", 50)]

    breakdown = aggregation.category_breakdown(expenses)

    assert breakdown == [
        {"category": "food", "amount": 150, "percentage": 75.0},
        {"category": "transport", "amount": 50, "percentage": 25.0},
    ]


def test_breakdown_percentages_add_up_to_100():
    expenses = [
        _expense("food", 33.33),
        _expense("groceries", 66.67),
        _expense("personal", 12.01),
        _expense("others", 7),
    ]

    breakdown = aggregation.category_breakdown(expenses)

    assert sum(row["percentage"] for row in breakdown) == pytest.approx(100.0)


def test_breakdown_ties_follow_category_order():
    expenses = [_expense("others", 40), _expense("food", 40), _expense("bills", 40)]

    assert [row["category"] for row in aggregation.category_breakdown(expenses)] == ["food", "bills", "others"]


def test_breakdown_does_not_mutate_input():
    expenses = [_expense("transport", 10), _expense("food", 90)]
    snapshot = list(expenses)

    aggregation.category_breakdown(expenses)

    assert expenses == snapshot


def test_payment_mode_breakdown():
    expenses = [
        _expense("food", 200, mode="upi"),
        _expense("food", 100, mode="cash"),
        _expense("bills", 100, mode="card"),
    ]

    breakdown = aggregation.payment_mode_breakdown(expenses)

    assert [row["mode"] for row in breakdown] == ["upi", "cash", "card"]
    assert breakdown[0]["percentage"] == pytest.approx(50.0)


def test_breakdown_of_zero_total_has_zero_percentages():
    assert aggregation.category_breakdown([]) == []


def test_filter_by_period_includes_both_boundary_days():
    first = _expense("food", 1, when=datetime(2024, 3, 1, 0, 0))
    late_on_last = _expense("food", 2, when=datetime(2024, 3, 31, 23, 59))
    inside = _expense("food", 3, when=datetime(2024, 3, 15, 8, 0))
    before = _expense("food", 4, when=datetime(2024, 2, 29, 23, 59))
    after = _expense("food", 5, when=datetime(2024, 4, 1, 0, 0))

    kept = aggregation.filter_by_period(
        [first, late_on_last, inside, before, after],
        datetime(2024, 3, 1, 10, 0),
        date(2024, 3, 31),
    )

    assert kept == [first, late_on_last, inside]


def test_budget_progress_is_capped_and_safe_without_budget():
    assert aggregation.budget_progress(250, 1000) == pytest.approx(25.0)
    assert aggregation.budget_progress(5000, 1000) == 100.0
    assert aggregation.budget_progress(5000, 0) == 0
    assert aggregation.budget_progress(0, 0) == 0


def test_remaining_budget_goes_negative_when_overspent():
    assert aggregation.remaining_budget(spent=700, budget=1000) == 300
    assert aggregation.remaining_budget(spent=1000, budget=700) == -300


def test_week_and_day_helpers():
    today = date(2024, 3, 10)  # Sunday
    expenses = [
        _expense("food", 10, when=datetime(2024, 3, 4, 9, 0)),   # Monday
        _expense("food", 20, when=datetime(2024, 3, 10, 20, 0)),  # Sunday
        _expense("food", 40, when=datetime(2024, 3, 3, 9, 0)),   # previous Sunday
    ]

    assert aggregation.total(aggregation.today_expenses(expenses, today)) == 20
    # Week starting Monday: 4th..10th
    assert aggregation.total(aggregation.week_expenses(expenses, today, start_of_week=1)) == 30
    # Week starting Sunday: 10th..16th
    assert aggregation.total(aggregation.week_expenses(expenses, today, start_of_week=0)) == 20
    assert aggregation.total(aggregation.month_expenses(expenses, today)) == 70


def test_daily_totals_are_zero_filled():
    expenses = [
        _expense("food", 10, when=datetime(2024, 3, 4, 9, 0)),
        _expense("food", 5, when=datetime(2024, 3, 4, 18, 0)),
        _expense("food", 7, when=datetime(2024, 3, 6, 9, 0)),
    ]

    totals = aggregation.daily_totals(expenses, date(2024, 3, 4))

    assert [row["date"] for row in totals][:3] == ["2024-03-04", "2024-03-05", "2024-03-06"]
    assert [row["amount"] for row in totals] == [15, 0, 7, 0, 0, 0, 0]
    assert aggregation.daily_average(expenses) == pytest.approx(22 / 7)


def test_top_categories_limits_results():
    expenses = [_expense(c, a) for c, a in [("food", 5), ("bills", 50), ("transport", 20), ("others", 1)]]

    assert [row["category"] for row in aggregation.top_categories(expenses, limit=2)] == ["bills", "transport"]


def test_spending_insights():
    current = [
        _expense("food", 300, when=datetime(2024, 3, 2, 12, 0), mode="upi"),
        _expense("food", 100, when=datetime(2024, 3, 5, 12, 0), mode="upi"),
        _expense("transport", 100, when=datetime(2024, 3, 5, 18, 0), mode="cash"),
    ]
    previous = [
        _expense("food", 200, when=datetime(2024, 2, 2, 12, 0)),
        _expense("transport", 95, when=datetime(2024, 2, 3, 12, 0)),
    ]

    insights = aggregation.spending_insights(current, previous, currency="₹")
    texts = {row["kind"]: row["text"] for row in insights}

    assert texts["top_day"] == "Highest spending day: 02 Mar (₹300.00)"
    assert texts["category_change"] == "Food increased by 100.0% from last month"
    assert texts["average_transaction"] == "Average transaction: ₹166.67"
    assert texts["payment_mode"] == "Most used payment: UPI (2 transactions)"
    # Transport moved by ~5%, below the reporting threshold
    assert sum(1 for row in insights if row["kind"] == "category_change") == 1


def test_savings_suggestions_when_overspent():
    expenses = [_expense("food", 800), _expense("transport", 400)]

    suggestions = aggregation.savings_suggestions(expenses, budget=1000, today=date(2024, 3, 20))

    assert suggestions[0] == {
        "kind": "warning",
        "text": "You've overspent by ₹200.00 this month. Consider reviewing your expenses.",
    }
    assert any("Food accounts for 66.7%" in row["text"] for row in suggestions)


def test_savings_suggestions_projects_overrun():
    # 600 spent by the 10th of a 31-day month projects to 1860
    expenses = [_expense("food", 200), _expense("transport", 200), _expense("groceries", 200)]

    suggestions = aggregation.savings_suggestions(expenses, budget=1000, today=date(2024, 3, 10))

    assert suggestions[0]["kind"] == "success"
    assert "40.0% of budget" in suggestions[0]["text"]
    pace = [row for row in suggestions if "At current rate" in row["text"]]
    assert pace and "₹19.05 per day" in pace[0]["text"]


def test_savings_suggestions_flags_many_small_transactions():
    expenses = [_expense("food", 20) for _ in range(21)]

    suggestions = aggregation.savings_suggestions(expenses, budget=50000, today=date(2024, 3, 28))

    assert any(row["text"].startswith("You have 21 small transactions totaling ₹420.00") for row in suggestions)


def test_format_currency():
    assert aggregation.format_currency(1234.5) == "₹1,234.50"
    assert aggregation.format_currency(12, "$") == "$12.00"
    assert aggregation.format_currency(123456) == "₹1,23,456.00"
    assert aggregation.format_currency(12345678.9) == "₹1,23,45,678.90"
    assert aggregation.format_currency(-1500) == "₹-1,500.00"
