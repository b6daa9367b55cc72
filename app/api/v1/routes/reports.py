# app/api/v1/routes/reports.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional

from app.api.deps import Clock, get_clock, get_current_user
from app.core.auth import User
from app.core.database import get_async_session
from app.crud.expense import get_expenses_for_month, get_expenses_for_user
from app.crud.user_settings import get_or_create_settings
from app.schemas.report import DashboardSummary, MonthlyReport
from app.utils import aggregation
from app.utils.periods import month_bounds, period_key, period_label, previous_period, parse_period_key, week_bounds

router = APIRouter(prefix="/reports", tags=["reports"])

def _rounded(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {**row, "amount": round(row["amount"], 2), "percentage": round(row["percentage"], 2)}
        for row in rows
    ]

@router.get("/dashboard", response_model=DashboardSummary)
async def get_dashboard_summary(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    """
    Today / this week / this month cards:
    - today: total, number of expenses, category breakdown
    - week: total, daily average, per-day totals (week starts per settings)
    - month: total vs. budget, remaining, progress percentage, top categories
    """
    user_settings = await get_or_create_settings(user.id, db)
    today = clock.today()
    week_start, week_end = week_bounds(today, user_settings.start_of_week)
    month_start, month_end = month_bounds(today.year, today.month)

    expenses = await get_expenses_for_user(
        user.id, db, start_date=min(week_start, month_start), end_date=max(week_end, month_end)
    )

    todays = aggregation.today_expenses(expenses, today)
    weeks = aggregation.week_expenses(expenses, today, user_settings.start_of_week)
    months = aggregation.month_expenses(expenses, today)

    budget = float(user_settings.monthly_budget)
    month_total = aggregation.total(months)

    return {
        "currency": user_settings.currency,
        "today": {
            "total": round(aggregation.total(todays), 2),
            "count": len(todays),
            "category_breakdown": _rounded(aggregation.category_breakdown(todays)),
        },
        "week": {
            "total": round(aggregation.total(weeks), 2),
            "daily_average": round(aggregation.daily_average(weeks), 2),
            "daily_totals": [
                {**row, "amount": round(row["amount"], 2)}
                for row in aggregation.daily_totals(weeks, week_start)
            ],
        },
        "month": {
            "total": round(month_total, 2),
            "budget": round(budget, 2),
            "remaining": round(aggregation.remaining_budget(month_total, budget), 2),
            "percentage": round(aggregation.budget_progress(month_total, budget), 2),
            "top_categories": _rounded(aggregation.top_categories(months, limit=5)),
        },
    }

@router.get("/monthly", response_model=MonthlyReport)
async def get_monthly_report(
    period: Optional[str] = Query(None, description="Calendar month as YYYY-MM, defaults to the current month"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    """
    Month report: totals against budget, saved (negative = overspent),
    category and payment mode breakdowns, insights and suggestions.
    """
    today = clock.today()
    period = period or period_key(today)
    year, month = parse_period_key(period)
    prev_year, prev_month = parse_period_key(previous_period(period))

    user_settings = await get_or_create_settings(user.id, db)
    expenses = await get_expenses_for_month(user.id, year, month, db)
    previous = await get_expenses_for_month(user.id, prev_year, prev_month, db)

    budget = float(user_settings.monthly_budget)
    spent = aggregation.total(expenses)
    saved = aggregation.remaining_budget(spent, budget)
    currency = user_settings.currency

    # Pace projections are measured at "today" within the reported month
    month_start, month_end = month_bounds(year, month)
    as_of = min(max(today, month_start), month_end)

    return {
        "month": period,
        "label": period_label(period),
        "currency": currency,
        "total_expenses": round(spent, 2),
        "budget": round(budget, 2),
        "saved": round(saved, 2),
        "saved_percentage": round(saved / budget * 100, 2) if budget > 0 else 0.0,
        "overspent": saved < 0,
        "transaction_count": len(expenses),
        "category_breakdown": _rounded(aggregation.category_breakdown(expenses)),
        "payment_mode_breakdown": _rounded(aggregation.payment_mode_breakdown(expenses)),
        "insights": aggregation.spending_insights(expenses, previous, currency),
        "suggestions": aggregation.savings_suggestions(expenses, budget, as_of, currency),
    }
