# app/schemas/report.py
from typing import List
from pydantic import BaseModel

class CategoryShare(BaseModel):
    category: str
    amount: float
    percentage: float

class PaymentModeShare(BaseModel):
    mode: str
    amount: float
    percentage: float

class DailyTotal(BaseModel):
    date: str
    amount: float

class Message(BaseModel):
    kind: str
    text: str

class TodaySummary(BaseModel):
    total: float
    count: int
    category_breakdown: List[CategoryShare]

class WeekSummary(BaseModel):
    total: float
    daily_average: float
    daily_totals: List[DailyTotal]

class MonthSummary(BaseModel):
    total: float
    budget: float
    remaining: float
    percentage: float
    top_categories: List[CategoryShare]

class DashboardSummary(BaseModel):
    currency: str
    today: TodaySummary
    week: WeekSummary
    month: MonthSummary

class MonthlyReport(BaseModel):
    month: str
    label: str
    currency: str
    total_expenses: float
    budget: float
    saved: float
    saved_percentage: float
    overspent: bool
    transaction_count: int
    category_breakdown: List[CategoryShare]
    payment_mode_breakdown: List[PaymentModeShare]
    insights: List[Message]
    suggestions: List[Message]
