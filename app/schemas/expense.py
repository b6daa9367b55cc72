# app/schemas/expense.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
import uuid
from app.models.expense import ExpenseCategory, PaymentMode
from app.utils.periods import to_naive_utc

class ExpenseBase(BaseModel):
    item: str = Field(..., min_length=1, max_length=150, description="What was bought, e.g. Lunch, Auto fare")
    amount: float = Field(..., gt=0, description="Amount spent")
    category: ExpenseCategory = ExpenseCategory.others
    payment_mode: PaymentMode = PaymentMode.cash
    date: datetime = Field(..., description="ISO 8601 date/time of the expense; offsets are stored as UTC")
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("date")
    @classmethod
    def store_as_naive_utc(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

class ExpenseCreate(ExpenseBase):
    pass

class ExpenseUpdate(BaseModel):
    item: Optional[str] = Field(None, min_length=1, max_length=150)
    amount: Optional[float] = Field(None, gt=0)
    category: Optional[ExpenseCategory] = None
    payment_mode: Optional[PaymentMode] = None
    date: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("date")
    @classmethod
    def store_as_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value) if value is not None else None

class ExpenseRead(ExpenseBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
