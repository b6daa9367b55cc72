# app/schemas/bill.py
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
import uuid
from app.models.expense import PaymentMode
from app.utils.periods import to_naive_utc

BillStatus = Literal["paid", "pending", "overdue"]

class BillBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=150, description="Bill name, e.g. Rent, WiFi")
    amount: float = Field(..., gt=0, description="Amount due every month")
    due_date: int = Field(..., ge=1, le=31, description="Day of month the bill is due")
    category: Optional[str] = Field(None, max_length=32)
    is_active: bool = True

class BillCreate(BillBase):
    pass

class BillUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    amount: Optional[float] = Field(None, gt=0)
    due_date: Optional[int] = Field(None, ge=1, le=31)
    category: Optional[str] = Field(None, max_length=32)
    is_active: Optional[bool] = None

class BillRead(BillBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID

class BillPaymentCreate(BaseModel):
    payment_mode: PaymentMode = PaymentMode.cash
    paid_date: Optional[datetime] = Field(None, description="Defaults to now")

    @field_validator("paid_date")
    @classmethod
    def store_as_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value) if value is not None else None

class BillPaymentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    bill_id: Optional[uuid.UUID] = None
    bill_name: str
    amount: float
    payment_mode: str
    paid_date: datetime
    month_year: str

class BillWithStatus(BaseModel):
    bill: BillRead
    status: BillStatus
    is_paid: bool

class BillStats(BaseModel):
    total: int
    paid: int
    pending: int
    total_amount: float
    paid_amount: float
    pending_amount: float

class BillStatusResponse(BaseModel):
    period: str
    bills: List[BillWithStatus]
    due_soon: List[BillRead] = []
    stats: BillStats
