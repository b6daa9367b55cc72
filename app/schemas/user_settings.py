# app/schemas/user_settings.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
import uuid

class UserSettingsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: uuid.UUID
    monthly_budget: float
    currency: str
    start_of_week: int
    notifications_enabled: bool
    last_seen_period: Optional[str] = None

# Fields accepted on PATCH /settings
class UserSettingsUpdate(BaseModel):
    monthly_budget: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=1, max_length=8)
    start_of_week: Optional[int] = Field(None, ge=0, le=6, description="0=Sunday .. 6=Saturday")
    notifications_enabled: Optional[bool] = None

class MonthEndReportFlag(BaseModel):
    period: Optional[str] = None
    label: Optional[str] = None
