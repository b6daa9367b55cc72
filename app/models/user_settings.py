# app/models/user_settings.py
import uuid
from datetime import datetime
from sqlalchemy import CheckConstraint, Column, String, ForeignKey, Float, Boolean, DateTime, Integer, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base

class UserSettings(Base):
    __tablename__ = "user_settings"
    __table_args__ = (
        CheckConstraint("monthly_budget >= 0", name="ck_user_settings_budget_non_negative"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    monthly_budget = Column(Float, nullable=False, default=0.0)
    currency = Column(String(length=8), nullable=False, default="₹")
    start_of_week = Column(Integer, nullable=False, default=1)  # 0=Sunday .. 6=Saturday
    notifications_enabled = Column(Boolean, nullable=False, default=True)

    # Month rollover bookkeeping, see utils/rollover.py
    last_seen_period = Column(String(length=7), nullable=True)
    month_end_report_period = Column(String(length=7), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="settings")

    def __repr__(self):
        return f"<UserSettings budget={self.monthly_budget} currency={self.currency} user_id={self.user_id}>"
