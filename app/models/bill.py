# app/models/bill.py
import uuid
from datetime import datetime
from sqlalchemy import CheckConstraint, Column, String, ForeignKey, Float, Boolean, DateTime, Integer, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base

class Bill(Base):
    __tablename__ = "bills"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_bills_amount_positive"),
        CheckConstraint("due_date BETWEEN 1 AND 31", name="ck_bills_due_date_range"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(length=150), nullable=False)
    amount = Column(Float, nullable=False)
    # Day of month the bill falls due (1-31); clamped to the month length when resolving status
    due_date = Column(Integer, nullable=False)
    # Free-form tag; bill payments are always booked under the "bills" expense category
    category = Column(String(length=32), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="bills")
    # Payments outlive the bill: deleting a bill nulls payments.bill_id
    payments = relationship("BillPayment", back_populates="bill")

    def __repr__(self):
        return f"<Bill name={self.name} amount={self.amount} due_date={self.due_date} user_id={self.user_id}>"
