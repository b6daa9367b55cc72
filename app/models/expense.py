# app/models/expense.py
import uuid
import enum
from datetime import datetime
from sqlalchemy import CheckConstraint, Column, String, ForeignKey, Float, Enum, DateTime, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base

class ExpenseCategory(str, enum.Enum):
    food = "food"
    transport = "transport"
    groceries = "groceries"
    bills = "bills"
    personal = "personal"
    others = "others"

class PaymentMode(str, enum.Enum):
    cash = "cash"
    upi = "upi"
    card = "card"

class Expense(Base):
    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_expenses_amount_positive"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    item = Column(String(length=150), nullable=False)
    amount = Column(Float, nullable=False)
    category = Column(Enum(ExpenseCategory), nullable=False, default=ExpenseCategory.others)
    payment_mode = Column(Enum(PaymentMode), nullable=False, default=PaymentMode.cash)
    date = Column(DateTime, nullable=False, index=True)
    notes = Column(String(length=500), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="expenses")        # see core/auth.py

    def __repr__(self):
        return f"<Expense item={self.item} amount={self.amount} user_id={self.user_id}>"
