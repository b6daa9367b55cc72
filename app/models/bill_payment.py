# app/models/bill_payment.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Float, DateTime, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base

class BillPayment(Base):
    __tablename__ = "bills_paid"
    __table_args__ = (
        # One payment per bill per calendar month, enforced by the database
        UniqueConstraint("user_id", "bill_id", "month_year", name="uq_bills_paid_user_bill_period"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    bill_id = Column(Uuid(as_uuid=True), ForeignKey("bills.id", ondelete="SET NULL"), nullable=True)
    # Snapshots taken at payment time; later bill edits do not touch them
    bill_name = Column(String(length=150), nullable=False)
    amount = Column(Float, nullable=False)
    payment_mode = Column(String(length=16), nullable=False)
    paid_date = Column(DateTime, nullable=False)
    month_year = Column(String(length=7), nullable=False, index=True)  # YYYY-MM

    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="bill_payments")
    bill = relationship("Bill", back_populates="payments")

    def __repr__(self):
        return f"<BillPayment bill_name={self.bill_name} month_year={self.month_year} user_id={self.user_id}>"
