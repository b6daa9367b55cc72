# app/crud/bill_payment.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc
from app.models.bill_payment import BillPayment
from app.core.db_utils import with_db_retry
from typing import List, Optional
import uuid

# Payments are written only by utils/bill_payments.mark_bill_as_paid and never updated.

@with_db_retry()
async def get_payments_for_period(user_id: uuid.UUID, month_year: str, db: AsyncSession) -> List[BillPayment]:
    result = await db.execute(
        select(BillPayment)
        .where(BillPayment.user_id == user_id, BillPayment.month_year == month_year)
        .order_by(desc(BillPayment.paid_date))
    )
    return result.scalars().all()

@with_db_retry()
async def get_payment_for_bill(
    user_id: uuid.UUID,
    bill_id: uuid.UUID,
    month_year: str,
    db: AsyncSession,
) -> Optional[BillPayment]:
    result = await db.execute(
        select(BillPayment).where(
            BillPayment.user_id == user_id,
            BillPayment.bill_id == bill_id,
            BillPayment.month_year == month_year,
        )
    )
    return result.scalar_one_or_none()

