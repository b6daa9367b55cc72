# app/crud/bill.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from app.models.bill import Bill
from app.core.db_utils import with_db_retry
from typing import List, Optional
import uuid
from app.schemas.bill import BillCreate, BillUpdate

# Fields an update may explicitly clear with null
NULLABLE_FIELDS = {"category"}

@with_db_retry()
async def get_bills_for_user(user_id: uuid.UUID, db: AsyncSession, active_only: bool = True) -> List[Bill]:
    """Bills ordered by due day."""
    query = select(Bill).where(Bill.user_id == user_id)
    if active_only:
        query = query.where(Bill.is_active.is_(True))
    result = await db.execute(query.order_by(Bill.due_date, Bill.name))
    return result.scalars().all()

@with_db_retry()
async def get_bill_by_id(bill_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Bill]:
    result = await db.execute(
        select(Bill).where(Bill.id == bill_id, Bill.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_bill_for_user(user_id: uuid.UUID, bill_in: BillCreate, db: AsyncSession) -> Bill:
    new_bill = Bill(**bill_in.model_dump(), user_id=user_id)
    db.add(new_bill)
    await db.commit()
    await db.refresh(new_bill)
    return new_bill

async def update_bill(bill: Bill, bill_in: BillUpdate, db: AsyncSession) -> Bill:
    for field, value in bill_in.model_dump(exclude_unset=True).items():
        if value is None and field not in NULLABLE_FIELDS:
            continue
        setattr(bill, field, value)
    db.add(bill)
    await db.commit()
    await db.refresh(bill)
    return bill

async def delete_bill(bill: Bill, db: AsyncSession) -> None:
    # Payment rows keep their snapshots; the ORM nulls their bill_id
    await db.delete(bill)
    await db.commit()
