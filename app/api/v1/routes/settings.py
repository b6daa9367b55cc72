# app/api/v1/routes/settings.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.user_settings import MonthEndReportFlag, UserSettingsRead, UserSettingsUpdate
from app.crud.user_settings import get_or_create_settings, save_settings, update_settings
from app.utils.periods import period_label
from app.utils.rollover import reconcile_month_rollover
from app.api.deps import Clock, get_clock, get_current_user
from app.core.database import get_async_session
from app.core.auth import User

router = APIRouter(prefix="/settings", tags=["settings"])

def _report_flag(period) -> MonthEndReportFlag:
    if not period:
        return MonthEndReportFlag()
    return MonthEndReportFlag(period=period, label=period_label(period))

@router.get("", response_model=UserSettingsRead)
async def read_settings(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Current settings; created with defaults on first access."""
    return await get_or_create_settings(user.id, db)

@router.patch("", response_model=UserSettingsRead)
async def update_settings_endpoint(
    settings_in: UserSettingsUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    user_settings = await get_or_create_settings(user.id, db)
    return await update_settings(user_settings, settings_in, db)

@router.post("/reconcile", response_model=MonthEndReportFlag)
async def reconcile_settings(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    """
    Month rollover step: clients call this once per session. When the
    calendar month changed since the last call, the closed month is flagged
    for a month-end report and returned.
    """
    user_settings = await get_or_create_settings(user.id, db)
    reconcile_month_rollover(user_settings, clock.today())
    user_settings = await save_settings(user_settings, db)
    return _report_flag(user_settings.month_end_report_period)

@router.get("/month-end-report", response_model=MonthEndReportFlag)
async def read_month_end_report_flag(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    user_settings = await get_or_create_settings(user.id, db)
    return _report_flag(user_settings.month_end_report_period)

@router.delete("/month-end-report", status_code=status.HTTP_204_NO_CONTENT)
async def clear_month_end_report_flag(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    user_settings = await get_or_create_settings(user.id, db)
    user_settings.month_end_report_period = None
    await save_settings(user_settings, db)
    return None
