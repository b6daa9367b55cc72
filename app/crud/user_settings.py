# app/crud/user_settings.py
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.models.user_settings import UserSettings
from app.schemas.user_settings import UserSettingsUpdate

logger = logging.getLogger(__name__)

async def get_or_create_settings(user_id: uuid.UUID, db: AsyncSession) -> UserSettings:
    """Return the user's settings row, creating it with defaults on first access."""
    result = await db.execute(select(UserSettings).where(UserSettings.user_id == user_id))
    user_settings = result.scalar_one_or_none()
    if user_settings:
        return user_settings

    user_settings = UserSettings(
        user_id=user_id,
        monthly_budget=settings.DEFAULT_MONTHLY_BUDGET,
        currency=settings.DEFAULT_CURRENCY,
        start_of_week=settings.DEFAULT_START_OF_WEEK,
        notifications_enabled=True,
    )
    db.add(user_settings)
    try:
        await db.commit()
    except IntegrityError:
        # Another request created the row first
        await db.rollback()
        result = await db.execute(select(UserSettings).where(UserSettings.user_id == user_id))
        return result.scalar_one()
    await db.refresh(user_settings)
    logger.info(f"Created default settings for user {user_id}")
    return user_settings

async def update_settings(user_settings: UserSettings, settings_in: UserSettingsUpdate, db: AsyncSession) -> UserSettings:
    for field, value in settings_in.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(user_settings, field, value)
    db.add(user_settings)
    await db.commit()
    await db.refresh(user_settings)
    return user_settings

async def save_settings(user_settings: UserSettings, db: AsyncSession) -> UserSettings:
    db.add(user_settings)
    await db.commit()
    await db.refresh(user_settings)
    return user_settings
