# app/api/v1/routes/users.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import User, UserRead
from app.core.database import get_async_session
from app.api.deps import get_current_user
from app.schemas.user import ProfileUpdate

router = APIRouter(tags=["User Management"])

# 1) GET /users/me
@router.get("/me", response_model=UserRead)
async def read_own_profile(user: User = Depends(get_current_user)):
    """Get current user's profile"""
    return user

# 2) PATCH /users/me
@router.patch("/me", response_model=UserRead)
async def update_own_profile(
    profile_in: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """Update current user's profile"""
    update_dict = profile_in.model_dump(exclude_unset=True)
    if not update_dict:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields provided for update"
        )
    for field, value in update_dict.items():
        setattr(user, field, value)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user
