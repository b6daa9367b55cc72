# app/api/deps.py
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import jwt
import uuid

from app.core.database import get_async_session
from app.core.auth import User, TOKEN_AUDIENCE
from app.core.clock import Clock, get_clock
from app.core.config import settings
from app.core.exceptions import NotAuthenticatedError

# Security schemes
optional_security = HTTPBearer(auto_error=False)

__all__ = ["get_current_user", "get_optional_current_user", "get_clock", "Clock"]

def _extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """
    Look for the access token in the Authorization header, then the
    query string, then the access_token cookie.
    """
    if credentials and credentials.credentials:
        return credentials.credentials
    
    token = request.query_params.get("token") or request.query_params.get("access_token")
    if token:
        return token
    
    token = request.cookies.get("access_token")
    # Remove "Bearer " prefix if present in cookie
    if token and token.startswith("Bearer "):
        token = token[7:]
    return token

async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security)
) -> User:
    """
    Resolve the owner of the request. Every expense, bill and settings
    operation is scoped to the user returned here.
    """
    token = _extract_token(request, credentials)
    if not token:
        raise NotAuthenticatedError()
    
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=TOKEN_AUDIENCE,
        )
    except jwt.ExpiredSignatureError:
        raise NotAuthenticatedError("Token has expired")
    except jwt.InvalidTokenError:
        raise NotAuthenticatedError("Invalid token")
    
    user_id_str = payload.get("sub")
    if not user_id_str:
        raise NotAuthenticatedError("Invalid token: missing user ID")
    
    try:
        user_id = uuid.UUID(user_id_str)
    except ValueError:
        raise NotAuthenticatedError("Invalid user ID format in token")
    
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalars().first()
    
    if not user:
        raise NotAuthenticatedError("User not found")
    if not user.is_active:
        raise NotAuthenticatedError("Inactive user")
    
    return user

# Optional version of get_current_user that doesn't raise exceptions
async def get_optional_current_user(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security)
) -> Optional[User]:
    """
    Similar to get_current_user but returns None instead of raising when
    authentication fails. Used by logout, which should work either way.
    """
    try:
        return await get_current_user(request, db, credentials)
    except NotAuthenticatedError:
        return None
