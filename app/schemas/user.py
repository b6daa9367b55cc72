# app/schemas/user.py
# UserRead / UserCreate live in core/auth.py next to the fastapi-users wiring.
from typing import Optional
from pydantic import BaseModel, Field

# Fields accepted on PATCH /users/me
class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, max_length=150)
