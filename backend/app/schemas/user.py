"""Pydantic schemas for Users."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Verified identity handed over by the authentication proxy."""

    email: str
    name: Optional[str] = None
    picture: Optional[str] = None


class UserOut(BaseModel):
    user_id: str
    email: str
    display_name: str
    avatar_url: Optional[str] = None
    created_at: datetime
    last_login_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
