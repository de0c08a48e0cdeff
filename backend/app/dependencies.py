"""FastAPI dependencies for injection."""
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.user import User
from app.services import identity_service


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Resolve the acting user from the header set by the authentication proxy.

    A missing header or an email with no account is a 401, never recovered.
    """
    email: Optional[str] = request.headers.get(settings.AUTH_EMAIL_HEADER)
    return identity_service.current_user(db, email)
