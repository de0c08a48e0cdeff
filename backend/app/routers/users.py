"""User / identity API routes."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.user import LoginRequest, UserOut
from app.services import identity_service

router = APIRouter()


@router.post("/login", response_model=UserOut)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Called by the authentication proxy after a successful OAuth login."""
    return identity_service.resolve_or_create(
        db=db,
        email=payload.email,
        display_name=payload.name,
        avatar_url=payload.picture,
    )


@router.get("/me", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_me(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Delete the account together with all of its categories and wishes."""
    identity_service.delete_user(db, current_user)
