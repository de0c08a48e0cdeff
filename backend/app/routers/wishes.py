"""Wish API routes: both mutation shapes funnel through the workflow engine."""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.models.wish import WishStatus
from app.schemas.wish import BoardOut, StatusChange, WishCreate, WishOut, WishUpdate
from app.services import wish_service

router = APIRouter()


@router.get("/", response_model=list[WishOut])
def list_wishes(
    status_filter: Optional[WishStatus] = Query(None, alias="status"),
    category_id: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the user's wishes, newest first, optionally by category and/or status."""
    if category_id and status_filter:
        return wish_service.list_by_category_and_status(db, current_user, category_id, status_filter)
    if category_id:
        return wish_service.list_by_category(db, current_user, category_id)
    if status_filter:
        return wish_service.list_by_status(db, current_user, status_filter)
    return wish_service.list_wishes(db, current_user)


@router.get("/board", response_model=BoardOut)
def get_board(
    category_id: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Wishes grouped into the three Kanban columns."""
    columns = wish_service.board(db, current_user, category_id)
    return BoardOut(
        wish=[WishOut.model_validate(w) for w in columns[WishStatus.wish]],
        in_progress=[WishOut.model_validate(w) for w in columns[WishStatus.in_progress]],
        achieved=[WishOut.model_validate(w) for w in columns[WishStatus.achieved]],
    )


@router.post("/", response_model=WishOut, status_code=status.HTTP_201_CREATED)
def create_wish(
    payload: WishCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return wish_service.create_wish(
        db=db,
        user=current_user,
        title=payload.title,
        category_id=payload.category_id,
        description=payload.description,
        remarks=payload.remarks,
        status=payload.status,
    )


@router.get("/{wish_id}", response_model=WishOut)
def get_wish(
    wish_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return wish_service.get_wish(db, wish_id, current_user)


@router.put("/{wish_id}", response_model=WishOut)
def update_wish(
    wish_id: str,
    payload: WishUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Full update; a changed status must be the next legal step."""
    return wish_service.update_wish(
        db=db,
        wish_id=wish_id,
        user=current_user,
        title=payload.title,
        category_id=payload.category_id,
        description=payload.description,
        remarks=payload.remarks,
        status=payload.status,
    )


@router.post("/{wish_id}/status", response_model=WishOut)
def change_status(
    wish_id: str,
    payload: StatusChange,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Move a wish one step along WISH → IN_PROGRESS → ACHIEVED."""
    return wish_service.change_status(db, wish_id, payload.status, current_user)


@router.delete("/{wish_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_wish(
    wish_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    wish_service.delete_wish(db, wish_id, current_user)
