"""Wish store — per-user CRUD plus the two status-changing entry points.

Responsibilities:
- Ownership: every lookup is filtered by owner; foreign ids read as missing
- Category binding: a wish may only reference a category of the same owner
- Status: ``update_wish`` and ``change_status`` both go through
  ``workflow.transition``; nothing else writes ``Wish.status``
- Atomicity: rules are checked before any field changes, and mutating
  lookups lock the target row until commit
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from app.exceptions import WishNotFound
from app.models.user import User
from app.models.wish import Wish, WishStatus
from app.services import category_service, validation, workflow

logger = logging.getLogger(__name__)


def _owned_query(db: Session, user: User):
    return db.query(Wish).filter(Wish.owner_user_id == user.user_id)


def _get_owned(db: Session, wish_id: str, user: User, for_update: bool = False) -> Wish:
    query = _owned_query(db, user).filter(Wish.wish_id == wish_id)
    if for_update:
        # of=Wish: the joined category row is not part of the lock
        query = query.with_for_update(of=Wish)
    wish = query.first()
    if not wish:
        raise WishNotFound(wish_id)
    return wish


def _newest_first(query):
    return query.order_by(Wish.created_at.desc()).all()


def list_wishes(db: Session, user: User) -> list[Wish]:
    logger.debug("Listing wishes for user %s", user.email)
    return _newest_first(_owned_query(db, user))


def get_wish(db: Session, wish_id: str, user: User) -> Wish:
    return _get_owned(db, wish_id, user)


def list_by_status(db: Session, user: User, status: WishStatus) -> list[Wish]:
    return _newest_first(_owned_query(db, user).filter(Wish.status == WishStatus(status)))


def list_by_category(db: Session, user: User, category_id: str) -> list[Wish]:
    category = category_service.assert_owned(db, category_id, user)
    return _newest_first(_owned_query(db, user).filter(Wish.category_id == category.category_id))


def list_by_category_and_status(
    db: Session, user: User, category_id: str, status: WishStatus
) -> list[Wish]:
    category = category_service.assert_owned(db, category_id, user)
    return _newest_first(
        _owned_query(db, user).filter(
            Wish.category_id == category.category_id,
            Wish.status == WishStatus(status),
        )
    )


def board(db: Session, user: User, category_id: Optional[str] = None) -> dict[WishStatus, list[Wish]]:
    """Group the user's wishes into the three Kanban columns."""
    if category_id is not None:
        wishes = list_by_category(db, user, category_id)
    else:
        wishes = list_wishes(db, user)
    columns: dict[WishStatus, list[Wish]] = {status: [] for status in WishStatus}
    for wish in wishes:
        columns[WishStatus(wish.status)].append(wish)
    return columns


def create_wish(
    db: Session,
    user: User,
    title: str,
    category_id: str,
    description: Optional[str] = None,
    remarks: Optional[str] = None,
    status: Optional[WishStatus] = None,
) -> Wish:
    """Create a wish in one of the user's categories.

    The initial status is taken as given (default WISH); ``achieved_at`` is
    left empty even when a wish is created directly as ACHIEVED.
    """
    title = validation.required_text("title", "Wish title", title, 200)
    description = validation.optional_text("description", "Description", description, 1000)
    remarks = validation.optional_text("remarks", "Remarks", remarks, 500)
    category = category_service.assert_owned(db, category_id, user)

    now = datetime.now(timezone.utc)
    wish = Wish(
        title=title,
        description=description,
        remarks=remarks,
        status=WishStatus(status) if status is not None else WishStatus.wish,
        category_id=category.category_id,
        owner_user_id=user.user_id,
        created_at=now,
        updated_at=now,
        achieved_at=None,
    )
    db.add(wish)
    db.commit()
    db.refresh(wish)
    logger.info("Created wish '%s' (%s) for user %s", title, wish.wish_id, user.email)
    return wish


def update_wish(
    db: Session,
    wish_id: str,
    user: User,
    title: str,
    category_id: str,
    description: Optional[str] = None,
    remarks: Optional[str] = None,
    status: Optional[WishStatus] = None,
) -> Wish:
    """Replace the editable fields; a differing ``status`` must be a legal move.

    An illegal move aborts the whole update before any field is touched.
    """
    title = validation.required_text("title", "Wish title", title, 200)
    description = validation.optional_text("description", "Description", description, 1000)
    remarks = validation.optional_text("remarks", "Remarks", remarks, 500)

    wish = _get_owned(db, wish_id, user, for_update=True)
    category = category_service.assert_owned(db, category_id, user)

    if status is not None and WishStatus(status) != wish.status:
        workflow.transition(wish, WishStatus(status))

    wish.title = title
    wish.description = description
    wish.remarks = remarks
    wish.category_id = category.category_id
    wish.category = category
    wish.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(wish)
    logger.info("Updated wish %s ('%s')", wish_id, title)
    return wish


def change_status(db: Session, wish_id: str, new_status: WishStatus, user: User) -> Wish:
    """Single-field status move used by the board's advance action."""
    wish = _get_owned(db, wish_id, user, for_update=True)
    previous = WishStatus(wish.status)
    workflow.transition(wish, WishStatus(new_status))
    wish.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(wish)
    logger.info("Changed status of wish %s from %s to %s", wish_id, previous.value, wish.status.value)
    return wish


def delete_wish(db: Session, wish_id: str, user: User) -> None:
    wish = _get_owned(db, wish_id, user, for_update=True)
    title = wish.title
    db.delete(wish)
    db.commit()
    logger.info("Deleted wish %s ('%s') for user %s", wish_id, title, user.email)
