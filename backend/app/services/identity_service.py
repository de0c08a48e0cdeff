"""Identity resolver — maps a verified external principal to a local User.

The OAuth handshake happens upstream; this module only ever sees the
already-verified (email, name, picture) triple.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import IdentityError, UserNotFound
from app.models.category import Category
from app.models.user import User
from app.models.wish import Wish

logger = logging.getLogger(__name__)


def _find_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def _record_login(db: Session, user: User, now: datetime) -> User:
    user.last_login_at = now
    db.commit()
    db.refresh(user)
    logger.debug("User %s logged in again", user.email)
    return user


def resolve_or_create(
    db: Session,
    email: Optional[str],
    display_name: Optional[str] = None,
    avatar_url: Optional[str] = None,
) -> User:
    """Return the User for ``email``, creating it on first sight.

    Returning users only get ``last_login_at`` bumped; name and avatar stay
    as recorded at first login.
    """
    if email is None or not email.strip():
        logger.warning("Rejected identity without an email")
        raise IdentityError("Email not found in authenticated user info")

    now = datetime.now(timezone.utc)
    user = _find_by_email(db, email)
    if user:
        return _record_login(db, user, now)

    if not display_name or not display_name.strip():
        display_name = email.split("@")[0]

    user = User(
        email=email,
        display_name=display_name,
        avatar_url=avatar_url,
        created_at=now,
        last_login_at=now,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent first login for the same email inserted the row first
        db.rollback()
        user = _find_by_email(db, email)
        if not user:
            raise
        logger.info("Concurrent first login for %s; reusing the stored user", email)
        return _record_login(db, user, now)
    db.refresh(user)
    logger.info("Created user %s (%s)", user.user_id, email)
    return user


def current_user(db: Session, principal_email: Optional[str]) -> User:
    """Look up the acting user; unknown or missing emails are an auth failure."""
    if principal_email is None or not principal_email.strip():
        raise IdentityError("No authenticated user found")
    user = _find_by_email(db, principal_email)
    if not user:
        raise UserNotFound(principal_email)
    return user


def delete_user(db: Session, user: User) -> None:
    """Delete a user and everything they own: wishes, then categories, then the user."""
    user_id = user.user_id
    wishes = db.query(Wish).filter(Wish.owner_user_id == user_id).delete(synchronize_session=False)
    categories = db.query(Category).filter(Category.owner_user_id == user_id).delete(synchronize_session=False)
    db.delete(user)
    db.commit()
    logger.info("Deleted user %s with %d categories and %d wishes", user_id, categories, wishes)
