"""Category store — per-user CRUD with name uniqueness and a delete guard.

Every lookup is scoped by owner: a category belonging to another user is
reported exactly like one that does not exist.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import CategoryNotEmpty, CategoryNotFound, DuplicateCategoryName
from app.models.category import Category
from app.models.user import User
from app.models.wish import Wish
from app.services import validation

logger = logging.getLogger(__name__)


def _owned_query(db: Session, category_id: str, user: User):
    return db.query(Category).filter(
        Category.category_id == category_id,
        Category.owner_user_id == user.user_id,
    )


def _name_taken(db: Session, name: str, user: User) -> bool:
    return (
        db.query(Category.category_id)
        .filter(Category.name == name, Category.owner_user_id == user.user_id)
        .first()
        is not None
    )


def _is_name_conflict(exc: IntegrityError) -> bool:
    # PostgreSQL names the constraint; SQLite lists its columns instead
    message = str(exc.orig)
    return "uq_category_name_owner" in message or "categories.name, categories.owner_user_id" in message


def _commit_unique(db: Session, name: str) -> None:
    """Commit, turning a lost race on the (name, owner) constraint into a Conflict."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if not _is_name_conflict(exc):
            raise
        logger.warning("Lost a race on category name '%s'", name)
        raise DuplicateCategoryName(name) from exc


def list_categories(db: Session, user: User) -> list[Category]:
    logger.debug("Listing categories for user %s", user.email)
    return (
        db.query(Category)
        .filter(Category.owner_user_id == user.user_id)
        .order_by(Category.name.asc())
        .all()
    )


def get_category(db: Session, category_id: str, user: User) -> Category:
    category = _owned_query(db, category_id, user).first()
    if not category:
        raise CategoryNotFound(category_id)
    return category


def assert_owned(db: Session, category_id: str, user: User) -> Category:
    """Resolve a category the wish store is about to reference."""
    return get_category(db, category_id, user)


def count_wishes(db: Session, category: Category) -> int:
    return (
        db.query(func.count(Wish.wish_id))
        .filter(Wish.category_id == category.category_id)
        .scalar()
    )


def wish_counts(db: Session, user: User) -> dict[str, int]:
    """Wish count per category id for all of ``user``'s categories that have wishes."""
    rows = (
        db.query(Wish.category_id, func.count(Wish.wish_id))
        .filter(Wish.owner_user_id == user.user_id)
        .group_by(Wish.category_id)
        .all()
    )
    return {category_id: count for category_id, count in rows}


def create_category(
    db: Session,
    user: User,
    name: str,
    description: Optional[str] = None,
    color: Optional[str] = None,
) -> Category:
    name = validation.required_text("name", "Category name", name, 100)
    description = validation.optional_text("description", "Description", description, 500)
    color = validation.color(color if color is not None else settings.DEFAULT_CATEGORY_COLOR)

    if _name_taken(db, name, user):
        logger.warning("User %s already has a category named '%s'", user.email, name)
        raise DuplicateCategoryName(name)

    category = Category(
        name=name,
        description=description,
        color=color,
        owner_user_id=user.user_id,
        created_at=datetime.now(timezone.utc),
    )
    db.add(category)
    _commit_unique(db, name)
    db.refresh(category)
    logger.info("Created category '%s' (%s) for user %s", name, category.category_id, user.email)
    return category


def update_category(
    db: Session,
    category_id: str,
    user: User,
    name: str,
    description: Optional[str],
    color: str,
) -> Category:
    """Replace name, description and color. Renaming re-checks uniqueness."""
    name = validation.required_text("name", "Category name", name, 100)
    description = validation.optional_text("description", "Description", description, 500)
    color = validation.color(color)

    category = _owned_query(db, category_id, user).with_for_update().first()
    if not category:
        raise CategoryNotFound(category_id)

    if category.name != name and _name_taken(db, name, user):
        logger.warning("Rename of category %s to '%s' collides for user %s", category_id, name, user.email)
        raise DuplicateCategoryName(name)

    category.name = name
    category.description = description
    category.color = color
    _commit_unique(db, name)
    db.refresh(category)
    logger.info("Updated category %s ('%s')", category_id, name)
    return category


def delete_category(db: Session, category_id: str, user: User) -> None:
    """Delete an empty category; one still referenced by wishes stays put."""
    category = _owned_query(db, category_id, user).with_for_update().first()
    if not category:
        raise CategoryNotFound(category_id)

    wish_count = count_wishes(db, category)
    if wish_count > 0:
        logger.warning("Refused to delete category %s: %d wish(es) remain", category_id, wish_count)
        raise CategoryNotEmpty(category.name, wish_count)

    name = category.name
    db.delete(category)
    db.commit()
    logger.info("Deleted category %s ('%s') for user %s", category_id, name, user.email)
