"""Category API routes: delegates to category_service for ownership and invariants."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.category import CategoryCreate, CategoryUpdate, CategoryOut
from app.services import category_service

router = APIRouter()


def _out(db: Session, category) -> CategoryOut:
    out = CategoryOut.model_validate(category)
    out.wish_count = category_service.count_wishes(db, category)
    return out


@router.get("/", response_model=list[CategoryOut])
def list_categories(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """List the user's categories by name, each with its wish count."""
    counts = category_service.wish_counts(db, current_user)
    result = []
    for category in category_service.list_categories(db, current_user):
        out = CategoryOut.model_validate(category)
        out.wish_count = counts.get(category.category_id, 0)
        result.append(out)
    return result


@router.post("/", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    category = category_service.create_category(
        db=db,
        user=current_user,
        name=payload.name,
        description=payload.description,
        color=payload.color,
    )
    return _out(db, category)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(
    category_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _out(db, category_service.get_category(db, category_id, current_user))


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: str,
    payload: CategoryUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    category = category_service.update_category(
        db=db,
        category_id=category_id,
        user=current_user,
        name=payload.name,
        description=payload.description,
        color=payload.color,
    )
    return _out(db, category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete an empty category (409 while it still has wishes)."""
    category_service.delete_category(db, category_id, current_user)
