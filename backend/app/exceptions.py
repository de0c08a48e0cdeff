"""Business-rule failures raised by the service layer.

Every error is an ``HTTPException`` so it propagates unchanged from the point
of detection to the HTTP boundary, where FastAPI renders ``detail`` as-is.
``detail`` always carries a stable ``code`` and a user-readable ``message``.
"""
from typing import Any

from fastapi import HTTPException, status


class WishTrackerError(HTTPException):
    """Base class for all domain errors."""

    http_status: int = status.HTTP_400_BAD_REQUEST
    code: str = "error"

    def __init__(self, message: str, **extra: Any):
        self.message = message
        super().__init__(
            status_code=self.http_status,
            detail={"code": self.code, "message": message, **extra},
        )

    def __str__(self) -> str:
        return self.message


# --- NotFound -------------------------------------------------------------
# Also raised when the entity exists but belongs to someone else.

class NotFoundError(WishTrackerError):
    http_status = status.HTTP_404_NOT_FOUND
    code = "not_found"


class CategoryNotFound(NotFoundError):
    def __init__(self, category_id: Any):
        self.category_id = category_id
        super().__init__(f"Category not found with id: {category_id}")


class WishNotFound(NotFoundError):
    def __init__(self, wish_id: Any):
        self.wish_id = wish_id
        super().__init__(f"Wish not found with id: {wish_id}")


# --- Conflict / PreconditionFailed ----------------------------------------

class DuplicateCategoryName(WishTrackerError):
    http_status = status.HTTP_409_CONFLICT
    code = "already_exists"

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"A category with the name '{name}' already exists. Please choose a different name.",
            name=name,
        )


class CategoryNotEmpty(WishTrackerError):
    http_status = status.HTTP_409_CONFLICT
    code = "category_not_empty"

    def __init__(self, category_name: str, wish_count: int):
        self.category_name = category_name
        self.wish_count = wish_count
        super().__init__(
            f"Cannot delete category '{category_name}' because it has {wish_count} wish(es). "
            "Please move or delete the wishes first.",
            wish_count=wish_count,
        )


# --- Workflow -------------------------------------------------------------

class InvalidStatusTransition(WishTrackerError):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "invalid_transition"

    def __init__(self, from_status, to_status):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Invalid status transition from {from_status.value} to {to_status.value}. "
            "Valid transitions: WISH -> IN_PROGRESS -> ACHIEVED",
            from_status=from_status.value,
            to_status=to_status.value,
        )


# --- Input validation -----------------------------------------------------

class ValidationFailed(WishTrackerError):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "validation_error"

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message, field=field)


# --- Identity -------------------------------------------------------------

class IdentityError(WishTrackerError):
    """Malformed or missing identity input."""

    http_status = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"


class UserNotFound(IdentityError):
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User not found with email: {email}")
