"""Field rules shared by the category and wish stores.

Checked before anything touches the session so a rejected payload never
leaves a half-applied entity behind.
"""
import re
from typing import Optional

from app.exceptions import ValidationFailed

HEX_COLOR = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")


def required_text(field: str, label: str, value: Optional[str], max_length: int) -> str:
    if value is None or not value.strip():
        raise ValidationFailed(field, f"{label} is required")
    if len(value) > max_length:
        raise ValidationFailed(field, f"{label} must not exceed {max_length} characters")
    return value


def optional_text(field: str, label: str, value: Optional[str], max_length: int) -> Optional[str]:
    if value is not None and len(value) > max_length:
        raise ValidationFailed(field, f"{label} must not exceed {max_length} characters")
    return value


def color(value: Optional[str]) -> str:
    if value is None or not HEX_COLOR.match(value):
        raise ValidationFailed("color", f"Color must be a hex code like #3B82F6, got {value!r}")
    return value
