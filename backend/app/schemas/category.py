"""Pydantic schemas for Categories."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

HEX_COLOR_PATTERN = r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$"


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)  # server default when omitted


class CategoryUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    color: str = Field(pattern=HEX_COLOR_PATTERN)


class CategoryOut(BaseModel):
    category_id: str
    name: str
    description: Optional[str] = None
    color: str
    created_at: datetime
    wish_count: int = 0

    model_config = {"from_attributes": True}
