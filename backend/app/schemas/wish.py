"""Pydantic schemas for Wishes.

``WishOut`` is fully materialized: it carries the category's name and color
so a board can be rendered without a second lookup.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, computed_field

from app.models.wish import WishStatus
from app.services import workflow


class WishCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    remarks: Optional[str] = Field(None, max_length=500)
    category_id: str
    status: Optional[WishStatus] = None


class WishUpdate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    remarks: Optional[str] = Field(None, max_length=500)
    category_id: str
    status: Optional[WishStatus] = None  # omitted or unchanged → no transition


class StatusChange(BaseModel):
    status: WishStatus


class WishOut(BaseModel):
    wish_id: str
    title: str
    description: Optional[str] = None
    status: WishStatus
    remarks: Optional[str] = None
    category_id: str
    category_name: str
    category_color: str
    created_at: datetime
    updated_at: datetime
    achieved_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def status_label(self) -> str:
        return self.status.display_name

    @computed_field
    @property
    def next_status(self) -> Optional[WishStatus]:
        return workflow.next_status(self.status)


class BoardOut(BaseModel):
    """Kanban columns, newest wish first in each."""

    wish: list[WishOut] = []
    in_progress: list[WishOut] = []
    achieved: list[WishOut] = []
