"""Wish ORM model and its status enum."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from app.database import Base


class WishStatus(str, enum.Enum):
    wish = "WISH"
    in_progress = "IN_PROGRESS"
    achieved = "ACHIEVED"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    WishStatus.wish: "Wish",
    WishStatus.in_progress: "In Progress",
    WishStatus.achieved: "Achieved",
}


class Wish(Base):
    __tablename__ = "wishes"

    wish_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=True)
    # Only app.services.workflow may change this after creation
    status = Column(
        SAEnum(WishStatus, values_callable=lambda e: [m.value for m in e], name="wish_status"),
        nullable=False,
        default=WishStatus.wish,
        index=True,
    )
    remarks = Column(String(500), nullable=True)
    category_id = Column(String(36), ForeignKey("categories.category_id"), nullable=False, index=True)
    owner_user_id = Column(
        String(36), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    achieved_at = Column(DateTime(timezone=True), nullable=True)

    # One-way: categories hold no collection of wishes
    category = relationship("Category", lazy="joined")

    @property
    def category_name(self) -> str:
        return self.category.name

    @property
    def category_color(self) -> str:
        return self.category.color

    @property
    def is_wish(self) -> bool:
        return self.status == WishStatus.wish

    @property
    def is_in_progress(self) -> bool:
        return self.status == WishStatus.in_progress

    @property
    def is_achieved(self) -> bool:
        return self.status == WishStatus.achieved
