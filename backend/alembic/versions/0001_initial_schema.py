"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Creates users, categories and wishes. Category names are unique per owner;
owned rows go away with their user.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

wish_status = sa.Enum("WISH", "IN_PROGRESS", "ACHIEVED", name="wish_status")


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
    )

    # --- categories ---
    op.create_table(
        "categories",
        sa.Column("category_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("color", sa.String(20), nullable=False, server_default="#6B7280"),
        sa.Column(
            "owner_user_id", sa.String(36),
            sa.ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("name", "owner_user_id", name="uq_category_name_owner"),
    )
    op.create_index("ix_categories_owner_user_id", "categories", ["owner_user_id"])

    # --- wishes ---
    op.create_table(
        "wishes",
        sa.Column("wish_id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.String(1000), nullable=True),
        sa.Column("status", wish_status, nullable=False, server_default="WISH"),
        sa.Column("remarks", sa.String(500), nullable=True),
        sa.Column("category_id", sa.String(36), sa.ForeignKey("categories.category_id"), nullable=False),
        sa.Column(
            "owner_user_id", sa.String(36),
            sa.ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("achieved_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_wishes_owner_user_id", "wishes", ["owner_user_id"])
    op.create_index("ix_wishes_category_id", "wishes", ["category_id"])
    op.create_index("ix_wishes_status", "wishes", ["status"])


def downgrade() -> None:
    op.drop_index("ix_wishes_status", table_name="wishes")
    op.drop_index("ix_wishes_category_id", table_name="wishes")
    op.drop_index("ix_wishes_owner_user_id", table_name="wishes")
    op.drop_table("wishes")
    op.drop_index("ix_categories_owner_user_id", table_name="categories")
    op.drop_table("categories")
    op.drop_table("users")
    wish_status.drop(op.get_bind(), checkfirst=True)
