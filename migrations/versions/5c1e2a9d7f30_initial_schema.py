"""initial schema

Revision ID: 5c1e2a9d7f30
Revises:
Create Date: 2025-11-03 09:12:41.518204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e2a9d7f30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create images, users, spots, lists, posts and their link tables."""
    op.create_table(
        "images",
        sa.Column("image_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("image_name", sa.String(length=255), nullable=True),
        sa.Column("blob_url", sa.String(length=500), nullable=True),
        sa.Column("content_type", sa.String(length=100), nullable=True),
        sa.Column("file_size", sa.BigInteger(), nullable=True),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("image_id"),
    )
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("display_name", sa.String(length=55), nullable=False),
        sa.Column("username", sa.String(length=21), nullable=False),
        sa.Column("user_email", sa.String(length=35), nullable=False),
        sa.Column("biography", sa.String(length=450), nullable=True),
        sa.Column("profile_image_id", sa.Integer(), nullable=True),
        sa.Column("creation_date", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["profile_image_id"], ["images.image_id"]),
        sa.PrimaryKeyConstraint("user_id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("user_email"),
    )
    op.create_table(
        "spot",
        sa.Column("spot_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("spot_name", sa.String(length=55), nullable=False),
        sa.Column("country", sa.String(length=30), nullable=False),
        sa.Column("city", sa.String(length=35), nullable=False),
        sa.Column("category", sa.String(length=30), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("spot_image_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["spot_image_id"], ["images.image_id"]),
        sa.PrimaryKeyConstraint("spot_id"),
    )
    op.create_table(
        "list",
        sa.Column("list_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("list_name", sa.String(length=45), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("list_id"),
    )
    op.create_table(
        "list_has_spot",
        sa.Column("list_id", sa.Integer(), nullable=False),
        sa.Column("spot_id", sa.Integer(), nullable=False),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("list_thumbnail_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["list_id"], ["list.list_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["spot_id"], ["spot.spot_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["list_thumbnail_id"], ["images.image_id"]),
        sa.PrimaryKeyConstraint("list_id", "spot_id"),
    )
    op.create_table(
        "post",
        sa.Column("post_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("type", sa.String(length=11), nullable=False),
        sa.CheckConstraint("type IN ('community', 'review', 'list')", name="ck_post_type"),
        sa.ForeignKeyConstraint(["user_id"], ["users.user_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id"),
    )
    op.create_index("ix_post_user_id", "post", ["user_id"])
    op.create_index("ix_post_created_date", "post", ["created_date"])
    op.create_table(
        "community_post",
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=45), nullable=False),
        sa.Column("list_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.post_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["list_id"], ["list.list_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id"),
    )
    op.create_table(
        "review_post",
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("spot_id", sa.Integer(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_post_rating"),
        sa.ForeignKeyConstraint(["post_id"], ["post.post_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["spot_id"], ["spot.spot_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id"),
    )
    op.create_index("ix_review_post_spot_id", "review_post", ["spot_id"])
    op.create_table(
        "list_post",
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=45), nullable=False),
        sa.Column("list_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.post_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["list_id"], ["list.list_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id"),
    )
    op.create_table(
        "post_images",
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("image_id", sa.Integer(), nullable=False),
        sa.Column("image_order", sa.Integer(), nullable=False),
        sa.Column("is_thumbnail", sa.Boolean(), nullable=False),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.post_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["image_id"], ["images.image_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id", "image_id"),
    )
    op.create_index(
        "ix_post_images_unique_thumbnail",
        "post_images",
        ["post_id"],
        unique=True,
        sqlite_where=sa.text("is_thumbnail = 1"),
        postgresql_where=sa.text("is_thumbnail = true"),
    )


def downgrade() -> None:
    """Drop every table created by :func:`upgrade`."""
    op.drop_index("ix_post_images_unique_thumbnail", table_name="post_images")
    op.drop_table("post_images")
    op.drop_table("list_post")
    op.drop_index("ix_review_post_spot_id", table_name="review_post")
    op.drop_table("review_post")
    op.drop_table("community_post")
    op.drop_index("ix_post_created_date", table_name="post")
    op.drop_index("ix_post_user_id", table_name="post")
    op.drop_table("post")
    op.drop_table("list_has_spot")
    op.drop_table("list")
    op.drop_table("spot")
    op.drop_table("users")
    op.drop_table("images")
