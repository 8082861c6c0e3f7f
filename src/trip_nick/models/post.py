# src/trip_nick/models/post.py
"""SQLAlchemy models for posts, their variant tables and image links.

Every row in ``post`` carries a ``type`` tag and has exactly one matching row
in ``community_post``, ``review_post`` or ``list_post`` sharing its primary
key. Images are linked through ``post_images`` and are never owned by posts.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trip_nick.db.session import Base
from trip_nick.db.time import utcnow

from .image import Image
from .spot import Spot
from .spot_list import SpotList
from .user import User

POST_TYPE_COMMUNITY = "community"
POST_TYPE_REVIEW = "review"
POST_TYPE_LIST = "list"
POST_TYPES = (POST_TYPE_COMMUNITY, POST_TYPE_REVIEW, POST_TYPE_LIST)

TITLE_MAX_LENGTH = 45
DESCRIPTION_MAX_LENGTH = 500
SOFT_DELETE_MARKER = " [DELETED]"


class Post(Base):
    """Base row shared by every post variant."""

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint(
            "type IN ('community', 'review', 'list')",
            name="ck_post_type",
        ),
    )

    post_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    description: Mapped[str | None] = mapped_column(String(DESCRIPTION_MAX_LENGTH), nullable=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(11), nullable=False)

    user: Mapped[User] = relationship("User")
    community_post: Mapped[CommunityPost | None] = relationship(
        "CommunityPost",
        back_populates="post",
        uselist=False,
        passive_deletes=True,
    )
    review_post: Mapped[ReviewPost | None] = relationship(
        "ReviewPost",
        back_populates="post",
        uselist=False,
        passive_deletes=True,
    )
    list_post: Mapped[ListPost | None] = relationship(
        "ListPost",
        back_populates="post",
        uselist=False,
        passive_deletes=True,
    )
    images: Mapped[list[PostImage]] = relationship(
        "PostImage",
        back_populates="post",
        order_by="PostImage.image_order",
        passive_deletes=True,
    )

    @property
    def is_soft_deleted(self) -> bool:
        """Return True when the description carries the soft-delete marker."""
        return bool(self.description) and self.description.endswith(SOFT_DELETE_MARKER)


class CommunityPost(Base):
    """Variant row for posts sharing a list of spots with the community."""

    __tablename__ = "community_post"

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.post_id", ondelete="CASCADE"),
        primary_key=True,
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    list_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("list.list_id", ondelete="CASCADE"),
        nullable=False,
    )

    post: Mapped[Post] = relationship("Post", back_populates="community_post")
    spot_list: Mapped[SpotList] = relationship("SpotList")


class ReviewPost(Base):
    """Variant row for a review of a single spot."""

    __tablename__ = "review_post"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_post_rating"),
    )

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.post_id", ondelete="CASCADE"),
        primary_key=True,
    )
    spot_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("spot.spot_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # NULL means "no rating yet".
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)

    post: Mapped[Post] = relationship("Post", back_populates="review_post")
    spot: Mapped[Spot] = relationship("Spot")


class ListPost(Base):
    """Variant row for a personal share of a list."""

    __tablename__ = "list_post"

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.post_id", ondelete="CASCADE"),
        primary_key=True,
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    list_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("list.list_id", ondelete="CASCADE"),
        nullable=False,
    )

    post: Mapped[Post] = relationship("Post", back_populates="list_post")
    spot_list: Mapped[SpotList] = relationship("SpotList")


class PostImage(Base):
    """Ordered link between a post and an image."""

    __tablename__ = "post_images"
    __table_args__ = (
        # At most one thumbnail per post.
        Index(
            "ix_post_images_unique_thumbnail",
            "post_id",
            unique=True,
            sqlite_where=text("is_thumbnail = 1"),
            postgresql_where=text("is_thumbnail = true"),
        ),
    )

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.post_id", ondelete="CASCADE"),
        primary_key=True,
    )
    image_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("images.image_id", ondelete="CASCADE"),
        primary_key=True,
    )
    image_order: Mapped[int] = mapped_column(Integer, nullable=False)
    is_thumbnail: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    post: Mapped[Post] = relationship("Post", back_populates="images")
    image: Mapped[Image] = relationship("Image")


VARIANT_MODELS: dict[str, type[CommunityPost] | type[ReviewPost] | type[ListPost]] = {
    POST_TYPE_COMMUNITY: CommunityPost,
    POST_TYPE_REVIEW: ReviewPost,
    POST_TYPE_LIST: ListPost,
}
