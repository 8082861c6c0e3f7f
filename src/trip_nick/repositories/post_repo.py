"""Data access helpers for working with posts."""
from __future__ import annotations

from sqlalchemy import Select, func, not_, select
from sqlalchemy.orm import Session, joinedload, selectinload

from trip_nick.models.post import (
    SOFT_DELETE_MARKER,
    CommunityPost,
    ListPost,
    Post,
    PostImage,
    ReviewPost,
)

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def _detailed(self) -> Select[tuple[Post]]:
        return select(Post).options(
            joinedload(Post.user),
            joinedload(Post.community_post).joinedload(CommunityPost.spot_list),
            joinedload(Post.review_post).joinedload(ReviewPost.spot),
            joinedload(Post.list_post).joinedload(ListPost.spot_list),
            selectinload(Post.images).joinedload(PostImage.image),
        )

    def load_with_details(self, post_id: int) -> Post | None:
        """Return a post with its author, variant row and images loaded."""
        stmt = (
            self._detailed()
            .where(Post.post_id == post_id)
            .execution_options(populate_existing=True)
        )
        result = self.session.execute(stmt)
        return result.unique().scalars().first()

    def list_page(
        self,
        *,
        page: int,
        limit: int,
        user_id: int | None = None,
        post_type: str | None = None,
        include_deleted: bool = False,
    ) -> tuple[list[Post], int]:
        """Return one page of posts, newest first, and the total match count."""
        filters = []
        if user_id is not None:
            filters.append(Post.user_id == user_id)
        if post_type is not None:
            filters.append(Post.type == post_type)
        if not include_deleted:
            filters.append(
                not_(func.coalesce(Post.description, "").like(f"%{SOFT_DELETE_MARKER}"))
            )

        total = self.session.execute(
            select(func.count()).select_from(Post).where(*filters)
        ).scalar_one()
        stmt = (
            self._detailed()
            .where(*filters)
            .order_by(Post.created_date.desc(), Post.post_id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        posts = list(self.session.execute(stmt).unique().scalars())
        return posts, total

    def spot_rating_stats(
        self,
        spot_id: int,
        *,
        exclude_post_id: int | None = None,
    ) -> tuple[float | None, int]:
        """Return the average rating and number of rated reviews for a spot.

        Args:
            spot_id: Spot whose reviews are aggregated.
            exclude_post_id: Leave this review out, to preview its removal.
        """
        stmt = select(func.avg(ReviewPost.rating), func.count(ReviewPost.rating)).where(
            ReviewPost.spot_id == spot_id
        )
        if exclude_post_id is not None:
            stmt = stmt.where(ReviewPost.post_id != exclude_post_id)
        average, rated = self.session.execute(stmt).one()
        return (float(average) if average is not None else None), rated
