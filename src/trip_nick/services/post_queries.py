# src/trip_nick/services/post_queries.py
"""Read paths for posts."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from trip_nick.repositories.post_repo import PostRepository
from trip_nick.schemas.post import PostDetailResponse, PostListResponse
from trip_nick.services.cache import PostListingCache
from trip_nick.services.errors import NotFoundError, UnknownPostTypeError, parse_positive_id
from trip_nick.services.pagination import build_pagination, validate_page
from trip_nick.services.post_variants import PostType, to_post_view
from trip_nick.services.transaction import unit_of_work

logger = logging.getLogger(__name__)

__all__ = ["get_post", "list_posts"]


def list_posts(
    db: Session,
    *,
    page: int = 1,
    limit: int | None = None,
    user_id: object | None = None,
    post_type: str | None = None,
    include_deleted: bool = False,
    cache: PostListingCache | None = None,
) -> PostListResponse:
    """Return one page of posts, newest first.

    Soft-deleted posts are left out unless ``include_deleted`` is set. Pages
    are served from ``cache`` when a fresh copy exists.

    Raises:
        InvalidArgumentError: If paging or the user filter is invalid.
        UnknownPostTypeError: If ``post_type`` is not a known tag.
    """
    page, limit = validate_page(page, limit)
    author_id = parse_positive_id(user_id, "User") if user_id is not None else None
    tag = None
    if post_type is not None:
        try:
            tag = PostType(post_type).value
        except ValueError as exc:
            valid = ", ".join(item.value for item in PostType)
            raise UnknownPostTypeError(
                f"Unknown post type {post_type!r}. Must be one of: {valid}"
            ) from exc

    key = (page, limit, author_id, tag, include_deleted)
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            logger.debug("Serving post listing %s from cache", key)
            return cached

    with unit_of_work(db, "fetch posts"):
        records, total = PostRepository(db).list_page(
            page=page,
            limit=limit,
            user_id=author_id,
            post_type=tag,
            include_deleted=include_deleted,
        )
        posts = [to_post_view(record) for record in records]

    response = PostListResponse(posts=posts, pagination=build_pagination(total, page, limit))
    if cache is not None:
        cache.set(key, response)
    return response


def get_post(db: Session, raw_post_id: object) -> PostDetailResponse:
    """Return one post as its variant, images in display order."""
    post_id = parse_positive_id(raw_post_id, "Post")
    with unit_of_work(db, "fetch post"):
        record = PostRepository(db).load_with_details(post_id)
        if record is None:
            raise NotFoundError(f"Post with ID {post_id} not found", post_id=post_id)
        view = to_post_view(record)
    return PostDetailResponse(post=view)
