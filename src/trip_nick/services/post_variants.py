# src/trip_nick/services/post_variants.py
"""Dispatch between the three post variants.

The set of post types is closed. Every helper here branches on the ``type``
tag (or on the concrete read model) and handles each variant explicitly.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ValidationError

from trip_nick.models.post import SOFT_DELETE_MARKER, Post
from trip_nick.schemas.post import (
    AuthorOut,
    CommunityPostOut,
    ListPostOut,
    ListSummary,
    PostImageOut,
    ReviewPostCreate,
    ReviewPostOut,
    SharePostCreate,
    SpotSummary,
)
from trip_nick.services.errors import (
    InternalError,
    InvalidArgumentError,
    UnknownPostTypeError,
    describe_validation_errors,
)

__all__ = [
    "PostType",
    "PostView",
    "is_soft_deleted",
    "parse_create_request",
    "parse_post",
    "post_age",
    "post_author",
    "post_title",
    "rating_label",
    "rating_stars",
    "to_post_view",
]

PostView = Union[CommunityPostOut, ReviewPostOut, ListPostOut]
PostCreateRequest = Union[ReviewPostCreate, SharePostCreate]


class PostType(str, Enum):
    """Discriminator tag stored in ``post.type``."""

    COMMUNITY = "community"
    REVIEW = "review"
    LIST = "list"


_READ_MODELS: dict[PostType, type[BaseModel]] = {
    PostType.COMMUNITY: CommunityPostOut,
    PostType.REVIEW: ReviewPostOut,
    PostType.LIST: ListPostOut,
}

_CREATE_MODELS: dict[PostType, type[BaseModel]] = {
    PostType.COMMUNITY: SharePostCreate,
    PostType.REVIEW: ReviewPostCreate,
    PostType.LIST: SharePostCreate,
}

_RATING_LABELS = {
    1: "Very bad",
    2: "Bad",
    3: "Average",
    4: "Good",
    5: "Excellent",
}


def _require_type(payload: Any) -> PostType:
    if not isinstance(payload, Mapping):
        raise InvalidArgumentError("Post payload must be a JSON object")
    valid = ", ".join(item.value for item in PostType)
    raw = payload.get("type")
    if raw is None:
        raise UnknownPostTypeError(f"Post type is required. Must be one of: {valid}")
    try:
        return PostType(raw)
    except ValueError as exc:
        raise UnknownPostTypeError(
            f"Unknown post type {raw!r}. Must be one of: {valid}"
        ) from exc


def _validate(model: type[BaseModel], payload: Mapping[str, Any]) -> Any:
    try:
        return model.model_validate(dict(payload))
    except ValidationError as exc:
        raise InvalidArgumentError(describe_validation_errors(exc.errors())) from exc


def parse_post(payload: Mapping[str, Any]) -> PostView:
    """Build the concrete post variant described by ``payload``.

    Args:
        payload: Mapping with at least a ``type`` field.

    Returns:
        A :class:`CommunityPostOut`, :class:`ReviewPostOut` or :class:`ListPostOut`.

    Raises:
        UnknownPostTypeError: If ``type`` is missing or not a known tag.
        InvalidArgumentError: If the remaining fields do not fit the variant.
    """
    post_type = _require_type(payload)
    return _validate(_READ_MODELS[post_type], payload)


def parse_create_request(payload: Mapping[str, Any]) -> PostCreateRequest:
    """Parse a ``POST /posts`` body into the request model for its variant."""
    post_type = _require_type(payload)
    return _validate(_CREATE_MODELS[post_type], payload)


def post_title(post: PostView) -> str:
    """Return the display title of a post.

    Reviews have no stored title; they are named after their spot when it is
    loaded, and after the spot identifier otherwise.
    """
    if isinstance(post, ReviewPostOut):
        if post.spot is not None:
            return post.spot.spot_name
        return f"Review for Spot #{post.spot_id}"
    if isinstance(post, (CommunityPostOut, ListPostOut)):
        return post.title
    raise TypeError(f"Unsupported post variant: {type(post).__name__}")


def post_age(post: PostView, now: datetime | None = None) -> str:
    """Return a short relative age such as ``"3h ago"``.

    Posts older than a week show their date as ``day/month/year``.
    """
    now = now or datetime.now(UTC)
    created = post.created_date
    if created.tzinfo is None:
        created = created.replace(tzinfo=UTC)
    delta = now - created

    if delta.days > 7:
        return f"{created.day}/{created.month}/{created.year}"
    if delta.days > 0:
        return f"{delta.days}d ago"
    hours = delta.seconds // 3600
    if hours > 0:
        return f"{hours}h ago"
    minutes = delta.seconds // 60
    if minutes > 0:
        return f"{minutes}min ago"
    return "Just now"


def post_author(post: PostView) -> str:
    """Return the author's display name, or a placeholder naming the user id."""
    if post.author is not None:
        return post.author.display_name
    return f"User #{post.user_id}"


def is_soft_deleted(post: PostView) -> bool:
    return bool(post.description) and post.description.endswith(SOFT_DELETE_MARKER)


def rating_label(rating: int | None) -> str:
    """Return the human label for a review rating."""
    if rating is None:
        return "No rating yet"
    try:
        return _RATING_LABELS[rating]
    except KeyError as exc:
        raise InvalidArgumentError("Rating must be between 1 and 5") from exc


def rating_stars(rating: int | None) -> str:
    """Render a rating as five filled or empty stars."""
    filled = rating or 0
    if not 0 <= filled <= 5:
        raise InvalidArgumentError("Rating must be between 1 and 5")
    return "★" * filled + "☆" * (5 - filled)


def _images(record: Post) -> list[PostImageOut]:
    return [
        PostImageOut(
            image_id=link.image_id,
            image_order=link.image_order,
            is_thumbnail=link.is_thumbnail,
            image_name=link.image.image_name if link.image is not None else None,
            blob_url=link.image.blob_url if link.image is not None else None,
        )
        for link in record.images
    ]


def to_post_view(record: Post) -> PostView:
    """Build the read model for an ORM post and its loaded variant row.

    Raises:
        UnknownPostTypeError: If the stored tag is not a known post type.
        InternalError: If the variant row matching the tag is missing.
    """
    post_type = _require_type({"type": record.type})
    common: dict[str, Any] = {
        "post_id": record.post_id,
        "description": record.description,
        "user_id": record.user_id,
        "created_date": record.created_date,
        "author": AuthorOut.model_validate(record.user) if record.user is not None else None,
        "images": _images(record),
    }

    if post_type is PostType.REVIEW:
        review = record.review_post
        if review is None:
            raise InternalError(f"Review post {record.post_id} has no review row")
        spot = SpotSummary.model_validate(review.spot) if review.spot is not None else None
        return ReviewPostOut(spot_id=review.spot_id, rating=review.rating, spot=spot, **common)

    if post_type is PostType.COMMUNITY:
        share = record.community_post
        model: type[CommunityPostOut] | type[ListPostOut] = CommunityPostOut
    else:
        share = record.list_post
        model = ListPostOut
    if share is None:
        raise InternalError(
            f"{post_type.value.capitalize()} post {record.post_id} has no variant row"
        )
    list_info = ListSummary.model_validate(share.spot_list) if share.spot_list is not None else None
    return model(title=share.title, list_id=share.list_id, list_info=list_info, **common)
