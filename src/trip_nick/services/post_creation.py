# src/trip_nick/services/post_creation.py
"""Creation workflow for review, community and list posts.

Input is validated completely before the database is touched. The list,
its spot entries, the post, its variant row and its image links are then
written in one transaction, so a failure at any step leaves nothing behind.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from trip_nick.models import Image, ListSpot, Post, PostImage, ReviewPost, Spot, SpotList, User
from trip_nick.models.post import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, VARIANT_MODELS
from trip_nick.models.spot_list import LIST_NAME_MAX_LENGTH
from trip_nick.repositories.post_repo import PostRepository
from trip_nick.schemas.post import ReviewPostCreate, SharePostCreate
from trip_nick.services.cache import PostListingCache
from trip_nick.services.errors import (
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    parse_positive_id,
)
from trip_nick.services.post_variants import PostCreateRequest, PostType, PostView, to_post_view
from trip_nick.services.transaction import unit_of_work

logger = logging.getLogger(__name__)

MAX_SPOTS_PER_POST = 10
MAX_IMAGES_PER_POST = 10
LIST_NAME_SUFFIX = " - Spots"

__all__ = [
    "CreatedPost",
    "create_post",
    "derive_list_name",
    "validate_description",
    "validate_image_selection",
    "validate_rating",
    "validate_spot_selection",
    "validate_title",
]


@dataclass(frozen=True)
class CreatedPost:
    """Result of a successful creation."""

    post: PostView
    list_created: bool = False


def validate_title(title: str | None) -> str:
    """Return the trimmed title or raise when it is empty or too long."""
    cleaned = (title or "").strip()
    if not cleaned:
        raise InvalidArgumentError("Title is required")
    if len(cleaned) > TITLE_MAX_LENGTH:
        raise InvalidArgumentError(f"Title must be {TITLE_MAX_LENGTH} characters or less")
    return cleaned


def validate_description(description: str | None) -> str | None:
    if description is None:
        return None
    cleaned = description.strip()
    if len(cleaned) > DESCRIPTION_MAX_LENGTH:
        raise InvalidArgumentError(
            f"Description must be {DESCRIPTION_MAX_LENGTH} characters or less"
        )
    return cleaned or None


def validate_rating(rating: int | None) -> int | None:
    """Accept ``None`` ("no rating yet") or an integer from 1 to 5."""
    if rating is None:
        return None
    if not 1 <= rating <= 5:
        raise InvalidArgumentError("Rating must be between 1 and 5")
    return rating


def validate_spot_selection(spot_ids: Sequence[object]) -> list[int]:
    """Check a post's spot selection and return it as identifiers.

    Args:
        spot_ids: Identifiers in the order the user picked them.

    Returns:
        The identifiers as positive integers, order preserved.

    Raises:
        InvalidArgumentError: If the selection is empty, has more than
            ``MAX_SPOTS_PER_POST`` entries, holds a non-positive identifier or
            repeats a spot.
    """
    if not spot_ids:
        raise InvalidArgumentError("At least one spot must be selected")
    if len(spot_ids) > MAX_SPOTS_PER_POST:
        raise InvalidArgumentError(f"A post can include at most {MAX_SPOTS_PER_POST} spots")

    parsed = [parse_positive_id(raw, "Spot") for raw in spot_ids]
    seen: set[int] = set()
    duplicates: list[int] = []
    for spot_id in parsed:
        if spot_id in seen and spot_id not in duplicates:
            duplicates.append(spot_id)
        seen.add(spot_id)
    if duplicates:
        raise InvalidArgumentError(
            "Duplicate spots are not allowed in a post",
            duplicate_spot_ids=duplicates,
        )
    return parsed


def validate_image_selection(
    image_ids: Sequence[object],
    thumbnail_image_id: object | None,
) -> tuple[list[int], int | None]:
    """Check the ordered images attached to a post and its optional thumbnail."""
    if len(image_ids) > MAX_IMAGES_PER_POST:
        raise InvalidArgumentError(f"A post can include at most {MAX_IMAGES_PER_POST} images")
    parsed = [parse_positive_id(raw, "Image") for raw in image_ids]
    if len(set(parsed)) != len(parsed):
        raise InvalidArgumentError("Duplicate images are not allowed in a post")

    thumbnail = None
    if thumbnail_image_id is not None:
        thumbnail = parse_positive_id(thumbnail_image_id, "Thumbnail image")
        if thumbnail not in parsed:
            raise InvalidArgumentError("Thumbnail image must be one of the post images")
    return parsed, thumbnail


def derive_list_name(title: str) -> str:
    """Name the list created for a shared post after its title."""
    name = f"{title}{LIST_NAME_SUFFIX}"
    if len(name) > LIST_NAME_MAX_LENGTH:
        name = name[: LIST_NAME_MAX_LENGTH - 3].rstrip() + "..."
    return name


def _validate_list_name(list_name: str | None, title: str) -> str:
    if list_name is None:
        return derive_list_name(title)
    cleaned = list_name.strip()
    if not cleaned:
        raise InvalidArgumentError("List name cannot be empty")
    if len(cleaned) > LIST_NAME_MAX_LENGTH:
        raise InvalidArgumentError(f"List name must be {LIST_NAME_MAX_LENGTH} characters or less")
    return cleaned


def _require_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User with ID {user_id} not found", user_id=user_id)
    return user


def _require_images(db: Session, image_ids: Sequence[int], label: str = "Image") -> None:
    if not image_ids:
        return
    found = set(db.scalars(select(Image.image_id).where(Image.image_id.in_(image_ids))))
    missing = [image_id for image_id in image_ids if image_id not in found]
    if missing:
        raise NotFoundError(
            f"{label}(s) not found: {', '.join(str(i) for i in missing)}",
            missing_image_ids=missing,
        )


def _link_images(
    db: Session,
    post_id: int,
    image_ids: Sequence[int],
    thumbnail_image_id: int | None,
) -> None:
    for position, image_id in enumerate(image_ids, start=1):
        db.add(
            PostImage(
                post_id=post_id,
                image_id=image_id,
                image_order=position,
                is_thumbnail=image_id == thumbnail_image_id,
            )
        )


def _create_review(
    db: Session,
    *,
    user_id: int,
    description: str | None,
    spot_id: int,
    rating: int | None,
) -> Post:
    logger.info("Verifying spot %s exists...", spot_id)
    if db.get(Spot, spot_id) is None:
        raise NotFoundError(f"Spot with ID {spot_id} not found", spot_id=spot_id)

    post = Post(description=description, user_id=user_id, type=PostType.REVIEW.value)
    db.add(post)
    db.flush()
    db.add(ReviewPost(post_id=post.post_id, spot_id=spot_id, rating=rating))
    return post


def _create_share(
    db: Session,
    request: SharePostCreate,
    *,
    user_id: int,
    title: str,
    description: str | None,
    spot_ids: list[int],
    list_name: str | None,
    thumbnails: dict[int, int],
) -> tuple[Post, bool]:
    post_type = PostType(request.type)
    list_created = False

    if request.list_id is not None:
        list_id = parse_positive_id(request.list_id, "List")
        logger.info("Verifying list %s exists...", list_id)
        spot_list = db.get(SpotList, list_id)
        if spot_list is None:
            raise NotFoundError(f"List with ID {list_id} not found", list_id=list_id)
    else:
        logger.info("Verifying %d spots exist...", len(spot_ids))
        found = set(db.scalars(select(Spot.spot_id).where(Spot.spot_id.in_(spot_ids))))
        missing = [spot_id for spot_id in spot_ids if spot_id not in found]
        if missing:
            raise NotFoundError(
                f"Spot(s) not found: {', '.join(str(i) for i in missing)}",
                missing_spot_ids=missing,
            )
        _require_images(db, sorted(set(thumbnails.values())), label="Thumbnail image")

        # Community lists are visible to everyone; personal shares stay private.
        spot_list = SpotList(
            list_name=list_name,
            is_public=post_type is PostType.COMMUNITY,
        )
        db.add(spot_list)
        db.flush()
        list_created = True
        logger.info(
            "Created list %s (%r) for new %s post", spot_list.list_id, list_name, post_type.value
        )

        for spot_id in spot_ids:
            db.add(
                ListSpot(
                    list_id=spot_list.list_id,
                    spot_id=spot_id,
                    list_thumbnail_id=thumbnails.get(spot_id),
                )
            )

    post = Post(description=description, user_id=user_id, type=post_type.value)
    db.add(post)
    db.flush()
    variant_model = VARIANT_MODELS[post_type.value]
    db.add(variant_model(post_id=post.post_id, title=title, list_id=spot_list.list_id))
    return post, list_created


def create_post(
    db: Session,
    request: PostCreateRequest,
    cache: PostListingCache | None = None,
) -> CreatedPost:
    """Create a post of any variant together with its dependent rows.

    Args:
        db: Request-scoped session.
        request: Parsed creation body for a review, community or list post.
        cache: Listing cache to invalidate once the post is committed.

    Returns:
        The stored post as its variant read model, and whether a new list was
        created for it.

    Raises:
        InvalidArgumentError: If any field fails validation.
        NotFoundError: If the user, a spot, the list or an image is missing.
        InternalError: If the database rejects the writes.
    """
    user_id = parse_positive_id(request.user_id, "User")
    description = validate_description(request.description)
    image_ids, thumbnail_image_id = validate_image_selection(
        request.image_ids, request.thumbnail_image_id
    )

    fields: dict = {"user_id": user_id, "description": description}
    if isinstance(request, SharePostCreate):
        title = validate_title(request.title)
        if request.list_id is not None and request.spot_ids:
            raise InvalidArgumentError("Provide either spot_ids or list_id, not both")
        spot_ids = [] if request.list_id is not None else validate_spot_selection(request.spot_ids)
        thumbnails = {
            parse_positive_id(spot_id, "Spot"): parse_positive_id(image_id, "Thumbnail image")
            for spot_id, image_id in request.spot_thumbnails.items()
        }
        unknown = sorted(set(thumbnails) - set(spot_ids))
        if unknown:
            raise InvalidArgumentError(
                "Thumbnails were given for spots that are not part of the post",
                spot_ids=unknown,
            )
        list_name = None
        if request.list_id is None:
            list_name = _validate_list_name(request.list_name, title)
        fields.update(title=title, spot_ids=spot_ids, list_name=list_name, thumbnails=thumbnails)
    else:
        fields.update(
            spot_id=parse_positive_id(request.spot_id, "Spot"),
            rating=validate_rating(request.rating),
        )

    list_created = False
    with unit_of_work(db, "create post"):
        logger.info("Verifying user %s exists...", user_id)
        _require_user(db, user_id)
        _require_images(db, image_ids)

        if isinstance(request, ReviewPostCreate):
            post = _create_review(db, **fields)
        else:
            post, list_created = _create_share(db, request, **fields)

        _link_images(db, post.post_id, image_ids, thumbnail_image_id)
        post_id = post.post_id

    logger.info("Created %s post %s", request.type, post_id)
    if cache is not None:
        cache.invalidate()

    record = PostRepository(db).load_with_details(post_id)
    if record is None:
        raise InternalError("Post was created but could not be loaded", post_id=post_id)
    return CreatedPost(post=to_post_view(record), list_created=list_created)
