# src/trip_nick/services/spots.py
"""Spot registration, search and statistics."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, joinedload

from trip_nick.models import Image, ListSpot, ReviewPost, Spot
from trip_nick.schemas.spot import (
    SpotCreate,
    SpotCreatedResponse,
    SpotDetailResponse,
    SpotFilters,
    SpotListResponse,
    SpotOut,
    SpotStats,
)
from trip_nick.services.errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    parse_positive_id,
)
from trip_nick.services.pagination import build_pagination, validate_page
from trip_nick.services.transaction import unit_of_work

logger = logging.getLogger(__name__)

# Column limits of the spot table.
SPOT_FIELD_LIMITS = {
    "spot_name": 55,
    "country": 30,
    "city": 35,
    "category": 30,
}
SPOT_DESCRIPTION_MAX_LENGTH = 500

SPOT_ORDER_COLUMNS = {
    "created_date": Spot.created_date,
    "spot_name": Spot.spot_name,
    "country": Spot.country,
    "city": Spot.city,
    "category": Spot.category,
}

__all__ = ["create_spot", "get_spot", "list_spots", "spot_statistics"]


def _clean_required(request: SpotCreate) -> dict[str, str]:
    cleaned: dict[str, str] = {}
    for field, limit in SPOT_FIELD_LIMITS.items():
        value = (getattr(request, field) or "").strip()
        if not value:
            raise InvalidArgumentError(f"{field} is required")
        if len(value) > limit:
            raise InvalidArgumentError(f"{field} must be {limit} characters or less")
        cleaned[field] = value
    return cleaned


def spot_statistics(db: Session, spot_ids: Iterable[int]) -> dict[int, SpotStats]:
    """Return review and list statistics for each spot in ``spot_ids``.

    Spots without reviews report an average rating of 0.
    """
    ids = list(spot_ids)
    stats = {spot_id: SpotStats() for spot_id in ids}
    if not ids:
        return stats

    review_rows = db.execute(
        select(ReviewPost.spot_id, func.count(), func.avg(ReviewPost.rating))
        .where(ReviewPost.spot_id.in_(ids))
        .group_by(ReviewPost.spot_id)
    )
    for spot_id, total, average in review_rows:
        stats[spot_id].total_reviews = total
        stats[spot_id].average_rating = round(float(average), 2) if average is not None else 0.0

    list_rows = db.execute(
        select(ListSpot.spot_id, func.count())
        .where(ListSpot.spot_id.in_(ids))
        .group_by(ListSpot.spot_id)
    )
    for spot_id, total in list_rows:
        stats[spot_id].times_added_to_lists = total
    return stats


def _spot_out(spot: Spot, stats: SpotStats | None = None) -> SpotOut:
    out = SpotOut.model_validate(spot)
    out.image_url = spot.image.blob_url if spot.image is not None else None
    out.statistics = stats
    return out


def create_spot(db: Session, request: SpotCreate) -> SpotCreatedResponse:
    """Register a new spot.

    Raises:
        InvalidArgumentError: If a field is missing or too long, or the image
            does not exist.
        ConflictError: If a spot with the same name, city and country exists.
    """
    fields = _clean_required(request)
    description = (request.description or "").strip() or None
    if description is not None and len(description) > SPOT_DESCRIPTION_MAX_LENGTH:
        raise InvalidArgumentError(
            f"description must be {SPOT_DESCRIPTION_MAX_LENGTH} characters or less"
        )
    image_id = None
    if request.spot_image_id is not None:
        image_id = parse_positive_id(request.spot_image_id, "Image")

    with unit_of_work(db, "create spot"):
        if image_id is not None and db.get(Image, image_id) is None:
            raise InvalidArgumentError(
                f"Image with ID {image_id} does not exist", spot_image_id=image_id
            )

        existing_id = db.scalar(
            select(Spot.spot_id).where(
                Spot.spot_name == fields["spot_name"],
                Spot.city == fields["city"],
                Spot.country == fields["country"],
            )
        )
        if existing_id is not None:
            raise ConflictError(
                f'A spot named "{fields["spot_name"]}" already exists in '
                f'{fields["city"]}, {fields["country"]}',
                existing_spot_id=existing_id,
            )

        spot = Spot(description=description, spot_image_id=image_id, **fields)
        db.add(spot)
        db.flush()
        out = _spot_out(spot)

    logger.info("Created spot %s (%r)", out.spot_id, out.spot_name)
    return SpotCreatedResponse(spot_id=out.spot_id, data=out)


def list_spots(
    db: Session,
    *,
    page: int = 1,
    limit: int | None = None,
    category: str | None = None,
    country: str | None = None,
    city: str | None = None,
    search: str | None = None,
    order_by: str = "created_date",
    order: str = "desc",
    include_stats: bool = False,
) -> SpotListResponse:
    """Return one filtered, ordered page of spots."""
    page, limit = validate_page(page, limit)
    if order_by not in SPOT_ORDER_COLUMNS:
        raise InvalidArgumentError(f"order_by must be one of: {', '.join(SPOT_ORDER_COLUMNS)}")
    if order not in ("asc", "desc"):
        raise InvalidArgumentError("order must be 'asc' or 'desc'")

    filters = []
    if category:
        filters.append(Spot.category == category)
    if country:
        filters.append(Spot.country == country)
    if city:
        filters.append(Spot.city == city)
    if search:
        pattern = f"%{search.strip()}%"
        filters.append(or_(Spot.spot_name.ilike(pattern), Spot.description.ilike(pattern)))

    column = SPOT_ORDER_COLUMNS[order_by]
    with unit_of_work(db, "list spots"):
        total = db.execute(select(func.count()).select_from(Spot).where(*filters)).scalar_one()
        spots = list(
            db.scalars(
                select(Spot)
                .options(joinedload(Spot.image))
                .where(*filters)
                .order_by(column.asc() if order == "asc" else column.desc(), Spot.spot_id)
                .offset((page - 1) * limit)
                .limit(limit)
            )
        )
        stats = spot_statistics(db, [spot.spot_id for spot in spots]) if include_stats else {}
        items = [_spot_out(spot, stats.get(spot.spot_id)) for spot in spots]

    return SpotListResponse(
        spots=items,
        pagination=build_pagination(total, page, limit),
        filters=SpotFilters(
            category=category,
            country=country,
            city=city,
            search=search,
            order_by=order_by,
            order=order,
        ),
    )


def get_spot(db: Session, raw_spot_id: object, *, include_stats: bool = True) -> SpotDetailResponse:
    """Return one spot, with statistics unless ``include_stats`` is false."""
    spot_id = parse_positive_id(raw_spot_id, "Spot")
    with unit_of_work(db, "get spot"):
        spot = db.get(Spot, spot_id)
        if spot is None:
            raise NotFoundError(f"Spot with ID {spot_id} not found", spot_id=spot_id)
        stats = spot_statistics(db, [spot_id])[spot_id] if include_stats else None
        out = _spot_out(spot, stats)
    return SpotDetailResponse(spot=out)
