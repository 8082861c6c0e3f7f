# src/trip_nick/services/list_spots.py
"""Adding spots to lists and removing them again."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from trip_nick.models import Image, ListSpot, Spot, SpotList
from trip_nick.schemas.spot_list import (
    AssociationInfo,
    ListNameInfo,
    ListRemovalStats,
    ListSpotAdd,
    ListSpotAddedData,
    ListSpotAddedResponse,
    ListSpotRemovedData,
    ListSpotRemovedResponse,
    SpotLocationInfo,
)
from trip_nick.services.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    parse_positive_id,
)
from trip_nick.services.transaction import unit_of_work

logger = logging.getLogger(__name__)

__all__ = ["add_spot_to_list", "remove_spot_from_list"]


def _require_list(db: Session, list_id: int) -> SpotList:
    logger.info("Verifying list %s exists...", list_id)
    spot_list = db.get(SpotList, list_id)
    if spot_list is None:
        raise NotFoundError(f"List with ID {list_id} does not exist", list_id=list_id)
    return spot_list


def _require_spot(db: Session, spot_id: int) -> Spot:
    logger.info("Verifying spot %s exists...", spot_id)
    spot = db.get(Spot, spot_id)
    if spot is None:
        raise NotFoundError(f"Spot with ID {spot_id} does not exist", spot_id=spot_id)
    return spot


def _count_entries(db: Session, list_id: int) -> int:
    return db.execute(
        select(func.count()).select_from(ListSpot).where(ListSpot.list_id == list_id)
    ).scalar_one()


def add_spot_to_list(
    db: Session,
    raw_list_id: object,
    request: ListSpotAdd,
) -> ListSpotAddedResponse:
    """Place a spot inside a list.

    Args:
        db: Request-scoped session.
        raw_list_id: List identifier from the URL.
        request: Spot to add and an optional thumbnail for this entry.

    Returns:
        The new entry with the list and spot names for display.

    Raises:
        InvalidArgumentError: If an identifier is not a positive integer.
        NotFoundError: If the list, the spot or the thumbnail image is missing.
        ConflictError: If the spot is already in the list; the body names the
            existing entry and when it was added.
    """
    list_id = parse_positive_id(raw_list_id, "List")
    spot_id = parse_positive_id(request.spot_id, "Spot")
    thumbnail_id = None
    if request.list_thumbnail_id is not None:
        thumbnail_id = parse_positive_id(request.list_thumbnail_id, "Thumbnail image")

    with unit_of_work(db, "add spot to list"):
        spot_list = _require_list(db, list_id)
        spot = _require_spot(db, spot_id)

        if thumbnail_id is not None:
            logger.info("Verifying thumbnail image %s exists...", thumbnail_id)
            if db.get(Image, thumbnail_id) is None:
                raise NotFoundError(
                    f"Thumbnail image with ID {thumbnail_id} does not exist",
                    list_thumbnail_id=thumbnail_id,
                )

        logger.info("Checking for an existing association...")
        existing = db.get(ListSpot, (list_id, spot_id))
        if existing is not None:
            raise ConflictError(
                f'Spot "{spot.spot_name}" is already in list "{spot_list.list_name}" '
                f"(added on {existing.created_date.isoformat()})",
                existing_association={
                    "list_id": list_id,
                    "spot_id": spot_id,
                    "added_date": existing.created_date,
                },
            )

        entry = ListSpot(list_id=list_id, spot_id=spot_id, list_thumbnail_id=thumbnail_id)
        db.add(entry)
        db.flush()

        data = ListSpotAddedData(
            list_id=list_id,
            spot_id=spot_id,
            list_thumbnail_id=thumbnail_id,
            created_date=entry.created_date,
            list_info=ListNameInfo(list_name=spot_list.list_name, is_public=spot_list.is_public),
            spot_info=SpotLocationInfo(spot_name=spot.spot_name, location=spot.location),
        )

    logger.info("Added spot %s to list %s", spot_id, list_id)
    return ListSpotAddedResponse(
        message=(
            f'Spot "{data.spot_info.spot_name}" added to list '
            f'"{data.list_info.list_name}" successfully'
        ),
        data=data,
    )


def remove_spot_from_list(
    db: Session,
    raw_list_id: object,
    raw_spot_id: object,
) -> ListSpotRemovedResponse:
    """Take a spot out of a list and report the list's updated statistics.

    Raises:
        InvalidArgumentError: If an identifier is not a positive integer.
        NotFoundError: If the list or spot is missing, or the spot is not in
            the list.
        InternalError: If the entry vanished before it could be deleted.
    """
    list_id = parse_positive_id(raw_list_id, "List")
    spot_id = parse_positive_id(raw_spot_id, "Spot")

    with unit_of_work(db, "remove spot from list"):
        spot_list = _require_list(db, list_id)
        spot = _require_spot(db, spot_id)

        entry = db.get(ListSpot, (list_id, spot_id))
        if entry is None:
            raise NotFoundError(
                f'Spot "{spot.spot_name}" is not in list "{spot_list.list_name}"',
                list_id=list_id,
                spot_id=spot_id,
            )
        association = AssociationInfo(
            was_added_on=entry.created_date,
            had_thumbnail=entry.list_thumbnail_id is not None,
            list_thumbnail_id=entry.list_thumbnail_id,
        )
        spots_before = _count_entries(db, list_id)

        logger.info("Removing spot %s from list %s...", spot_id, list_id)
        result = db.execute(
            delete(ListSpot).where(ListSpot.list_id == list_id, ListSpot.spot_id == spot_id)
        )
        if result.rowcount == 0:
            raise InternalError("Failed to remove spot from list - no rows affected")

        remaining = _count_entries(db, list_id)
        last_added = db.execute(
            select(func.max(ListSpot.created_date)).where(ListSpot.list_id == list_id)
        ).scalar_one()

        data = ListSpotRemovedData(
            list_id=list_id,
            spot_id=spot_id,
            removed_at=datetime.now(UTC),
            association_info=association,
            list_info=ListRemovalStats(
                list_name=spot_list.list_name,
                is_public=spot_list.is_public,
                spots_before_removal=spots_before,
                remaining_spots=remaining,
                last_spot_added=last_added,
            ),
            spot_info=SpotLocationInfo(spot_name=spot.spot_name, location=spot.location),
        )

    return ListSpotRemovedResponse(
        message=(
            f'Spot "{data.spot_info.spot_name}" removed from list '
            f'"{data.list_info.list_name}" successfully'
        ),
        data=data,
    )
