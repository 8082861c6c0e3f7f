# src/trip_nick/services/lists.py
"""Creating, reading and deleting lists of spots."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from trip_nick.models import (
    CommunityPost,
    Image,
    ListPost,
    ListSpot,
    Post,
    PostImage,
    Spot,
    SpotList,
)
from trip_nick.models.spot_list import LIST_NAME_MAX_LENGTH
from trip_nick.schemas.spot_list import (
    DeletedList,
    ListContentsResponse,
    ListContentsStats,
    ListCreate,
    ListCreatedResponse,
    ListDeletionData,
    ListDeletionImpact,
    ListDeletionInfo,
    ListDeletionResponse,
    ListDeletionResults,
    ListDeletionSummary,
    ListDryRunResponse,
    ListEntryOut,
    ListImpactAssessment,
    ListOut,
)
from trip_nick.services.cache import PostListingCache
from trip_nick.services.errors import (
    ConflictError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    parse_positive_id,
)
from trip_nick.services.transaction import unit_of_work

logger = logging.getLogger(__name__)

LIST_ORDER_COLUMNS = {
    "added_date": ListSpot.created_date,
    "spot_name": Spot.spot_name,
    "city": Spot.city,
    "category": Spot.category,
}

__all__ = ["LIST_ORDER_COLUMNS", "create_list", "delete_list", "get_list_contents"]


def validate_list_name(list_name: str | None) -> str:
    cleaned = (list_name or "").strip()
    if not cleaned:
        raise InvalidArgumentError("List name cannot be empty")
    if len(cleaned) > LIST_NAME_MAX_LENGTH:
        raise InvalidArgumentError(f"List name must be {LIST_NAME_MAX_LENGTH} characters or less")
    return cleaned


def create_list(db: Session, request: ListCreate) -> ListCreatedResponse:
    """Create an empty list; lists are public unless stated otherwise."""
    list_name = validate_list_name(request.list_name)
    is_public = True if request.is_public is None else request.is_public

    with unit_of_work(db, "create list"):
        spot_list = SpotList(list_name=list_name, is_public=is_public)
        db.add(spot_list)
        db.flush()
        out = ListOut.model_validate(spot_list)

    logger.info("Created list %s (%r)", out.list_id, out.list_name)
    return ListCreatedResponse(list_id=out.list_id, data=out)


def get_list_contents(
    db: Session,
    raw_list_id: object,
    *,
    order_by: str = "added_date",
    order: str = "desc",
) -> ListContentsResponse:
    """Return a list, its statistics and its spots in the requested order.

    Raises:
        InvalidArgumentError: If the identifier or ordering is invalid.
        NotFoundError: If the list does not exist.
    """
    list_id = parse_positive_id(raw_list_id, "List")
    if order_by not in LIST_ORDER_COLUMNS:
        raise InvalidArgumentError(
            f"order_by must be one of: {', '.join(LIST_ORDER_COLUMNS)}"
        )
    if order not in ("asc", "desc"):
        raise InvalidArgumentError("order must be 'asc' or 'desc'")

    with unit_of_work(db, "get list contents"):
        spot_list = db.get(SpotList, list_id)
        if spot_list is None:
            raise NotFoundError(f"List with ID {list_id} does not exist", list_id=list_id)

        column = LIST_ORDER_COLUMNS[order_by]
        stmt = (
            select(ListSpot, Spot, Image.blob_url)
            .join(Spot, Spot.spot_id == ListSpot.spot_id)
            .outerjoin(Image, Image.image_id == ListSpot.list_thumbnail_id)
            .where(ListSpot.list_id == list_id)
            .order_by(column.asc() if order == "asc" else column.desc(), Spot.spot_id)
        )
        spots = [
            ListEntryOut(
                spot_id=spot.spot_id,
                spot_name=spot.spot_name,
                country=spot.country,
                city=spot.city,
                category=spot.category,
                description=spot.description,
                spot_image_id=spot.spot_image_id,
                added_date=entry.created_date,
                list_thumbnail_id=entry.list_thumbnail_id,
                thumbnail_url=thumbnail_url,
            )
            for entry, spot, thumbnail_url in db.execute(stmt)
        ]
        list_info = ListOut.model_validate(spot_list)

    added = [item.added_date for item in spots]
    statistics = ListContentsStats(
        total_spots=len(spots),
        spots_with_thumbnails=sum(1 for item in spots if item.list_thumbnail_id is not None),
        first_added=min(added) if added else None,
        last_added=max(added) if added else None,
    )
    return ListContentsResponse(
        list_info=list_info,
        statistics=statistics,
        spots=spots,
        order_by=order_by,
        order=order,
    )


def _assess_list_deletion(
    db: Session,
    spot_list: SpotList,
) -> tuple[ListImpactAssessment, list[int], list[int]]:
    list_id = spot_list.list_id
    spot_count = db.execute(
        select(func.count()).select_from(ListSpot).where(ListSpot.list_id == list_id)
    ).scalar_one()
    community_ids = list(
        db.scalars(select(CommunityPost.post_id).where(CommunityPost.list_id == list_id))
    )
    list_post_ids = list(db.scalars(select(ListPost.post_id).where(ListPost.list_id == list_id)))
    total_posts = len(community_ids) + len(list_post_ids)

    warnings: list[str] = []
    if total_posts:
        warnings.append(f"{total_posts} posts will be permanently deleted")
    if spot_count:
        warnings.append(f"{spot_count} spot associations will be removed")
    if spot_list.is_public and community_ids:
        warnings.append("Public posts will be deleted, affecting community visibility")

    assessment = ListImpactAssessment(
        list_info=ListDeletionInfo(
            list_id=list_id,
            list_name=spot_list.list_name,
            is_public=spot_list.is_public,
            spots_in_list=spot_count,
            posts_referencing_list=total_posts,
        ),
        deletion_impact=ListDeletionImpact(
            list_spot_associations_to_delete=spot_count,
            community_posts_to_delete=len(community_ids),
            list_posts_to_delete=len(list_post_ids),
            total_posts_to_delete=total_posts,
        ),
        warnings=warnings,
    )
    return assessment, community_ids, list_post_ids


def delete_list(
    db: Session,
    raw_list_id: object,
    *,
    dry_run: bool = False,
    force: bool = False,
    cache: PostListingCache | None = None,
) -> ListDryRunResponse | ListDeletionResponse:
    """Delete a list, or preview the deletion.

    Posts sharing the list block the deletion unless ``force`` is set, in
    which case they are deleted with it.

    Raises:
        InvalidArgumentError: If the identifier is not a positive integer.
        NotFoundError: If the list does not exist.
        ConflictError: If posts reference the list and ``force`` is not set.
    """
    list_id = parse_positive_id(raw_list_id, "List")
    logger.info("Deleting list %s, force: %s, dryRun: %s", list_id, force, dry_run)

    with unit_of_work(db, "delete list"):
        logger.info("Verifying list exists and getting details...")
        spot_list = db.get(SpotList, list_id)
        if spot_list is None:
            raise NotFoundError(f"List with ID {list_id} does not exist", list_id=list_id)

        logger.info("Assessing deletion impact...")
        assessment, community_ids, list_post_ids = _assess_list_deletion(db, spot_list)
        if dry_run:
            return ListDryRunResponse(would_delete=assessment)

        post_ids = community_ids + list_post_ids
        if post_ids and not force:
            raise ConflictError(
                f"Cannot delete list: {len(post_ids)} posts reference this list",
                details=(
                    f"{len(post_ids)} posts reference this list. Use ?force=true to "
                    "delete anyway, or delete the posts first."
                ),
                impact=assessment.model_dump(),
                suggestion=f"DELETE /api/v1/lists/{list_id}?force=true to force deletion",
            )

        results = ListDeletionResults()
        logger.info("Deleting spot associations...")
        results.list_spot_associations_deleted = db.execute(
            delete(ListSpot).where(ListSpot.list_id == list_id)
        ).rowcount

        if post_ids:
            logger.info("Deleting %d posts referencing the list...", len(post_ids))
            results.post_images_deleted = db.execute(
                delete(PostImage).where(PostImage.post_id.in_(post_ids))
            ).rowcount
            results.community_posts_deleted = db.execute(
                delete(CommunityPost).where(CommunityPost.list_id == list_id)
            ).rowcount
            results.list_posts_deleted = db.execute(
                delete(ListPost).where(ListPost.list_id == list_id)
            ).rowcount
            results.base_posts_deleted = db.execute(
                delete(Post).where(Post.post_id.in_(post_ids))
            ).rowcount

        logger.info("Deleting the list...")
        if db.execute(delete(SpotList).where(SpotList.list_id == list_id)).rowcount == 0:
            raise InternalError("Failed to delete list - no rows affected", list_id=list_id)
        results.list_deleted = True

        deleted_list = DeletedList(
            list_id=list_id,
            list_name=assessment.list_info.list_name,
            was_public=assessment.list_info.is_public,
            deleted_at=datetime.now(UTC),
        )

    logger.info("List %s deleted", list_id)
    if post_ids and cache is not None:
        cache.invalidate()

    posts_deleted = results.community_posts_deleted + results.list_posts_deleted
    summary = ListDeletionSummary(
        total_records_deleted=(
            results.list_spot_associations_deleted
            + posts_deleted
            + results.post_images_deleted
            + results.base_posts_deleted
            + int(results.list_deleted)
        ),
        spots_removed_from_list=results.list_spot_associations_deleted,
        posts_deleted=posts_deleted,
        operation_forced=force,
    )
    return ListDeletionResponse(
        message=f'List "{deleted_list.list_name}" deleted successfully',
        data=ListDeletionData(
            deleted_list=deleted_list,
            deletion_results=results,
            impact_summary=summary,
        ),
    )
