# src/trip_nick/services/post_deletion.py
"""Deletion workflow for posts.

A request moves through validation, impact assessment and then either a
dry-run report or a mutation. Soft deletion only appends a marker to the
post description. Hard deletion removes image links, then the variant row,
then the base post, inside one transaction.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy import delete, update
from sqlalchemy.orm import Session

from trip_nick.models.post import (
    DESCRIPTION_MAX_LENGTH,
    SOFT_DELETE_MARKER,
    VARIANT_MODELS,
    Post,
    PostImage,
)
from trip_nick.repositories.post_repo import PostRepository
from trip_nick.schemas.post import (
    CommunityImpact,
    DeletedPost,
    DeletionImpact,
    DeletionResults,
    DryRunResponse,
    ImpactAssessment,
    ImpactSummary,
    ListShareImpact,
    PostDeletionData,
    PostDeletionResponse,
    PostInfo,
    ReviewImpact,
)
from trip_nick.services.cache import PostListingCache
from trip_nick.services.errors import InternalError, NotFoundError, parse_positive_id
from trip_nick.services.post_variants import PostType
from trip_nick.services.transaction import unit_of_work

logger = logging.getLogger(__name__)

__all__ = [
    "assess_deletion",
    "delete_post",
    "delete_post_rows",
    "mark_description_deleted",
]


def mark_description_deleted(description: str | None) -> str:
    """Return ``description`` carrying the soft-delete marker exactly once.

    The result never exceeds the description column length; the original
    text is cut short to make room for the marker when needed.
    """
    text = description or ""
    if text.endswith(SOFT_DELETE_MARKER):
        return text
    room = DESCRIPTION_MAX_LENGTH - len(SOFT_DELETE_MARKER)
    return text[:room] + SOFT_DELETE_MARKER


def _round(value: float | None) -> float | None:
    return round(value, 2) if value is not None else None


def assess_deletion(
    repo: PostRepository,
    record: Post,
    *,
    soft_delete: bool = False,
) -> ImpactAssessment:
    """Describe what deleting ``record`` would change.

    Args:
        repo: Repository bound to the request session.
        record: Post loaded with its variant row and images.
        soft_delete: Whether the caller asked for a soft delete; only used to
            phrase warnings.
    """
    post_type = PostType(record.type)
    image_count = len(record.images)
    username = record.user.username if record.user is not None else None

    post_info = PostInfo(
        post_id=record.post_id,
        type=post_type.value,
        description=record.description,
        user_id=record.user_id,
        username=username,
        created_date=record.created_date,
        associated_images=image_count,
    )
    impact = DeletionImpact(
        post_images_to_unlink=image_count,
        type_specific_data=post_type.value,
    )
    warnings: list[str] = []

    if record.is_soft_deleted:
        warnings.append("Post is already marked as deleted")

    if post_type is PostType.REVIEW:
        review = record.review_post
        if review is None:
            raise InternalError(f"Review post {record.post_id} has no review row")
        spot_name = review.spot.spot_name if review.spot is not None else None
        before, _ = repo.spot_rating_stats(review.spot_id)
        after, _ = repo.spot_rating_stats(review.spot_id, exclude_post_id=record.post_id)
        change = None
        if review.rating is not None and before is not None and after is not None:
            change = _round(after - before)
        impact.review_impact = ReviewImpact(
            spot_id=review.spot_id,
            spot_affected=spot_name,
            rating_removed=review.rating,
            will_affect_spot_average=review.rating is not None,
            average_rating_before=_round(before),
            average_rating_after=_round(after),
            average_rating_change=change,
        )
        if review.rating is not None:
            warnings.append(f'Rating of {review.rating} stars for "{spot_name}" will be removed')
            if soft_delete:
                warnings.append("A soft delete keeps the rating in the spot's average")
            else:
                warnings.append("This will affect the spot's average rating")
    elif post_type is PostType.COMMUNITY:
        share = record.community_post
        if share is None:
            raise InternalError(f"Community post {record.post_id} has no community row")
        list_name = share.spot_list.list_name if share.spot_list is not None else None
        impact.community_impact = CommunityImpact(
            list_id=share.list_id,
            shared_list=list_name,
            list_is_public=share.spot_list.is_public if share.spot_list is not None else None,
        )
        warnings.append(f'Community visibility of list "{list_name}" will be removed')
    else:
        share = record.list_post
        if share is None:
            raise InternalError(f"List post {record.post_id} has no list row")
        list_name = share.spot_list.list_name if share.spot_list is not None else None
        impact.list_impact = ListShareImpact(
            list_id=share.list_id,
            shared_list=list_name,
            list_is_public=share.spot_list.is_public if share.spot_list is not None else None,
        )
        warnings.append(f'Personal share of list "{list_name}" will be removed')

    if image_count:
        warnings.append(f"{image_count} images will be unlinked (but not deleted from storage)")

    return ImpactAssessment(post_info=post_info, deletion_impact=impact, warnings=warnings)


def delete_post_rows(db: Session, model: type, post_id: int) -> int:
    """Delete the rows of ``model`` belonging to ``post_id`` and return the count."""
    result = db.execute(delete(model).where(model.post_id == post_id))
    return result.rowcount


def _soft_delete(db: Session, record: Post) -> DeletionResults:
    logger.info("Performing soft delete of post %s...", record.post_id)
    result = db.execute(
        update(Post)
        .where(Post.post_id == record.post_id)
        .values(description=mark_description_deleted(record.description))
    )
    if result.rowcount == 0:
        raise InternalError("Failed to mark post as deleted", post_id=record.post_id)
    return DeletionResults(soft_deleted=True)


def _hard_delete(db: Session, record: Post) -> DeletionResults:
    post_id = record.post_id
    results = DeletionResults()

    logger.info("Deleting post-image associations...")
    results.post_images_deleted = delete_post_rows(db, PostImage, post_id)

    logger.info("Deleting from %s post table...", record.type)
    results.type_specific_deleted = delete_post_rows(db, VARIANT_MODELS[record.type], post_id) > 0

    logger.info("Deleting base post record...")
    if delete_post_rows(db, Post, post_id) == 0:
        # The row vanished between assessment and deletion.
        raise InternalError("Failed to delete post record", post_id=post_id)
    results.base_post_deleted = True
    return results


def _summarize(
    assessment: ImpactAssessment,
    results: DeletionResults,
    soft_delete: bool,
) -> ImpactSummary:
    if soft_delete:
        total = 1
    else:
        total = (
            results.post_images_deleted
            + int(results.type_specific_deleted)
            + int(results.base_post_deleted)
        )
    summary = ImpactSummary(
        total_records_affected=total,
        images_unlinked=results.post_images_deleted,
        soft_deleted=soft_delete,
    )
    impact = assessment.deletion_impact
    if impact.review_impact is not None:
        rated = impact.review_impact.rating_removed is not None
        summary.spot_rating_updated = rated and not soft_delete
        summary.spot_affected = impact.review_impact.spot_affected
        summary.rating_removed = impact.review_impact.rating_removed
    elif impact.community_impact is not None:
        summary.list_affected = impact.community_impact.shared_list
    elif impact.list_impact is not None:
        summary.list_affected = impact.list_impact.shared_list
    return summary


def delete_post(
    db: Session,
    raw_post_id: object,
    *,
    dry_run: bool = False,
    soft_delete: bool = False,
    cache: PostListingCache | None = None,
) -> DryRunResponse | PostDeletionResponse:
    """Delete a post, mark it deleted, or preview either.

    Args:
        db: Request-scoped session.
        raw_post_id: Identifier as received from the client.
        dry_run: Only report the impact; nothing is changed.
        soft_delete: Append the deletion marker instead of removing rows.
        cache: Listing cache to invalidate after a committed change.

    Returns:
        A :class:`DryRunResponse` for previews, otherwise a
        :class:`PostDeletionResponse`.

    Raises:
        InvalidArgumentError: If the identifier is not a positive integer.
        NotFoundError: If no post has that identifier.
        InternalError: If a database step fails or affects no rows.
    """
    post_id = parse_positive_id(raw_post_id, "Post")
    logger.info(
        "Deleting post %s (dry_run=%s, soft_delete=%s)", post_id, dry_run, soft_delete
    )
    repo = PostRepository(db)

    with unit_of_work(db, "delete post"):
        logger.info("Verifying post exists and loading details...")
        record = repo.load_with_details(post_id)
        if record is None:
            raise NotFoundError(f"Post with ID {post_id} not found", post_id=post_id)

        assessment = assess_deletion(repo, record, soft_delete=soft_delete)
        if dry_run:
            logger.info("Dry run for post %s, nothing deleted", post_id)
            return DryRunResponse(would_delete=assessment)

        if soft_delete:
            results = _soft_delete(db, record)
        else:
            results = _hard_delete(db, record)

    logger.info("Post deletion transaction committed successfully")
    if cache is not None:
        cache.invalidate()

    info = assessment.post_info
    deleted_post = DeletedPost(
        post_id=info.post_id,
        type=info.type,
        description=info.description,
        user_id=info.user_id,
        username=info.username,
        created_date=info.created_date,
        deleted_at=datetime.now(UTC),
    )
    action = "marked as deleted" if soft_delete else "deleted"
    return PostDeletionResponse(
        message=f"{info.type.capitalize()} post {action} successfully",
        data=PostDeletionData(
            deleted_post=deleted_post,
            deletion_results=results,
            impact_summary=_summarize(assessment, results, soft_delete),
        ),
    )
