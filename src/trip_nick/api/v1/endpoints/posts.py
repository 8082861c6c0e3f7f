# src/trip_nick/api/v1/endpoints/posts.py
"""Post-related endpoints for the Trip Nick API."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, status

from trip_nick.api.v1.dependencies import ERROR_RESPONSES, PostsCacheDep, SessionDep
from trip_nick.schemas.post import (
    DryRunResponse,
    PostCreatedResponse,
    PostDeletionResponse,
    PostDetailResponse,
    PostListResponse,
)
from trip_nick.services import post_queries
from trip_nick.services.post_creation import create_post as run_create_post
from trip_nick.services.post_deletion import delete_post as run_delete_post
from trip_nick.services.post_variants import parse_create_request

router = APIRouter(prefix="/posts", tags=["posts"], responses=ERROR_RESPONSES)


@router.get("", response_model=PostListResponse)
async def list_posts(
    db: SessionDep,
    cache: PostsCacheDep,
    page: int = Query(1, description="1-based page number"),
    limit: int | None = Query(None, description="Page size (defaults to DEFAULT_PAGE_SIZE)"),
    user_id: str | None = Query(None, description="Only posts written by this user"),
    post_type: str | None = Query(None, alias="type", description="community, review or list"),
    include_deleted: bool = Query(False, description="Include soft-deleted posts"),
) -> PostListResponse:
    """List posts, newest first.

    Args:
        db: Database session
        cache: Post listing cache
        page: Page number, starting at 1
        limit: Maximum number of posts per page
        user_id: Filter by author
        post_type: Filter by post variant
        include_deleted: Whether soft-deleted posts are returned

    Returns:
        Page of posts with pagination metadata
    """
    return post_queries.list_posts(
        db,
        page=page,
        limit=limit,
        user_id=user_id,
        post_type=post_type,
        include_deleted=include_deleted,
        cache=cache,
    )


@router.post("", response_model=PostCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    db: SessionDep,
    cache: PostsCacheDep,
    payload: Annotated[dict[str, Any], Body(description="Post body; `type` selects the variant")],
) -> PostCreatedResponse:
    """Create a review, community or list post.

    Community and list posts create a list holding their spots in the same
    transaction as the post itself.

    Args:
        db: Database session
        cache: Post listing cache, invalidated on success
        payload: Request body carrying a ``type`` tag

    Returns:
        The created post as its variant

    Raises:
        TripNickError: On validation failures, missing references or
            database errors
    """
    request = parse_create_request(payload)
    created = run_create_post(db, request, cache)
    return PostCreatedResponse(
        post_id=created.post.post_id,
        data=created.post,
        list_created=created.list_created,
    )


@router.get("/{post_id}", response_model=PostDetailResponse)
async def get_post(post_id: str, db: SessionDep) -> PostDetailResponse:
    """Return a single post with its variant data and images."""
    return post_queries.get_post(db, post_id)


@router.delete("/{post_id}", response_model=DryRunResponse | PostDeletionResponse)
async def delete_post(
    post_id: str,
    db: SessionDep,
    cache: PostsCacheDep,
    dry_run: bool = Query(False, alias="dryRun", description="Only report the impact"),
    soft_delete: bool = Query(False, alias="softDelete", description="Mark instead of remove"),
) -> DryRunResponse | PostDeletionResponse:
    """Delete a post, mark it as deleted, or preview the deletion.

    Args:
        post_id: Identifier of the post (positive integer)
        db: Database session
        cache: Post listing cache, invalidated after a committed change
        dry_run: Report the impact without changing anything
        soft_delete: Append the deletion marker instead of removing rows

    Returns:
        Impact report for dry runs, otherwise the deletion report

    Raises:
        TripNickError: 400 for a bad id, 404 for a missing post, 500 when the
            database rejects the deletion
    """
    return run_delete_post(
        db,
        post_id,
        dry_run=dry_run,
        soft_delete=soft_delete,
        cache=cache,
    )
