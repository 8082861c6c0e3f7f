# src/trip_nick/api/v1/endpoints/lists.py
"""List and list-entry endpoints for the Trip Nick API."""

from fastapi import APIRouter, Query, status

from trip_nick.api.v1.dependencies import ERROR_RESPONSES, PostsCacheDep, SessionDep
from trip_nick.schemas.spot_list import (
    ListContentsResponse,
    ListCreate,
    ListCreatedResponse,
    ListDeletionResponse,
    ListDryRunResponse,
    ListSpotAdd,
    ListSpotAddedResponse,
    ListSpotRemovedResponse,
)
from trip_nick.services import list_spots, lists

router = APIRouter(prefix="/lists", tags=["lists"], responses=ERROR_RESPONSES)


@router.post("", response_model=ListCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_list(payload: ListCreate, db: SessionDep) -> ListCreatedResponse:
    """Create an empty list (public unless ``is_public`` is false)."""
    return lists.create_list(db, payload)


@router.get("/{list_id}/spots", response_model=ListContentsResponse)
async def get_list_contents(
    list_id: str,
    db: SessionDep,
    order_by: str = Query("added_date", description="added_date, spot_name, city or category"),
    order: str = Query("desc", description="asc or desc"),
) -> ListContentsResponse:
    """Return a list with its statistics and spots."""
    return lists.get_list_contents(db, list_id, order_by=order_by, order=order)


@router.delete("/{list_id}", response_model=ListDryRunResponse | ListDeletionResponse)
async def delete_list(
    list_id: str,
    db: SessionDep,
    cache: PostsCacheDep,
    dry_run: bool = Query(False, alias="dryRun"),
    force: bool = Query(False, description="Also delete posts that share this list"),
) -> ListDryRunResponse | ListDeletionResponse:
    """Delete a list, or preview the deletion.

    Args:
        list_id: Identifier of the list
        db: Database session
        cache: Post listing cache, invalidated when posts are removed
        dry_run: Report the impact without changing anything
        force: Delete referencing posts instead of refusing with 409

    Returns:
        Impact report for dry runs, otherwise the deletion report
    """
    return lists.delete_list(db, list_id, dry_run=dry_run, force=force, cache=cache)


@router.post(
    "/{list_id}/spots",
    response_model=ListSpotAddedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_spot_to_list(
    list_id: str,
    payload: ListSpotAdd,
    db: SessionDep,
) -> ListSpotAddedResponse:
    """Add a spot to a list.

    Args:
        list_id: Identifier of the list
        payload: Spot to add and an optional thumbnail image
        db: Database session

    Returns:
        The created entry with list and spot names

    Raises:
        TripNickError: 404 when the list, spot or thumbnail is missing and
            409 when the spot is already in the list
    """
    return list_spots.add_spot_to_list(db, list_id, payload)


@router.delete("/{list_id}/spots/{spot_id}", response_model=ListSpotRemovedResponse)
async def remove_spot_from_list(
    list_id: str,
    spot_id: str,
    db: SessionDep,
) -> ListSpotRemovedResponse:
    """Remove a spot from a list and report the updated list statistics."""
    return list_spots.remove_spot_from_list(db, list_id, spot_id)
