# src/trip_nick/api/v1/endpoints/spots.py
"""Spot endpoints for the Trip Nick API."""

from fastapi import APIRouter, Query, status

from trip_nick.api.v1.dependencies import ERROR_RESPONSES, SessionDep
from trip_nick.schemas.spot import (
    SpotCreate,
    SpotCreatedResponse,
    SpotDetailResponse,
    SpotListResponse,
)
from trip_nick.services import spots

router = APIRouter(prefix="/spots", tags=["spots"], responses=ERROR_RESPONSES)


@router.post("", response_model=SpotCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_spot(payload: SpotCreate, db: SessionDep) -> SpotCreatedResponse:
    """Register a spot; name, city and country together must be unique."""
    return spots.create_spot(db, payload)


@router.get("", response_model=SpotListResponse)
async def list_spots(
    db: SessionDep,
    page: int = Query(1),
    limit: int | None = Query(None),
    category: str | None = Query(None),
    country: str | None = Query(None),
    city: str | None = Query(None),
    search: str | None = Query(None, description="Matches spot name or description"),
    order_by: str = Query("created_date"),
    order: str = Query("desc"),
    include_stats: bool = Query(False),
) -> SpotListResponse:
    """List spots with optional filters, ordering and statistics.

    Args:
        db: Database session
        page: Page number, starting at 1
        limit: Maximum number of spots per page
        category: Exact category filter
        country: Exact country filter
        city: Exact city filter
        search: Substring searched in name and description
        order_by: created_date, spot_name, country, city or category
        order: asc or desc
        include_stats: Attach review and list statistics to each spot

    Returns:
        Page of spots with pagination metadata and the applied filters
    """
    return spots.list_spots(
        db,
        page=page,
        limit=limit,
        category=category,
        country=country,
        city=city,
        search=search,
        order_by=order_by,
        order=order,
        include_stats=include_stats,
    )


@router.get("/{spot_id}", response_model=SpotDetailResponse)
async def get_spot(
    spot_id: str,
    db: SessionDep,
    include_stats: bool = Query(True),
) -> SpotDetailResponse:
    """Return a spot with its review and list statistics."""
    return spots.get_spot(db, spot_id, include_stats=include_stats)
