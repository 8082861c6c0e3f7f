# src/trip_nick/schemas/spot.py
"""Spot-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, StrictInt

from trip_nick.schemas.common import Pagination


class SpotCreate(BaseModel):
    """Request body for registering a spot."""

    spot_name: str
    country: str
    city: str
    category: str
    description: str | None = None
    spot_image_id: StrictInt | None = None


class SpotStats(BaseModel):
    """Aggregates computed from reviews and list entries."""

    total_reviews: int = 0
    average_rating: float = 0.0
    times_added_to_lists: int = 0


class SpotOut(BaseModel):
    spot_id: int
    spot_name: str
    country: str
    city: str
    category: str
    description: str | None = None
    created_date: datetime
    spot_image_id: int | None = None
    image_url: str | None = None
    statistics: SpotStats | None = None

    model_config = ConfigDict(from_attributes=True)


class SpotCreatedResponse(BaseModel):
    success: bool = True
    spot_id: int
    message: str = "Spot created successfully"
    data: SpotOut


class SpotFilters(BaseModel):
    category: str | None = None
    country: str | None = None
    city: str | None = None
    search: str | None = None
    order_by: str
    order: str


class SpotListResponse(BaseModel):
    """Response for ``GET /spots``."""

    success: bool = True
    spots: list[SpotOut]
    pagination: Pagination
    filters: SpotFilters


class SpotDetailResponse(BaseModel):
    success: bool = True
    spot: SpotOut
