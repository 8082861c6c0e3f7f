# src/trip_nick/schemas/spot_list.py
"""List-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class ListCreate(BaseModel):
    """Request body for creating a list."""

    list_name: str
    is_public: bool | None = None


class ListOut(BaseModel):
    list_id: int
    list_name: str
    is_public: bool

    model_config = ConfigDict(from_attributes=True)


class ListCreatedResponse(BaseModel):
    success: bool = True
    list_id: int
    message: str = "List created successfully"
    data: ListOut


class ListSpotAdd(BaseModel):
    """Request body for adding a spot to a list."""

    spot_id: StrictInt
    list_thumbnail_id: StrictInt | None = None


class ListNameInfo(BaseModel):
    list_name: str
    is_public: bool


class SpotLocationInfo(BaseModel):
    spot_name: str
    location: str


class ListSpotAddedData(BaseModel):
    list_id: int
    spot_id: int
    list_thumbnail_id: int | None
    created_date: datetime
    list_info: ListNameInfo
    spot_info: SpotLocationInfo


class ListSpotAddedResponse(BaseModel):
    """Response for a newly created list entry."""

    success: bool = True
    message: str
    data: ListSpotAddedData


class AssociationInfo(BaseModel):
    was_added_on: datetime
    had_thumbnail: bool
    list_thumbnail_id: int | None


class ListRemovalStats(BaseModel):
    """List statistics captured around a removal."""

    list_name: str
    is_public: bool
    spots_before_removal: int
    remaining_spots: int
    last_spot_added: datetime | None


class ListSpotRemovedData(BaseModel):
    list_id: int
    spot_id: int
    removed_at: datetime
    association_info: AssociationInfo
    list_info: ListRemovalStats
    spot_info: SpotLocationInfo


class ListSpotRemovedResponse(BaseModel):
    """Response for a removed list entry, with updated statistics."""

    success: bool = True
    message: str
    data: ListSpotRemovedData


class ListEntryOut(BaseModel):
    """A spot as it appears inside a list."""

    spot_id: int
    spot_name: str
    country: str
    city: str
    category: str
    description: str | None = None
    spot_image_id: int | None = None
    added_date: datetime
    list_thumbnail_id: int | None = None
    thumbnail_url: str | None = None


class ListContentsStats(BaseModel):
    total_spots: int
    spots_with_thumbnails: int
    first_added: datetime | None
    last_added: datetime | None


class ListContentsResponse(BaseModel):
    """Response for ``GET /lists/{list_id}/spots``."""

    success: bool = True
    list_info: ListOut
    statistics: ListContentsStats
    spots: list[ListEntryOut]
    order_by: Literal["added_date", "spot_name", "city", "category"]
    order: Literal["asc", "desc"]


class ListDeletionInfo(BaseModel):
    list_id: int
    list_name: str
    is_public: bool
    spots_in_list: int
    posts_referencing_list: int


class ListDeletionImpact(BaseModel):
    list_spot_associations_to_delete: int
    community_posts_to_delete: int
    list_posts_to_delete: int
    total_posts_to_delete: int


class ListImpactAssessment(BaseModel):
    """What deleting a list would remove."""

    list_info: ListDeletionInfo
    deletion_impact: ListDeletionImpact
    warnings: list[str] = Field(default_factory=list)


class ListDryRunResponse(BaseModel):
    success: bool = True
    message: str = "Dry run completed - no data was deleted"
    dry_run: Literal[True] = True
    would_delete: ListImpactAssessment


class DeletedList(BaseModel):
    list_id: int
    list_name: str
    was_public: bool
    deleted_at: datetime


class ListDeletionResults(BaseModel):
    list_spot_associations_deleted: int = 0
    community_posts_deleted: int = 0
    list_posts_deleted: int = 0
    post_images_deleted: int = 0
    base_posts_deleted: int = 0
    list_deleted: bool = False


class ListDeletionSummary(BaseModel):
    total_records_deleted: int
    spots_removed_from_list: int
    posts_deleted: int
    operation_forced: bool


class ListDeletionData(BaseModel):
    deleted_list: DeletedList
    deletion_results: ListDeletionResults
    impact_summary: ListDeletionSummary


class ListDeletionResponse(BaseModel):
    """Response for a committed list deletion."""

    success: bool = True
    message: str
    data: ListDeletionData
