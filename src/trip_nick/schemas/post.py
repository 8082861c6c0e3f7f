# src/trip_nick/schemas/post.py
"""Post-related Pydantic schemas.

Read models form a closed tagged union on ``type``: every post is exactly one
of :class:`CommunityPostOut`, :class:`ReviewPostOut` or :class:`ListPostOut`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from trip_nick.schemas.common import Pagination


class AuthorOut(BaseModel):
    """Public fields of the user who wrote a post."""

    user_id: int
    display_name: str
    username: str

    model_config = ConfigDict(from_attributes=True)


class SpotSummary(BaseModel):
    """Spot fields embedded in review posts."""

    spot_id: int
    spot_name: str
    country: str
    city: str
    category: str
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ListSummary(BaseModel):
    """List fields embedded in community and list posts."""

    list_id: int
    list_name: str
    is_public: bool

    model_config = ConfigDict(from_attributes=True)


class PostImageOut(BaseModel):
    """Image linked to a post, in display order."""

    image_id: int
    image_order: int
    is_thumbnail: bool
    image_name: str | None = None
    blob_url: str | None = None


class PostOutBase(BaseModel):
    """Fields shared by every post variant."""

    post_id: int
    description: str | None = None
    user_id: int
    created_date: datetime
    author: AuthorOut | None = None
    images: list[PostImageOut] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class CommunityPostOut(PostOutBase):
    """A list of spots shared with the whole community."""

    type: Literal["community"] = "community"
    title: str = Field(..., min_length=1, max_length=45)
    list_id: int
    list_info: ListSummary | None = None


class ReviewPostOut(PostOutBase):
    """A review of a single spot with an optional 1-5 rating."""

    type: Literal["review"] = "review"
    spot_id: int
    rating: int | None = Field(default=None, ge=1, le=5)
    spot: SpotSummary | None = None


class ListPostOut(PostOutBase):
    """A personal share of a list of spots."""

    type: Literal["list"] = "list"
    title: str = Field(..., min_length=1, max_length=45)
    list_id: int
    list_info: ListSummary | None = None


PostOut = Annotated[
    Union[CommunityPostOut, ReviewPostOut, ListPostOut],
    Field(discriminator="type"),
]


class ReviewPostCreate(BaseModel):
    """Request body for creating a review post."""

    type: Literal["review"]
    user_id: StrictInt
    spot_id: StrictInt
    rating: StrictInt | None = None
    description: str | None = None
    image_ids: list[StrictInt] = Field(default_factory=list)
    thumbnail_image_id: StrictInt | None = None


class SharePostCreate(BaseModel):
    """Request body for community and list posts.

    Either ``spot_ids`` (a new list is created for them) or ``list_id`` (an
    existing list is shared) must be given, not both.
    """

    type: Literal["community", "list"]
    user_id: StrictInt
    title: str
    description: str | None = None
    spot_ids: list[StrictInt] = Field(default_factory=list)
    list_id: StrictInt | None = None
    list_name: str | None = None
    # Optional per-spot thumbnail image for the created list entries.
    spot_thumbnails: dict[int, StrictInt] = Field(default_factory=dict)
    image_ids: list[StrictInt] = Field(default_factory=list)
    thumbnail_image_id: StrictInt | None = None


PostCreate = Annotated[
    Union[ReviewPostCreate, SharePostCreate],
    Field(discriminator="type"),
]


class PostCreatedResponse(BaseModel):
    """Envelope returned after a post is created."""

    success: bool = True
    post_id: int
    message: str = "Post created successfully"
    data: PostOut
    list_created: bool = False


class PostListResponse(BaseModel):
    """Envelope for ``GET /posts``."""

    success: bool = True
    posts: list[PostOut]
    pagination: Pagination


class PostDetailResponse(BaseModel):
    """Envelope for ``GET /posts/{post_id}``."""

    success: bool = True
    post: PostOut


class PostInfo(BaseModel):
    """Identity of the post targeted by a deletion request."""

    post_id: int
    type: str
    description: str | None
    user_id: int
    username: str | None
    created_date: datetime
    associated_images: int


class ReviewImpact(BaseModel):
    """Effect of removing a review on its spot."""

    spot_id: int
    spot_affected: str | None
    rating_removed: int | None
    will_affect_spot_average: bool
    average_rating_before: float | None
    average_rating_after: float | None
    average_rating_change: float | None


class CommunityImpact(BaseModel):
    """Effect of removing a community post on its list."""

    list_id: int
    shared_list: str | None
    list_is_public: bool | None
    community_visibility_lost: bool = True


class ListShareImpact(BaseModel):
    """Effect of removing a list post on its list."""

    list_id: int
    shared_list: str | None
    list_is_public: bool | None
    personal_sharing_removed: bool = True


class DeletionImpact(BaseModel):
    """Counts and variant-specific consequences of a deletion."""

    post_images_to_unlink: int
    type_specific_data: str
    review_impact: ReviewImpact | None = None
    community_impact: CommunityImpact | None = None
    list_impact: ListShareImpact | None = None


class ImpactAssessment(BaseModel):
    """Full report of what deleting a post would do."""

    post_info: PostInfo
    deletion_impact: DeletionImpact
    warnings: list[str] = Field(default_factory=list)


class DryRunResponse(BaseModel):
    """Response for ``dryRun=true`` deletions; nothing was changed."""

    success: bool = True
    message: str = "Dry run completed - no data was deleted"
    dry_run: Literal[True] = True
    would_delete: ImpactAssessment


class DeletedPost(BaseModel):
    """Identity of the post that was deleted."""

    post_id: int
    type: str
    description: str | None
    user_id: int
    username: str | None
    created_date: datetime
    deleted_at: datetime


class DeletionResults(BaseModel):
    """Rows touched by the deletion."""

    post_images_deleted: int = 0
    type_specific_deleted: bool = False
    base_post_deleted: bool = False
    soft_deleted: bool = False


class ImpactSummary(BaseModel):
    """Client-facing summary of a committed deletion."""

    total_records_affected: int
    images_unlinked: int
    soft_deleted: bool
    spot_rating_updated: bool | None = None
    spot_affected: str | None = None
    rating_removed: int | None = None
    list_affected: str | None = None


class PostDeletionData(BaseModel):
    deleted_post: DeletedPost
    deletion_results: DeletionResults
    impact_summary: ImpactSummary


class PostDeletionResponse(BaseModel):
    """Response for a committed soft or hard deletion."""

    success: bool = True
    message: str
    data: PostDeletionData
