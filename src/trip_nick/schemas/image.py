"""Image metadata schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ImageCreate(BaseModel):
    """Metadata for an image already uploaded to blob storage."""

    image_name: str | None = Field(None, max_length=255)
    blob_url: str | None = Field(None, max_length=500, description="Public URL of the stored blob")
    content_type: str | None = Field(None, max_length=100)
    file_size: int | None = Field(None, ge=0, description="Size in bytes")


class ImageResponse(BaseModel):
    image_id: int
    image_name: str | None = None
    blob_url: str | None = None
    content_type: str | None = None
    file_size: int | None = None
    created_date: datetime

    model_config = ConfigDict(from_attributes=True)
