# src/trip_nick/api/v1/endpoints/images.py
"""Image metadata endpoints."""

from fastapi import APIRouter, status

from trip_nick.api.v1.dependencies import ERROR_RESPONSES, SessionDep
from trip_nick.models import Image
from trip_nick.schemas.image import ImageCreate, ImageResponse
from trip_nick.services import images

router = APIRouter(prefix="/images", tags=["images"], responses=ERROR_RESPONSES)


@router.post("", response_model=ImageResponse, status_code=status.HTTP_201_CREATED)
async def register_image(payload: ImageCreate, db: SessionDep) -> Image:
    """Record metadata for an image already stored in blob storage."""
    return images.register_image(db, payload)


@router.get("/{image_id}", response_model=ImageResponse)
async def get_image(image_id: str, db: SessionDep) -> Image:
    return images.get_image(db, image_id)
