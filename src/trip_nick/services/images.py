"""Registration of externally stored images."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from trip_nick.models import Image
from trip_nick.schemas.image import ImageCreate
from trip_nick.services.errors import NotFoundError, parse_positive_id
from trip_nick.services.transaction import unit_of_work

logger = logging.getLogger(__name__)

__all__ = ["get_image", "register_image"]


def register_image(db: Session, payload: ImageCreate) -> Image:
    """Store metadata for an image whose bytes already live in blob storage."""
    with unit_of_work(db, "register image"):
        image = Image(**payload.model_dump())
        db.add(image)
        db.flush()
    logger.info("Registered image %s", image.image_id)
    return image


def get_image(db: Session, raw_image_id: object) -> Image:
    image_id = parse_positive_id(raw_image_id, "Image")
    image = db.get(Image, image_id)
    if image is None:
        raise NotFoundError(f"Image with ID {image_id} not found", image_id=image_id)
    return image
