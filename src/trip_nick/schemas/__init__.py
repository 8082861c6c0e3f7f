# src/trip_nick/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import ErrorResponse, Pagination
from .image import ImageCreate, ImageResponse
from .post import (
    CommunityPostOut,
    ListPostOut,
    PostOut,
    ReviewPostCreate,
    ReviewPostOut,
    SharePostCreate,
)
from .spot import SpotCreate, SpotOut
from .spot_list import ListCreate, ListOut, ListSpotAdd
from .user import UserCreate, UserResponse

__all__ = [
    "ErrorResponse", "Pagination",
    "ImageCreate", "ImageResponse",
    "CommunityPostOut", "ListPostOut", "PostOut", "ReviewPostCreate", "ReviewPostOut",
    "SharePostCreate",
    "SpotCreate", "SpotOut",
    "ListCreate", "ListOut", "ListSpotAdd",
    "UserCreate", "UserResponse",
]
