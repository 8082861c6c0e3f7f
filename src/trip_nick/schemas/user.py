"""User-related Pydantic schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from trip_nick.services.errors import MAX_ID

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.]+$")


class UserCreate(BaseModel):
    """Schema for registering a user profile."""

    display_name: str = Field(..., min_length=1, max_length=55, description="Name shown on posts")
    username: str = Field(..., min_length=3, max_length=21, description="Unique handle")
    user_email: str = Field(..., min_length=3, max_length=35, description="Unique contact email")
    biography: str | None = Field(None, max_length=450)
    profile_image_id: int | None = Field(None, gt=0, le=MAX_ID, strict=True)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        """Allow letters, digits, underscores and dots only."""
        if not USERNAME_PATTERN.match(value):
            raise ValueError("username may only contain letters, digits, '_' and '.'")
        return value

    @field_validator("user_email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        value = value.strip().lower()
        if "@" not in value or value.startswith("@") or value.endswith("@"):
            raise ValueError("user_email must be a valid email address")
        return value


class UserResponse(BaseModel):
    """Schema for user data in responses."""

    user_id: int
    display_name: str
    username: str
    user_email: str
    biography: str | None = None
    profile_image_id: int | None = None
    creation_date: datetime

    model_config = ConfigDict(from_attributes=True)
