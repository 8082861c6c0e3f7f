# src/trip_nick/api/v1/endpoints/users.py
"""User profile endpoints."""

from fastapi import APIRouter, status

from trip_nick.api.v1.dependencies import ERROR_RESPONSES, SessionDep
from trip_nick.models import User
from trip_nick.schemas.user import UserCreate, UserResponse
from trip_nick.services import user_service

router = APIRouter(prefix="/users", tags=["users"], responses=ERROR_RESPONSES)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, db: SessionDep) -> User:
    """Create a user profile.

    Args:
        payload: Profile fields
        db: Database session

    Returns:
        The stored user

    Raises:
        TripNickError: 409 when the username or email is already taken
    """
    return user_service.create_user(db, payload)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, db: SessionDep) -> User:
    """Return a user profile by identifier."""
    return user_service.get_user(db, user_id)
