"""CRUD-style helpers for managing users."""
from __future__ import annotations

import logging

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from trip_nick.models import Image, User
from trip_nick.schemas.user import UserCreate
from trip_nick.services.errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    parse_positive_id,
)
from trip_nick.services.transaction import unit_of_work

logger = logging.getLogger(__name__)

__all__ = ["create_user", "get_user"]


def get_user(db: Session, raw_user_id: object) -> User:
    """Return a single user by primary key or raise ``NotFoundError``."""
    user_id = parse_positive_id(raw_user_id, "User")
    user = db.query(User).filter(User.user_id == user_id).first()
    if user is None:
        raise NotFoundError(f"User with ID {user_id} not found", user_id=user_id)
    return user


def create_user(db: Session, user: UserCreate) -> User:
    """Persist a new user; usernames and emails must be unique."""
    with unit_of_work(db, "create user"):
        taken = db.scalars(
            select(User).where(
                or_(User.username == user.username, User.user_email == user.user_email)
            )
        ).first()
        if taken is not None:
            field = "username" if taken.username == user.username else "user_email"
            raise ConflictError(f"A user with this {field} already exists", field=field)

        if user.profile_image_id is not None and db.get(Image, user.profile_image_id) is None:
            raise InvalidArgumentError(f"Image with ID {user.profile_image_id} does not exist")

        db_user = User(**user.model_dump())
        db.add(db_user)
        db.flush()
        user_id = db_user.user_id

    logger.info("Created user %s (%s)", user_id, user.username)
    return db_user
