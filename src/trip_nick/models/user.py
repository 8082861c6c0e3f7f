"""SQLAlchemy model for application users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from trip_nick.db.session import Base
from trip_nick.db.time import utcnow


class User(Base):
    """Author of posts and owner of lists.

    No credentials are stored here; any caller may act as any user.
    """

    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    display_name: Mapped[str] = mapped_column(String(55), nullable=False)
    username: Mapped[str] = mapped_column(String(21), nullable=False, unique=True)
    user_email: Mapped[str] = mapped_column(String(35), nullable=False, unique=True)
    biography: Mapped[str | None] = mapped_column(String(450), nullable=True)
    profile_image_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("images.image_id"),
        nullable=True,
    )
    creation_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
