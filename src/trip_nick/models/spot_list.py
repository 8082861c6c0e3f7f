"""SQLAlchemy models for spot lists and their contents."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trip_nick.db.session import Base
from trip_nick.db.time import utcnow

from .image import Image
from .spot import Spot

LIST_NAME_MAX_LENGTH = 45


class SpotList(Base):
    """Named collection of spots, flagged public or private."""

    __tablename__ = "list"

    list_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    list_name: Mapped[str] = mapped_column(String(LIST_NAME_MAX_LENGTH), nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    entries: Mapped[list[ListSpot]] = relationship(
        "ListSpot",
        back_populates="spot_list",
        passive_deletes=True,
    )


class ListSpot(Base):
    """Association row placing a spot inside a list."""

    __tablename__ = "list_has_spot"

    list_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("list.list_id", ondelete="CASCADE"),
        primary_key=True,
    )
    spot_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("spot.spot_id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    list_thumbnail_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("images.image_id"),
        nullable=True,
    )

    spot_list: Mapped[SpotList] = relationship("SpotList", back_populates="entries")
    spot: Mapped[Spot] = relationship("Spot")
    thumbnail: Mapped[Image | None] = relationship("Image")
