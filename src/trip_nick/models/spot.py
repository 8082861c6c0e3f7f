"""SQLAlchemy model for tourist spots."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trip_nick.db.session import Base
from trip_nick.db.time import utcnow

from .image import Image


class Spot(Base):
    """A point of interest that can be listed and reviewed."""

    __tablename__ = "spot"

    spot_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    spot_name: Mapped[str] = mapped_column(String(55), nullable=False)
    country: Mapped[str] = mapped_column(String(30), nullable=False)
    city: Mapped[str] = mapped_column(String(35), nullable=False)
    category: Mapped[str] = mapped_column(String(30), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    # Average rating is computed from review posts, never stored.
    spot_image_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("images.image_id"),
        nullable=True,
    )

    image: Mapped[Image | None] = relationship("Image")

    @property
    def location(self) -> str:
        """Return the human readable "city, country" pair."""
        return f"{self.city}, {self.country}"
