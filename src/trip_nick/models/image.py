"""SQLAlchemy model for externally stored images."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from trip_nick.db.session import Base
from trip_nick.db.time import utcnow


class Image(Base):
    """Metadata for an image whose bytes live in external blob storage.

    Images are referenced by spots, list entries, users and posts but never
    owned by them; deleting a post only unlinks its images.
    """

    __tablename__ = "images"

    image_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    image_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    blob_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    content_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    file_size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
