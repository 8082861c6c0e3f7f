"""Page/limit handling shared by listing endpoints."""

from __future__ import annotations

from trip_nick.core.settings import settings
from trip_nick.schemas.common import Pagination
from trip_nick.services.errors import InvalidArgumentError


def validate_page(page: int, limit: int | None) -> tuple[int, int]:
    """Return ``(page, limit)`` with the configured default and bounds applied."""
    if limit is None:
        limit = settings.default_page_size
    if page < 1:
        raise InvalidArgumentError("page must be 1 or greater")
    if not 1 <= limit <= settings.max_page_size:
        raise InvalidArgumentError(f"limit must be between 1 and {settings.max_page_size}")
    return page, limit


def build_pagination(total: int, page: int, limit: int) -> Pagination:
    return Pagination(total=total, page=page, limit=limit, has_more=page * limit < total)
