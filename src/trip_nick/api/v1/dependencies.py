"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from trip_nick.db.session import get_db
from trip_nick.schemas.common import ErrorResponse
from trip_nick.services.cache import PostListingCache

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_posts_cache(request: Request) -> PostListingCache:
    """Return the post listing cache owned by the running application.

    Args:
        request: Incoming request, used to reach ``app.state``.

    Returns:
        The application's :class:`PostListingCache`.
    """
    return request.app.state.posts_cache


PostsCacheDep = Annotated[PostListingCache, Depends(get_posts_cache)]

# Documented error bodies shared by every v1 router.
ERROR_RESPONSES: dict[int | str, dict] = {
    code: {"model": ErrorResponse} for code in (400, 404, 409, 500)
}
