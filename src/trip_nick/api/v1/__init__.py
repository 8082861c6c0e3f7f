# src/trip_nick/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    images_router,
    lists_router,
    posts_router,
    spots_router,
    users_router,
)

__all__ = [
    "images_router",
    "lists_router",
    "posts_router",
    "spots_router",
    "users_router",
]
