# src/trip_nick/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .images import router as images_router
from .lists import router as lists_router
from .posts import router as posts_router
from .spots import router as spots_router
from .users import router as users_router

__all__ = [
    "images_router",
    "lists_router",
    "posts_router",
    "spots_router",
    "users_router",
]
