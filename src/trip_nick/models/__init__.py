"""SQLAlchemy models for the Trip Nick application."""

from .image import Image
from .post import CommunityPost, ListPost, Post, PostImage, ReviewPost
from .spot import Spot
from .spot_list import ListSpot, SpotList
from .user import User

__all__ = [
    "Image",
    "CommunityPost", "ListPost", "Post", "PostImage", "ReviewPost",
    "Spot",
    "ListSpot", "SpotList",
    "User",
]
