"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Page metadata returned by list endpoints."""

    total: int = Field(..., description="Number of rows matching the filters.")
    page: int = Field(..., description="1-based page number.")
    limit: int = Field(..., description="Page size used for this response.")
    has_more: bool = Field(..., description="Whether a further page exists.")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    success: bool = False
    error: str = Field(..., description="Stable machine-usable error kind.")
    detail: str = Field(..., description="Human readable message.")
