"""Pydantic schemas for bookmark list endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BookmarkListCreate(BaseModel):
    """Schema for creating a new bookmark list."""

    name: str = Field(..., min_length=1, max_length=100)
    icon: str = Field(..., min_length=1, max_length=32)
    parent_id: str | None = None


class BookmarkListUpdate(BaseModel):
    """
    Schema for updating a bookmark list.

    Send parent_id: null explicitly to move a list to the top level.
    """

    name: str | None = Field(default=None, min_length=1, max_length=100)
    icon: str | None = Field(default=None, min_length=1, max_length=32)
    parent_id: str | None = None


class BookmarkListResponse(BaseModel):
    """Schema for bookmark list responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    icon: str
    parent_id: str | None
    created_at: datetime
