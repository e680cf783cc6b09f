"""Pydantic schemas for user endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from models.user import UserRole


class UserResponse(BaseModel):
    """Schema for the current user's profile."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    image: str | None
    role: UserRole
    created_at: datetime


class UserStats(BaseModel):
    """Row counts for a user's library."""

    num_bookmarks: int
    num_favourites: int
    num_archived: int
    num_tags: int
    num_lists: int
