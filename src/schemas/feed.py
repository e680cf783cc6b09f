"""Pydantic schemas for RSS feed endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from models.bookmark import ProcessingStatus


class FeedCreate(BaseModel):
    """Schema for subscribing to a feed."""

    name: str = Field(..., min_length=1, max_length=255)
    url: HttpUrl


class FeedUpdate(BaseModel):
    """Schema for updating a feed subscription."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    url: HttpUrl | None = None


class FeedResponse(BaseModel):
    """Schema for feed responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    url: str
    created_at: datetime
    last_fetched_at: datetime | None
    last_fetched_status: ProcessingStatus | None
