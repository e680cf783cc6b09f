"""Pydantic schemas for tag endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.validators import validate_and_normalize_tag, validate_and_normalize_tags


class TagCount(BaseModel):
    """Schema for a tag with its usage counts split by attribution."""

    id: str
    name: str
    count: int  # Total bookmarks carrying this tag
    ai_count: int
    human_count: int


class TagListResponse(BaseModel):
    """Schema for the tags list response."""

    tags: list[TagCount]


class TagResponse(BaseModel):
    """Schema for full tag response (used by rename and merge endpoints)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    created_at: datetime


class TagRenameRequest(BaseModel):
    """Schema for renaming a tag."""

    new_name: str = Field(..., min_length=1, max_length=100)

    @field_validator("new_name", mode="before")
    @classmethod
    def normalize_and_validate(cls, v: str) -> str:
        """Normalize and validate the new tag name."""
        if not isinstance(v, str):
            raise ValueError("Tag name must be a string")
        return validate_and_normalize_tag(v)


class TagMergeRequest(BaseModel):
    """Schema for merging several tags into one."""

    into_tag: str = Field(..., min_length=1, max_length=100)
    from_tags: list[str] = Field(..., min_length=1)

    @field_validator("into_tag", mode="before")
    @classmethod
    def normalize_target(cls, v: str) -> str:
        """Normalize and validate the target tag name."""
        if not isinstance(v, str):
            raise ValueError("Tag name must be a string")
        return validate_and_normalize_tag(v)

    @field_validator("from_tags", mode="before")
    @classmethod
    def normalize_sources(cls, v: list[str]) -> list[str]:
        """Normalize and validate the source tag names."""
        return validate_and_normalize_tags(v or [])
