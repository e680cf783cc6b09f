"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from models.bookmark import BookmarkAssetType, BookmarkType, ProcessingStatus
from models.tag import TagAttribution
from schemas.validators import (
    validate_and_normalize_tags,
    validate_note_length,
    validate_text_length,
    validate_title_length,
)


class _BookmarkCreateBase(BaseModel):
    """Fields shared by every bookmark type on creation."""

    title: str | None = None
    note: str | None = None
    tags: list[str] = []

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: list[str] | None) -> list[str]:
        """Normalize and validate tags."""
        if v is None:
            return []
        return validate_and_normalize_tags(v)

    @field_validator("title")
    @classmethod
    def check_title_length(cls, v: str | None) -> str | None:
        """Validate title length."""
        return validate_title_length(v)

    @field_validator("note")
    @classmethod
    def check_note_length(cls, v: str | None) -> str | None:
        """Validate note length."""
        return validate_note_length(v)


class LinkBookmarkCreate(_BookmarkCreateBase):
    """Schema for saving a URL (what the browser extension sends)."""

    type: Literal["link"] = "link"
    # HttpUrl normalizes root domains with trailing slash (example.com -> example.com/)
    url: HttpUrl


class TextBookmarkCreate(_BookmarkCreateBase):
    """Schema for saving a piece of text."""

    type: Literal["text"] = "text"
    text: str = Field(..., min_length=1)
    source_url: HttpUrl | None = None

    @field_validator("text")
    @classmethod
    def check_text_length(cls, v: str) -> str:
        """Validate text length."""
        return validate_text_length(v)


class AssetBookmarkCreate(_BookmarkCreateBase):
    """Schema for turning an uploaded file into a bookmark."""

    type: Literal["asset"] = "asset"
    asset_type: BookmarkAssetType
    asset_id: str = Field(..., min_length=1, max_length=255)
    file_name: str | None = None
    source_url: HttpUrl | None = None


BookmarkCreate = Annotated[
    LinkBookmarkCreate | TextBookmarkCreate | AssetBookmarkCreate,
    Field(discriminator="type"),
]


class BookmarkUpdate(BaseModel):
    """Schema for updating a bookmark. Only provided fields are changed."""

    title: str | None = None
    archived: bool | None = None
    favourited: bool | None = None
    note: str | None = None
    summary: str | None = None

    @field_validator("title")
    @classmethod
    def check_title_length(cls, v: str | None) -> str | None:
        """Validate title length."""
        return validate_title_length(v)

    @field_validator("note")
    @classmethod
    def check_note_length(cls, v: str | None) -> str | None:
        """Validate note length."""
        return validate_note_length(v)


class LinkContentResponse(BaseModel):
    """Link extension row as returned by the API (html_content omitted)."""

    model_config = ConfigDict(from_attributes=True)

    url: str
    title: str | None
    description: str | None
    image_url: str | None
    favicon: str | None
    crawled_at: datetime | None
    crawl_status: ProcessingStatus | None


class TextContentResponse(BaseModel):
    """Text extension row as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    text: str | None
    source_url: str | None


class AssetContentResponse(BaseModel):
    """Asset extension row as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    asset_type: BookmarkAssetType
    asset_id: str
    file_name: str | None
    source_url: str | None


class BookmarkTagResponse(BaseModel):
    """A tag as attached to one bookmark."""

    model_config = ConfigDict(from_attributes=True)

    tag_id: str
    name: str
    attached_by: TagAttribution


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    type: BookmarkType
    title: str | None
    archived: bool
    favourited: bool
    tagging_status: ProcessingStatus | None
    summary: str | None
    note: str | None
    link: LinkContentResponse | None = None
    text: TextContentResponse | None = None
    asset: AssetContentResponse | None = None
    tags: list[BookmarkTagResponse] = []
    already_exists: bool = False


class BookmarkListResponse(BaseModel):
    """Schema for paginated bookmark list responses."""

    items: list[BookmarkResponse]
    total: int
    offset: int
    limit: int
    has_more: bool


class BookmarkTagsRequest(BaseModel):
    """Schema for attaching or detaching tags on a bookmark."""

    tags: list[str] = Field(..., min_length=1)
    attached_by: TagAttribution = TagAttribution.HUMAN

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: list[str]) -> list[str]:
        """Normalize and validate tags."""
        return validate_and_normalize_tags(v or [])
