"""Pydantic schemas for asset endpoints."""
from pydantic import BaseModel, ConfigDict

from models.asset import AssetType


class AssetResponse(BaseModel):
    """Schema for asset metadata responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    asset_type: AssetType
    size: int
    content_type: str | None
    file_name: str | None
    bookmark_id: str | None
