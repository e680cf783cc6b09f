"""Pydantic schemas for API key endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ApiKeyCreate(BaseModel):
    """Schema for creating a new API key."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="User-provided name for the key, e.g., 'Browser extension'",
    )


class ApiKeyCreateResponse(BaseModel):
    """
    Response when creating a new API key.

    IMPORTANT: The `key` field contains the plaintext key and is only shown
    once at creation time. It cannot be retrieved again.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    key: str = Field(
        ...,
        description="The plaintext key. Store this securely - it won't be shown again.",
    )
    created_at: datetime


class ApiKeyResponse(BaseModel):
    """
    Schema for API key list responses.

    Does NOT include the secret - only metadata for identification.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    key_id: str
    created_at: datetime
