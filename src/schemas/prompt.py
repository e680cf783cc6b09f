"""Pydantic schemas for custom prompt endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from models.custom_prompt import PromptScope


class PromptCreate(BaseModel):
    """Schema for creating a custom tagging prompt."""

    text: str = Field(..., min_length=1, max_length=2000)
    applies_to: PromptScope = PromptScope.ALL
    enabled: bool = True


class PromptUpdate(BaseModel):
    """Schema for updating a custom prompt."""

    text: str | None = Field(default=None, min_length=1, max_length=2000)
    applies_to: PromptScope | None = None
    enabled: bool | None = None


class PromptResponse(BaseModel):
    """Schema for custom prompt responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    text: str
    applies_to: PromptScope
    enabled: bool
    created_at: datetime
