"""CustomPrompt model for user-supplied tagging instructions."""
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, CreatedAtMixin, IdMixin, enum_column

if TYPE_CHECKING:
    from models.user import User


class PromptScope(StrEnum):
    """Which bookmarks a custom prompt is applied to."""

    ALL = "all"
    TEXT = "text"
    IMAGES = "images"


class CustomPrompt(Base, IdMixin, CreatedAtMixin):
    """CustomPrompt model - extra instructions appended when tagging bookmarks."""

    __tablename__ = "custom_prompts"

    # id provided by IdMixin
    text: Mapped[str] = mapped_column(Text, nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False)
    applies_to: Mapped[PromptScope] = mapped_column(
        enum_column(PromptScope),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship(back_populates="prompts")
