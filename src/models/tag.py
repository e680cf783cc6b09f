"""Tag model and the bookmark/tag association."""
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, CreatedAtMixin, IdMixin, enum_column, utc_now

if TYPE_CHECKING:
    from models.bookmark import Bookmark
    from models.user import User


class TagAttribution(StrEnum):
    """Who attached a tag to a bookmark."""

    AI = "ai"
    HUMAN = "human"


class Tag(Base, IdMixin, CreatedAtMixin):
    """Tag model - stores unique tags per user."""

    __tablename__ = "tags"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_tags_user_id_name"),
    )

    # id provided by IdMixin
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship(back_populates="tags")
    bookmark_links: Mapped[list["BookmarkTag"]] = relationship(
        back_populates="tag",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class BookmarkTag(Base):
    """
    Junction row attaching a tag to a bookmark.

    Carries who attached the tag (ai or human) and when, so AI suggestions can
    be told apart from the user's own tags.
    """

    __tablename__ = "bookmark_tags"
    __table_args__ = (
        # Index for lookups by tag (composite PK already indexes bookmark_id first)
        Index("ix_bookmark_tags_tag_id", "tag_id"),
    )

    bookmark_id: Mapped[str] = mapped_column(
        ForeignKey("bookmarks.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[str] = mapped_column(
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    )
    attached_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=utc_now,
    )
    attached_by: Mapped[TagAttribution] = mapped_column(
        enum_column(TagAttribution),
        nullable=False,
    )

    bookmark: Mapped["Bookmark"] = relationship(back_populates="tag_links")
    tag: Mapped["Tag"] = relationship(back_populates="bookmark_links")

    @property
    def name(self) -> str:
        """Name of the attached tag."""
        return self.tag.name
