"""Bookmark model and its type-specific extension tables."""
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, IdMixin, enum_column, utc_now

if TYPE_CHECKING:
    from models.asset import Asset
    from models.bookmark_list import BookmarkInList
    from models.tag import BookmarkTag
    from models.user import User


class BookmarkType(StrEnum):
    """Which extension table holds the bookmark's content."""

    LINK = "link"
    TEXT = "text"
    ASSET = "asset"


class ProcessingStatus(StrEnum):
    """Status of background processing (crawling, tagging, feed fetching)."""

    PENDING = "pending"
    FAILURE = "failure"
    SUCCESS = "success"


class BookmarkAssetType(StrEnum):
    """Kind of file uploaded as an asset bookmark."""

    IMAGE = "image"
    PDF = "pdf"


class Bookmark(Base, IdMixin):
    """
    Bookmark model - the common part of link, text and asset bookmarks.

    Type-specific columns live in a 1:1 extension row (bookmark_links,
    bookmark_texts or bookmark_assets) that shares the bookmark's id and is
    cascade-deleted with it. Exactly one of link/text/asset is set, matching type.
    """

    __tablename__ = "bookmarks"

    # id provided by IdMixin
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=utc_now,
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    archived: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        index=True,
    )
    favourited: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        index=True,
    )
    tagging_status: Mapped[ProcessingStatus | None] = mapped_column(
        enum_column(ProcessingStatus),
        nullable=True,
        default=ProcessingStatus.PENDING,
    )
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[BookmarkType] = mapped_column(enum_column(BookmarkType), nullable=False)

    user: Mapped["User"] = relationship(back_populates="bookmarks")
    link: Mapped["BookmarkLink | None"] = relationship(
        back_populates="bookmark",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False,
    )
    text: Mapped["BookmarkText | None"] = relationship(
        back_populates="bookmark",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False,
    )
    asset: Mapped["BookmarkAsset | None"] = relationship(
        back_populates="bookmark",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False,
    )
    tag_links: Mapped[list["BookmarkTag"]] = relationship(
        back_populates="bookmark",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    list_memberships: Mapped[list["BookmarkInList"]] = relationship(
        back_populates="bookmark",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    assets: Mapped[list["Asset"]] = relationship(
        back_populates="bookmark",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def tags(self) -> list["BookmarkTag"]:
        """Attached tags ordered by name. Requires tag_links (and their tag) to be loaded."""
        return sorted(self.tag_links, key=lambda link: link.tag.name)


class BookmarkLink(Base):
    """Link bookmark: the saved URL plus what the crawler found there."""

    __tablename__ = "bookmark_links"

    id: Mapped[str] = mapped_column(
        ForeignKey("bookmarks.id", ondelete="CASCADE"),
        primary_key=True,
    )
    url: Mapped[str] = mapped_column(Text, nullable=False, index=True)

    # Crawled info
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    favicon: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    html_content: Mapped[str | None] = mapped_column(Text, nullable=True)
    crawled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    crawl_status: Mapped[ProcessingStatus | None] = mapped_column(
        enum_column(ProcessingStatus),
        nullable=True,
        default=ProcessingStatus.PENDING,
    )

    bookmark: Mapped["Bookmark"] = relationship(back_populates="link")


class BookmarkText(Base):
    """Text bookmark: a free-form note, optionally with the page it came from."""

    __tablename__ = "bookmark_texts"

    id: Mapped[str] = mapped_column(
        ForeignKey("bookmarks.id", ondelete="CASCADE"),
        primary_key=True,
    )
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
    source_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    bookmark: Mapped["Bookmark"] = relationship(back_populates="text")


class BookmarkAsset(Base):
    """Asset bookmark: an uploaded image or PDF and its extracted content."""

    __tablename__ = "bookmark_assets"

    id: Mapped[str] = mapped_column(
        ForeignKey("bookmarks.id", ondelete="CASCADE"),
        primary_key=True,
    )
    asset_type: Mapped[BookmarkAssetType] = mapped_column(
        enum_column(BookmarkAssetType),
        nullable=False,
    )
    asset_id: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    # "metadata" is reserved on declarative classes
    asset_metadata: Mapped[str | None] = mapped_column("metadata", Text, nullable=True)
    file_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    source_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    bookmark: Mapped["Bookmark"] = relationship(back_populates="asset")
