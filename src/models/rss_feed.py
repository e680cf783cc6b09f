"""RSS feed subscriptions and the record of entries imported from them."""
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, CreatedAtMixin, IdMixin, enum_column
from models.bookmark import ProcessingStatus

if TYPE_CHECKING:
    from models.bookmark import Bookmark
    from models.user import User


class RssFeed(Base, IdMixin, CreatedAtMixin):
    """RssFeed model - a feed URL polled on behalf of a user."""

    __tablename__ = "rss_feeds"

    # id provided by IdMixin
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    last_fetched_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    last_fetched_status: Mapped[ProcessingStatus | None] = mapped_column(
        enum_column(ProcessingStatus),
        nullable=True,
        default=ProcessingStatus.PENDING,
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship(back_populates="feeds")
    imports: Mapped[list["RssFeedImport"]] = relationship(
        back_populates="feed",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class RssFeedImport(Base, IdMixin, CreatedAtMixin):
    """
    RssFeedImport model - one feed entry that has already been turned into a bookmark.

    (rss_feed_id, entry_id) is unique so an entry is never imported twice.
    The bookmark link survives as NULL if the user deletes the bookmark, which
    keeps the entry from being re-imported on the next poll.
    """

    __tablename__ = "rss_feed_imports"
    __table_args__ = (
        UniqueConstraint(
            "rss_feed_id",
            "entry_id",
            name="uq_rss_feed_imports_rss_feed_id_entry_id",
        ),
    )

    # id provided by IdMixin
    entry_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    rss_feed_id: Mapped[str] = mapped_column(
        ForeignKey("rss_feeds.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bookmark_id: Mapped[str | None] = mapped_column(
        ForeignKey("bookmarks.id", ondelete="SET NULL"),
        nullable=True,
    )

    feed: Mapped["RssFeed"] = relationship(back_populates="imports")
    bookmark: Mapped["Bookmark | None"] = relationship()
