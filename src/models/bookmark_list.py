"""BookmarkList model - user-curated, optionally nested lists of bookmarks."""
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, CreatedAtMixin, IdMixin, utc_now

if TYPE_CHECKING:
    from models.bookmark import Bookmark
    from models.user import User


class BookmarkList(Base, IdMixin, CreatedAtMixin):
    """
    BookmarkList model - a named collection of bookmarks.

    Lists can be nested through parent_id. Deleting a parent list does not
    delete its children; their parent_id is set to NULL by the database and
    they become top-level lists.
    """

    __tablename__ = "bookmark_lists"

    # id provided by IdMixin
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    icon: Mapped[str] = mapped_column(String(32), nullable=False)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    parent_id: Mapped[str | None] = mapped_column(
        ForeignKey("bookmark_lists.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    user: Mapped["User"] = relationship(back_populates="lists")
    parent: Mapped["BookmarkList | None"] = relationship(
        remote_side="BookmarkList.id",
        back_populates="children",
    )
    children: Mapped[list["BookmarkList"]] = relationship(
        back_populates="parent",
        passive_deletes=True,
    )
    memberships: Mapped[list["BookmarkInList"]] = relationship(
        back_populates="bookmark_list",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class BookmarkInList(Base):
    """Junction row placing a bookmark in a list."""

    __tablename__ = "bookmarks_in_lists"

    bookmark_id: Mapped[str] = mapped_column(
        ForeignKey("bookmarks.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    list_id: Mapped[str] = mapped_column(
        ForeignKey("bookmark_lists.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    added_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=utc_now,
    )

    bookmark: Mapped["Bookmark"] = relationship(back_populates="list_memberships")
    bookmark_list: Mapped["BookmarkList"] = relationship(back_populates="memberships")
