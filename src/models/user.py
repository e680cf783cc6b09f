"""User model and the role enumeration."""
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, CreatedAtMixin, IdMixin, enum_column

if TYPE_CHECKING:
    from models.api_key import ApiKey
    from models.asset import Asset
    from models.auth import Account, UserSession
    from models.bookmark import Bookmark
    from models.bookmark_list import BookmarkList
    from models.custom_prompt import CustomPrompt
    from models.rss_feed import RssFeed
    from models.tag import Tag


class UserRole(StrEnum):
    """Installation-wide role of a user."""

    ADMIN = "admin"
    USER = "user"


class User(Base, IdMixin, CreatedAtMixin):
    """
    User model - owner of every other user-scoped row.

    All ownership edges are ON DELETE CASCADE in the database. The ORM side uses
    passive_deletes so deleting a user does not load the collections first.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    email_verified: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    image: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    password: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Password hash; NULL for users that only sign in through a provider",
    )
    role: Mapped[UserRole] = mapped_column(
        enum_column(UserRole),
        nullable=False,
        default=UserRole.USER,
    )

    bookmarks: Mapped[list["Bookmark"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    tags: Mapped[list["Tag"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    lists: Mapped[list["BookmarkList"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    api_keys: Mapped[list["ApiKey"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    assets: Mapped[list["Asset"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    prompts: Mapped[list["CustomPrompt"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    feeds: Mapped[list["RssFeed"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    accounts: Mapped[list["Account"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    sessions: Mapped[list["UserSession"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_admin(self) -> bool:
        """True if the user has the admin role."""
        return self.role == UserRole.ADMIN
