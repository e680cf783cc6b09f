"""Asset model - a stored file owned by a user and optionally a bookmark."""
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, enum_column

if TYPE_CHECKING:
    from models.bookmark import Bookmark
    from models.user import User


class AssetType(StrEnum):
    """What a stored asset is used for."""

    LINK_BANNER_IMAGE = "linkBannerImage"
    LINK_SCREENSHOT = "linkScreenshot"
    LINK_FULL_PAGE_ARCHIVE = "linkFullPageArchive"
    LINK_VIDEO = "linkVideo"
    BOOKMARK_ASSET = "bookmarkAsset"
    UNKNOWN = "unknown"


class Asset(Base):
    """
    Asset model - metadata for a file held by the storage backend.

    The id is chosen by the caller (it is also the storage key), so there is
    no default. bookmark_id is nullable: uploads exist before the bookmark that
    uses them, and are cascade-deleted with it afterwards.
    """

    __tablename__ = "assets"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    asset_type: Mapped[AssetType] = mapped_column(
        enum_column(AssetType),
        nullable=False,
        index=True,
    )
    size: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    content_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    file_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    bookmark_id: Mapped[str | None] = mapped_column(
        ForeignKey("bookmarks.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    bookmark: Mapped["Bookmark | None"] = relationship(back_populates="assets")
    user: Mapped["User"] = relationship(back_populates="assets")
