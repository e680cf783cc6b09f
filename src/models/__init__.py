"""SQLAlchemy models."""
from models.api_key import ApiKey
from models.asset import Asset, AssetType
from models.auth import Account, UserSession, VerificationToken
from models.base import Base, CreatedAtMixin, IdMixin
from models.bookmark import (
    Bookmark,
    BookmarkAsset,
    BookmarkAssetType,
    BookmarkLink,
    BookmarkText,
    BookmarkType,
    ProcessingStatus,
)
from models.bookmark_list import BookmarkInList, BookmarkList
from models.config_entry import ConfigEntry
from models.custom_prompt import CustomPrompt, PromptScope
from models.rss_feed import RssFeed, RssFeedImport
from models.tag import BookmarkTag, Tag, TagAttribution
from models.user import User, UserRole

__all__ = [
    "Account",
    "ApiKey",
    "Asset",
    "AssetType",
    "Base",
    "Bookmark",
    "BookmarkAsset",
    "BookmarkAssetType",
    "BookmarkInList",
    "BookmarkLink",
    "BookmarkList",
    "BookmarkTag",
    "BookmarkText",
    "BookmarkType",
    "ConfigEntry",
    "CreatedAtMixin",
    "CustomPrompt",
    "IdMixin",
    "ProcessingStatus",
    "PromptScope",
    "RssFeed",
    "RssFeedImport",
    "Tag",
    "TagAttribution",
    "User",
    "UserRole",
    "UserSession",
    "VerificationToken",
]
