"""
Tests for the referential rules of the schema.

Every ownership edge is ON DELETE CASCADE, list parents and feed-import
bookmarks are ON DELETE SET NULL. These run against SQLite with foreign keys
enabled, so the database (not the ORM) does the work.
"""
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.api_key import ApiKey
from models.asset import Asset, AssetType
from models.auth import Account, UserSession
from models.bookmark import (
    Bookmark,
    BookmarkAsset,
    BookmarkAssetType,
    BookmarkLink,
    BookmarkText,
    BookmarkType,
)
from models.bookmark_list import BookmarkInList, BookmarkList
from models.custom_prompt import CustomPrompt, PromptScope
from models.rss_feed import RssFeed, RssFeedImport
from models.tag import BookmarkTag, Tag, TagAttribution
from models.user import User


async def _count(db: AsyncSession, model: type, *where: object) -> int:
    return await db.scalar(select(func.count()).select_from(model).where(*where))


async def _make_link_bookmark(db: AsyncSession, user_id: str, url: str) -> Bookmark:
    bookmark = Bookmark(user_id=user_id, type=BookmarkType.LINK, link=BookmarkLink(url=url))
    db.add(bookmark)
    await db.flush()
    return bookmark


async def test__user_delete__cascades_to_all_user_data(
    db_session: AsyncSession,
    test_user: User,
    other_user: User,
) -> None:
    """
    Deleting a user removes every row they own, including junction rows,
    extension rows and auth bookkeeping, and leaves other users untouched.
    """
    user_id = test_user.id

    link = await _make_link_bookmark(db_session, user_id, "https://example.com/")
    text = Bookmark(
        user_id=user_id, type=BookmarkType.TEXT, text=BookmarkText(text="remember this"),
    )
    db_session.add(text)
    await db_session.flush()

    tag = Tag(user_id=user_id, name="python")
    bookmark_list = BookmarkList(user_id=user_id, name="Reading", icon="📚")
    db_session.add_all([tag, bookmark_list])
    await db_session.flush()

    feed = RssFeed(user_id=user_id, name="Blog", url="https://example.com/feed.xml")
    db_session.add(feed)
    await db_session.flush()

    db_session.add_all([
        BookmarkTag(bookmark_id=link.id, tag_id=tag.id, attached_by=TagAttribution.AI),
        BookmarkInList(bookmark_id=link.id, list_id=bookmark_list.id),
        Asset(
            id="asset-1",
            asset_type=AssetType.LINK_SCREENSHOT,
            bookmark_id=link.id,
            user_id=user_id,
        ),
        Asset(id="asset-2", asset_type=AssetType.UNKNOWN, user_id=user_id),
        ApiKey(user_id=user_id, name="Extension", key_id="abc123", key_hash="0" * 64),
        CustomPrompt(user_id=user_id, text="Prefer short tags", enabled=True,
                     applies_to=PromptScope.ALL),
        RssFeedImport(rss_feed_id=feed.id, entry_id="entry-1", bookmark_id=link.id),
        Account(user_id=user_id, provider="github", provider_account_id="42", type="oauth"),
        UserSession(user_id=user_id, expires=datetime.now(UTC) + timedelta(days=1)),
    ])
    await db_session.flush()

    # Other user's data must survive
    other_bookmark = await _make_link_bookmark(db_session, other_user.id, "https://example.com/")
    other_tag = Tag(user_id=other_user.id, name="python")
    db_session.add(other_tag)
    await db_session.flush()

    await db_session.delete(test_user)
    await db_session.flush()

    assert await db_session.get(User, user_id) is None
    assert await _count(db_session, Bookmark, Bookmark.user_id == user_id) == 0
    assert await _count(db_session, BookmarkLink, BookmarkLink.id == link.id) == 0
    assert await _count(db_session, BookmarkText, BookmarkText.id == text.id) == 0
    assert await _count(db_session, Tag, Tag.user_id == user_id) == 0
    assert await _count(db_session, BookmarkTag, BookmarkTag.tag_id == tag.id) == 0
    assert await _count(db_session, BookmarkList, BookmarkList.user_id == user_id) == 0
    assert await _count(
        db_session, BookmarkInList, BookmarkInList.list_id == bookmark_list.id,
    ) == 0
    assert await _count(db_session, Asset, Asset.user_id == user_id) == 0
    assert await _count(db_session, ApiKey, ApiKey.user_id == user_id) == 0
    assert await _count(db_session, CustomPrompt, CustomPrompt.user_id == user_id) == 0
    assert await _count(db_session, RssFeed, RssFeed.user_id == user_id) == 0
    assert await _count(db_session, RssFeedImport, RssFeedImport.rss_feed_id == feed.id) == 0
    assert await _count(db_session, Account, Account.user_id == user_id) == 0
    assert await _count(db_session, UserSession, UserSession.user_id == user_id) == 0

    assert await _count(db_session, Bookmark, Bookmark.id == other_bookmark.id) == 1
    assert await _count(db_session, Tag, Tag.id == other_tag.id) == 1


async def test__bookmark_delete__cascades_to_extension_tags_lists_and_assets(
    db_session: AsyncSession,
    test_user: User,
) -> None:
    """Deleting a bookmark removes its dependents but keeps tags and lists."""
    bookmark = await _make_link_bookmark(db_session, test_user.id, "https://example.com/")
    tag = Tag(user_id=test_user.id, name="keep-me")
    bookmark_list = BookmarkList(user_id=test_user.id, name="Keep", icon="⭐")
    db_session.add_all([tag, bookmark_list])
    await db_session.flush()
    db_session.add_all([
        BookmarkTag(bookmark_id=bookmark.id, tag_id=tag.id, attached_by=TagAttribution.HUMAN),
        BookmarkInList(bookmark_id=bookmark.id, list_id=bookmark_list.id),
        Asset(
            id="banner-1",
            asset_type=AssetType.LINK_BANNER_IMAGE,
            bookmark_id=bookmark.id,
            user_id=test_user.id,
        ),
    ])
    await db_session.flush()
    bookmark_id = bookmark.id

    await db_session.delete(bookmark)
    await db_session.flush()

    assert await _count(db_session, BookmarkLink, BookmarkLink.id == bookmark_id) == 0
    assert await _count(db_session, BookmarkTag, BookmarkTag.bookmark_id == bookmark_id) == 0
    assert await _count(
        db_session, BookmarkInList, BookmarkInList.bookmark_id == bookmark_id,
    ) == 0
    assert await _count(db_session, Asset, Asset.id == "banner-1") == 0
    assert await _count(db_session, Tag, Tag.id == tag.id) == 1
    assert await _count(db_session, BookmarkList, BookmarkList.id == bookmark_list.id) == 1


async def test__asset_bookmark_delete__removes_asset_extension_row(
    db_session: AsyncSession,
    test_user: User,
) -> None:
    """The asset extension row shares the bookmark id and goes with it."""
    bookmark = Bookmark(
        user_id=test_user.id,
        type=BookmarkType.ASSET,
        asset=BookmarkAsset(asset_type=BookmarkAssetType.PDF, asset_id="file-1"),
    )
    db_session.add(bookmark)
    await db_session.flush()
    assert bookmark.asset.id == bookmark.id

    await db_session.delete(bookmark)
    await db_session.flush()

    assert await _count(db_session, BookmarkAsset, BookmarkAsset.id == bookmark.id) == 0


async def test__list_delete__sets_children_parent_to_null(
    db_session: AsyncSession,
    test_user: User,
) -> None:
    """Child lists survive their parent and become top-level."""
    parent = BookmarkList(user_id=test_user.id, name="Parent", icon="📁")
    db_session.add(parent)
    await db_session.flush()
    child = BookmarkList(user_id=test_user.id, name="Child", icon="📄", parent_id=parent.id)
    db_session.add(child)
    await db_session.flush()

    await db_session.delete(parent)
    await db_session.flush()
    await db_session.refresh(child)

    assert child.parent_id is None
    assert await _count(db_session, BookmarkList, BookmarkList.id == child.id) == 1


async def test__bookmark_delete__keeps_feed_import_with_null_bookmark(
    db_session: AsyncSession,
    test_user: User,
) -> None:
    """An import row outlives the bookmark it created, so the entry isn't re-imported."""
    feed = RssFeed(user_id=test_user.id, name="Blog", url="https://example.com/feed.xml")
    db_session.add(feed)
    await db_session.flush()
    bookmark = await _make_link_bookmark(db_session, test_user.id, "https://example.com/post")
    feed_import = RssFeedImport(rss_feed_id=feed.id, entry_id="post-1", bookmark_id=bookmark.id)
    db_session.add(feed_import)
    await db_session.flush()

    await db_session.delete(bookmark)
    await db_session.flush()
    await db_session.refresh(feed_import)

    assert feed_import.bookmark_id is None
    assert feed_import.entry_id == "post-1"


async def test__feed_delete__cascades_to_imports(
    db_session: AsyncSession,
    test_user: User,
) -> None:
    """Deleting a feed removes its import records."""
    feed = RssFeed(user_id=test_user.id, name="Blog", url="https://example.com/feed.xml")
    db_session.add(feed)
    await db_session.flush()
    db_session.add(RssFeedImport(rss_feed_id=feed.id, entry_id="post-1"))
    await db_session.flush()
    feed_id = feed.id

    await db_session.delete(feed)
    await db_session.flush()

    assert await _count(db_session, RssFeedImport, RssFeedImport.rss_feed_id == feed_id) == 0


async def test__tag_delete__cascades_to_bookmark_tags_only(
    db_session: AsyncSession,
    test_user: User,
) -> None:
    """Deleting a tag detaches it without touching the bookmark."""
    bookmark = await _make_link_bookmark(db_session, test_user.id, "https://example.com/")
    tag = Tag(user_id=test_user.id, name="temp")
    db_session.add(tag)
    await db_session.flush()
    db_session.add(
        BookmarkTag(bookmark_id=bookmark.id, tag_id=tag.id, attached_by=TagAttribution.HUMAN),
    )
    await db_session.flush()

    await db_session.delete(tag)
    await db_session.flush()

    assert await _count(db_session, BookmarkTag, BookmarkTag.bookmark_id == bookmark.id) == 0
    assert await _count(db_session, Bookmark, Bookmark.id == bookmark.id) == 1


async def test__tag__name_unique_per_user(
    db_session: AsyncSession,
    test_user: User,
) -> None:
    """The same user cannot have two tags with the same name."""
    db_session.add_all([
        Tag(user_id=test_user.id, name="dup"),
        Tag(user_id=test_user.id, name="dup"),
    ])
    with pytest.raises(IntegrityError):
        await db_session.flush()
    await db_session.rollback()


async def test__tag__same_name_allowed_for_different_users(
    db_session: AsyncSession,
    test_user: User,
    other_user: User,
) -> None:
    """Tag uniqueness is scoped to the user."""
    db_session.add_all([
        Tag(user_id=test_user.id, name="shared"),
        Tag(user_id=other_user.id, name="shared"),
    ])
    await db_session.flush()

    assert await _count(db_session, Tag, Tag.name == "shared") == 2


async def test__feed_import__entry_unique_per_feed(
    db_session: AsyncSession,
    test_user: User,
) -> None:
    """The same entry cannot be imported twice from one feed."""
    feed = RssFeed(user_id=test_user.id, name="Blog", url="https://example.com/feed.xml")
    db_session.add(feed)
    await db_session.flush()

    db_session.add_all([
        RssFeedImport(rss_feed_id=feed.id, entry_id="same"),
        RssFeedImport(rss_feed_id=feed.id, entry_id="same"),
    ])
    with pytest.raises(IntegrityError):
        await db_session.flush()
    await db_session.rollback()


async def test__feed_import__same_entry_allowed_in_different_feeds(
    db_session: AsyncSession,
    test_user: User,
) -> None:
    """Entry ids only have to be unique within a feed."""
    feed1 = RssFeed(user_id=test_user.id, name="A", url="https://a.example.com/feed")
    feed2 = RssFeed(user_id=test_user.id, name="B", url="https://b.example.com/feed")
    db_session.add_all([feed1, feed2])
    await db_session.flush()

    db_session.add_all([
        RssFeedImport(rss_feed_id=feed1.id, entry_id="same"),
        RssFeedImport(rss_feed_id=feed2.id, entry_id="same"),
    ])
    await db_session.flush()

    assert await _count(db_session, RssFeedImport, RssFeedImport.entry_id == "same") == 2


async def test__api_key__name_unique_per_user(
    db_session: AsyncSession,
    test_user: User,
) -> None:
    """Two keys of one user cannot share a name."""
    db_session.add_all([
        ApiKey(user_id=test_user.id, name="cli", key_id="k1", key_hash="a" * 64),
        ApiKey(user_id=test_user.id, name="cli", key_id="k2", key_hash="b" * 64),
    ])
    with pytest.raises(IntegrityError):
        await db_session.flush()
    await db_session.rollback()


async def test__user__email_unique(db_session: AsyncSession) -> None:
    """Emails are unique across the installation."""
    db_session.add_all([
        User(name="A", email="same@example.com"),
        User(name="B", email="same@example.com"),
    ])
    with pytest.raises(IntegrityError):
        await db_session.flush()
    await db_session.rollback()
