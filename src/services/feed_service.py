"""Service layer for RSS feed subscriptions and import bookkeeping."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import utc_now
from models.bookmark import Bookmark, ProcessingStatus
from models.rss_feed import RssFeed, RssFeedImport
from schemas.feed import FeedCreate, FeedUpdate
from services.exceptions import BookmarkNotFoundError, FeedNotFoundError

logger = logging.getLogger(__name__)


async def create_feed(db: AsyncSession, user_id: str, data: FeedCreate) -> RssFeed:
    """Subscribe a user to a feed. The feed starts in the pending fetch state."""
    feed = RssFeed(user_id=user_id, name=data.name, url=str(data.url))
    db.add(feed)
    await db.flush()
    await db.refresh(feed)
    logger.info("Created feed %s for user %s", feed.id, user_id)
    return feed


async def get_feeds(db: AsyncSession, user_id: str) -> list[RssFeed]:
    """Get all feeds for a user, ordered by creation date."""
    result = await db.execute(
        select(RssFeed)
        .where(RssFeed.user_id == user_id)
        .order_by(RssFeed.created_at, RssFeed.id),
    )
    return list(result.scalars().all())


async def get_feed(db: AsyncSession, user_id: str, feed_id: str) -> RssFeed | None:
    """Get a single feed by ID, scoped to user."""
    result = await db.execute(
        select(RssFeed).where(RssFeed.id == feed_id, RssFeed.user_id == user_id),
    )
    return result.scalar_one_or_none()


async def update_feed(
    db: AsyncSession,
    user_id: str,
    feed_id: str,
    data: FeedUpdate,
) -> RssFeed | None:
    """Update a feed's name or URL. Returns None if not found."""
    feed = await get_feed(db, user_id, feed_id)
    if feed is None:
        return None

    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    if "url" in update_data:
        update_data["url"] = str(data.url)
    for field, value in update_data.items():
        setattr(feed, field, value)

    await db.flush()
    await db.refresh(feed)
    return feed


async def delete_feed(db: AsyncSession, user_id: str, feed_id: str) -> bool:
    """
    Delete a feed and its import records. Bookmarks created from it are kept.

    Returns True if deleted, False if not found.
    """
    feed = await get_feed(db, user_id, feed_id)
    if feed is None:
        return False

    await db.delete(feed)
    await db.flush()
    logger.info("Deleted feed %s for user %s", feed_id, user_id)
    return True


async def record_fetch_result(
    db: AsyncSession,
    feed_id: str,
    status: ProcessingStatus,
) -> RssFeed:
    """
    Record the outcome of polling a feed.

    Raises:
        FeedNotFoundError: If the feed doesn't exist.
    """
    feed = await db.get(RssFeed, feed_id)
    if feed is None:
        raise FeedNotFoundError(feed_id)
    feed.last_fetched_at = utc_now()
    feed.last_fetched_status = status
    await db.flush()
    return feed


async def get_import(
    db: AsyncSession,
    feed_id: str,
    entry_id: str,
) -> RssFeedImport | None:
    """Get the import record for one feed entry."""
    result = await db.execute(
        select(RssFeedImport).where(
            RssFeedImport.rss_feed_id == feed_id,
            RssFeedImport.entry_id == entry_id,
        ),
    )
    return result.scalar_one_or_none()


async def record_import(
    db: AsyncSession,
    feed_id: str,
    entry_id: str,
    bookmark_id: str | None = None,
) -> tuple[RssFeedImport, bool]:
    """
    Record that a feed entry has been imported.

    An entry is imported at most once per feed. Recording the same entry again
    returns the existing record untouched.

    The bookmark, when given, must belong to the feed's owner.

    Returns:
        Tuple of (import record, created).

    Raises:
        FeedNotFoundError: If the feed doesn't exist.
        BookmarkNotFoundError: If the bookmark doesn't exist or belongs to
            another user.
    """
    existing = await get_import(db, feed_id, entry_id)
    if existing is not None:
        logger.debug("Entry %s of feed %s was already imported", entry_id, feed_id)
        return existing, False

    feed = await db.get(RssFeed, feed_id)
    if feed is None:
        raise FeedNotFoundError(feed_id)

    if bookmark_id is not None:
        owned = await db.scalar(
            select(Bookmark.id).where(
                Bookmark.id == bookmark_id,
                Bookmark.user_id == feed.user_id,
            ),
        )
        if owned is None:
            raise BookmarkNotFoundError(bookmark_id)

    feed_import = RssFeedImport(
        rss_feed_id=feed_id,
        entry_id=entry_id,
        bookmark_id=bookmark_id,
    )
    try:
        async with db.begin_nested():
            db.add(feed_import)
    except IntegrityError:
        # Another poller imported the entry between check and flush
        logger.warning("Concurrent import of entry %s for feed %s", entry_id, feed_id)
        existing = await get_import(db, feed_id, entry_id)
        if existing is None:
            raise
        return existing, False

    return feed_import, True


async def get_unimported_entries(
    db: AsyncSession,
    feed_id: str,
    entry_ids: list[str],
) -> list[str]:
    """Filter a batch of entry ids down to those not yet imported, keeping order."""
    if not entry_ids:
        return []
    result = await db.execute(
        select(RssFeedImport.entry_id).where(
            RssFeedImport.rss_feed_id == feed_id,
            RssFeedImport.entry_id.in_(entry_ids),
        ),
    )
    imported = set(result.scalars())
    return [entry_id for entry_id in dict.fromkeys(entry_ids) if entry_id not in imported]
