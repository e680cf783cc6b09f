"""Service layer for bookmark CRUD operations."""
import logging
from datetime import datetime

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models.base import utc_now
from models.bookmark import (
    Bookmark,
    BookmarkAsset,
    BookmarkLink,
    BookmarkText,
    BookmarkType,
    ProcessingStatus,
)
from models.bookmark_list import BookmarkInList
from models.tag import BookmarkTag, TagAttribution
from schemas.bookmark import (
    AssetBookmarkCreate,
    BookmarkCreate,
    BookmarkUpdate,
    LinkBookmarkCreate,
    TextBookmarkCreate,
)
from services import tag_service
from services.exceptions import BookmarkNotFoundError

logger = logging.getLogger(__name__)


def _with_content(query: Select) -> Select:
    """Eagerly load everything a bookmark response needs."""
    return query.options(
        selectinload(Bookmark.link),
        selectinload(Bookmark.text),
        selectinload(Bookmark.asset),
        selectinload(Bookmark.tag_links).selectinload(BookmarkTag.tag),
    ).execution_options(populate_existing=True)


async def find_link_bookmark(
    db: AsyncSession,
    user_id: str,
    url: str,
) -> Bookmark | None:
    """Find the user's existing link bookmark for an exact URL."""
    result = await db.execute(
        _with_content(
            select(Bookmark)
            .join(BookmarkLink, BookmarkLink.id == Bookmark.id)
            .where(Bookmark.user_id == user_id, BookmarkLink.url == url)
            .order_by(Bookmark.created_at)
            .limit(1),
        ),
    )
    return result.scalar_one_or_none()


async def create_bookmark(
    db: AsyncSession,
    user_id: str,
    data: BookmarkCreate,
) -> tuple[Bookmark, bool]:
    """
    Create a new bookmark together with its type-specific extension row.

    Saving a URL the user has already bookmarked does not create a duplicate;
    the existing bookmark is returned instead.

    Tags given at creation time are attached as human tags.

    Returns:
        Tuple of (bookmark, created). created is False when an existing link
        bookmark was returned.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    if isinstance(data, LinkBookmarkCreate):
        url = str(data.url)
        existing = await find_link_bookmark(db, user_id, url)
        if existing is not None:
            logger.debug("User %s already bookmarked %s", user_id, url)
            return existing, False
        bookmark = Bookmark(
            user_id=user_id,
            type=BookmarkType.LINK,
            link=BookmarkLink(url=url),
        )
    elif isinstance(data, TextBookmarkCreate):
        bookmark = Bookmark(
            user_id=user_id,
            type=BookmarkType.TEXT,
            text=BookmarkText(
                text=data.text,
                source_url=str(data.source_url) if data.source_url else None,
            ),
        )
    elif isinstance(data, AssetBookmarkCreate):
        bookmark = Bookmark(
            user_id=user_id,
            type=BookmarkType.ASSET,
            asset=BookmarkAsset(
                asset_type=data.asset_type,
                asset_id=data.asset_id,
                file_name=data.file_name,
                source_url=str(data.source_url) if data.source_url else None,
            ),
        )
    else:
        raise TypeError(f"Unsupported bookmark payload: {type(data).__name__}")

    bookmark.title = data.title
    bookmark.note = data.note
    db.add(bookmark)
    await db.flush()

    if data.tags:
        await tag_service.attach_tags(
            db, user_id, bookmark.id, data.tags, attached_by=TagAttribution.HUMAN,
        )

    logger.info("Created %s bookmark %s for user %s", bookmark.type, bookmark.id, user_id)
    return await get_bookmark(db, user_id, bookmark.id), True


async def get_bookmark(
    db: AsyncSession,
    user_id: str,
    bookmark_id: str,
) -> Bookmark | None:
    """Get a bookmark by ID, scoped to user. Returns None if not found or wrong user."""
    result = await db.execute(
        _with_content(
            select(Bookmark).where(
                Bookmark.id == bookmark_id,
                Bookmark.user_id == user_id,
            ),
        ),
    )
    return result.scalar_one_or_none()


async def search_bookmarks(
    db: AsyncSession,
    user_id: str,
    archived: bool | None = None,
    favourited: bool | None = None,
    bookmark_type: BookmarkType | None = None,
    tag_id: str | None = None,
    list_id: str | None = None,
    offset: int = 0,
    limit: int = 50,
) -> tuple[list[Bookmark], int]:
    """
    Get a user's bookmarks, newest first, with optional filters.

    Args:
        db: Database session.
        user_id: User ID to scope bookmarks.
        archived: Only archived (True) or only unarchived (False) bookmarks.
        favourited: Only favourited (True) or only non-favourited (False) bookmarks.
        bookmark_type: Only bookmarks of this type.
        tag_id: Only bookmarks carrying this tag.
        list_id: Only bookmarks in this list.
        offset: Pagination offset.
        limit: Pagination limit.

    Returns:
        Tuple of (bookmarks for this page, total matching count).
    """
    filters = [Bookmark.user_id == user_id]
    if archived is not None:
        filters.append(Bookmark.archived.is_(archived))
    if favourited is not None:
        filters.append(Bookmark.favourited.is_(favourited))
    if bookmark_type is not None:
        filters.append(Bookmark.type == bookmark_type)
    if tag_id is not None:
        filters.append(
            Bookmark.id.in_(
                select(BookmarkTag.bookmark_id).where(BookmarkTag.tag_id == tag_id),
            ),
        )
    if list_id is not None:
        filters.append(
            Bookmark.id.in_(
                select(BookmarkInList.bookmark_id).where(BookmarkInList.list_id == list_id),
            ),
        )

    total = await db.scalar(select(func.count()).select_from(Bookmark).where(*filters))

    result = await db.execute(
        _with_content(
            select(Bookmark)
            .where(*filters)
            .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
            .offset(offset)
            .limit(limit),
        ),
    )
    return list(result.scalars().all()), total or 0


async def update_bookmark(
    db: AsyncSession,
    user_id: str,
    bookmark_id: str,
    data: BookmarkUpdate,
) -> Bookmark | None:
    """
    Update a bookmark. Returns None if not found or wrong user.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)
    if bookmark is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if field in ("archived", "favourited") and value is None:
            continue  # Flags are NOT NULL; an explicit null means "leave as is"
        setattr(bookmark, field, value)

    await db.flush()
    return await get_bookmark(db, user_id, bookmark_id)


async def delete_bookmark(
    db: AsyncSession,
    user_id: str,
    bookmark_id: str,
) -> bool:
    """
    Delete a bookmark. Returns True if deleted, False if not found.

    The extension row, tag attachments, list memberships and assets are removed
    by database cascades. Feed imports that created the bookmark are kept with
    their bookmark_id set to NULL.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)
    if bookmark is None:
        return False

    await db.delete(bookmark)
    await db.flush()
    logger.info("Deleted bookmark %s for user %s", bookmark_id, user_id)
    return True


async def update_link_crawl_result(
    db: AsyncSession,
    bookmark_id: str,
    status: ProcessingStatus,
    title: str | None = None,
    description: str | None = None,
    image_url: str | None = None,
    favicon: str | None = None,
    content: str | None = None,
    html_content: str | None = None,
    crawled_at: datetime | None = None,
) -> BookmarkLink:
    """
    Store what the crawler extracted for a link bookmark.

    Only non-None values overwrite existing columns, so a failed crawl keeps
    whatever an earlier successful crawl found.

    Raises:
        BookmarkNotFoundError: If there is no link bookmark with this ID.
    """
    link = await db.get(BookmarkLink, bookmark_id)
    if link is None:
        raise BookmarkNotFoundError(bookmark_id)

    extracted = {
        "title": title,
        "description": description,
        "image_url": image_url,
        "favicon": favicon,
        "content": content,
        "html_content": html_content,
    }
    for field, value in extracted.items():
        if value is not None:
            setattr(link, field, value)
    link.crawl_status = status
    link.crawled_at = crawled_at or utc_now()

    await db.flush()
    return link


async def set_tagging_status(
    db: AsyncSession,
    bookmark_id: str,
    status: ProcessingStatus,
) -> None:
    """
    Record the outcome of automatic tagging for a bookmark.

    Raises:
        BookmarkNotFoundError: If the bookmark doesn't exist.
    """
    bookmark = await db.get(Bookmark, bookmark_id)
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)
    bookmark.tagging_status = status
    await db.flush()
