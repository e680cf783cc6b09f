"""Service layer for bookmark list operations."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from models.bookmark_list import BookmarkInList, BookmarkList
from schemas.bookmark_list import BookmarkListCreate, BookmarkListUpdate
from services.exceptions import (
    BookmarkAlreadyInListError,
    BookmarkNotFoundError,
    InvalidListParentError,
    ListNotFoundError,
)

logger = logging.getLogger(__name__)


async def _check_parent(
    db: AsyncSession,
    user_id: str,
    parent_id: str,
    list_id: str | None = None,
) -> None:
    """
    Make sure parent_id names one of the user's lists and isn't the list itself.

    Deeper cycles (a list moved under its own descendant) are not checked.
    """
    if parent_id == list_id:
        raise InvalidListParentError(list_id, parent_id)
    if await get_list(db, user_id, parent_id) is None:
        raise InvalidListParentError(list_id, parent_id)


async def create_list(
    db: AsyncSession,
    user_id: str,
    data: BookmarkListCreate,
) -> BookmarkList:
    """
    Create a new bookmark list, optionally nested under a parent list.

    Raises:
        InvalidListParentError: If parent_id isn't one of the user's lists.
    """
    if data.parent_id is not None:
        await _check_parent(db, user_id, data.parent_id)

    bookmark_list = BookmarkList(
        user_id=user_id,
        name=data.name,
        icon=data.icon,
        parent_id=data.parent_id,
    )
    db.add(bookmark_list)
    await db.flush()
    await db.refresh(bookmark_list)
    return bookmark_list


async def get_lists(db: AsyncSession, user_id: str) -> list[BookmarkList]:
    """Get all bookmark lists for a user, ordered by creation date."""
    query = (
        select(BookmarkList)
        .where(BookmarkList.user_id == user_id)
        .order_by(BookmarkList.created_at, BookmarkList.id)
    )
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_list(
    db: AsyncSession,
    user_id: str,
    list_id: str,
) -> BookmarkList | None:
    """Get a single bookmark list by ID, scoped to user."""
    query = select(BookmarkList).where(
        BookmarkList.id == list_id,
        BookmarkList.user_id == user_id,
    )
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def update_list(
    db: AsyncSession,
    user_id: str,
    list_id: str,
    data: BookmarkListUpdate,
) -> BookmarkList | None:
    """
    Update a bookmark list. Returns None if not found.

    Raises:
        InvalidListParentError: If the new parent is the list itself or isn't
            one of the user's lists.
    """
    bookmark_list = await get_list(db, user_id, list_id)
    if bookmark_list is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("parent_id") is not None:
        await _check_parent(db, user_id, update_data["parent_id"], list_id)

    for field, value in update_data.items():
        if field in ("name", "icon") and value is None:
            continue
        setattr(bookmark_list, field, value)

    await db.flush()
    await db.refresh(bookmark_list)
    return bookmark_list


async def delete_list(
    db: AsyncSession,
    user_id: str,
    list_id: str,
) -> bool:
    """
    Delete a bookmark list.

    Bookmarks in the list are not deleted, only their membership. Child lists
    become top-level lists (parent_id set to NULL by the database).

    Returns True if deleted, False if not found.
    """
    bookmark_list = await get_list(db, user_id, list_id)
    if bookmark_list is None:
        return False

    await db.delete(bookmark_list)
    await db.flush()
    logger.info("Deleted list %s for user %s", list_id, user_id)
    return True


async def _get_owned_list_and_bookmark(
    db: AsyncSession,
    user_id: str,
    list_id: str,
    bookmark_id: str,
) -> None:
    if await get_list(db, user_id, list_id) is None:
        raise ListNotFoundError(list_id)
    bookmark = await db.scalar(
        select(Bookmark.id).where(Bookmark.id == bookmark_id, Bookmark.user_id == user_id),
    )
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)


async def add_bookmark_to_list(
    db: AsyncSession,
    user_id: str,
    list_id: str,
    bookmark_id: str,
) -> BookmarkInList:
    """
    Put a bookmark into a list.

    Raises:
        ListNotFoundError: If the list doesn't exist or isn't the user's.
        BookmarkNotFoundError: If the bookmark doesn't exist or isn't the user's.
        BookmarkAlreadyInListError: If the bookmark is already in the list.
    """
    await _get_owned_list_and_bookmark(db, user_id, list_id, bookmark_id)

    if await db.get(BookmarkInList, (bookmark_id, list_id)) is not None:
        raise BookmarkAlreadyInListError(bookmark_id, list_id)

    membership = BookmarkInList(bookmark_id=bookmark_id, list_id=list_id)
    db.add(membership)
    await db.flush()
    return membership


async def remove_bookmark_from_list(
    db: AsyncSession,
    user_id: str,
    list_id: str,
    bookmark_id: str,
) -> bool:
    """
    Take a bookmark out of a list.

    Returns True if removed, False if the bookmark wasn't in the list.

    Raises:
        ListNotFoundError: If the list doesn't exist or isn't the user's.
        BookmarkNotFoundError: If the bookmark doesn't exist or isn't the user's.
    """
    await _get_owned_list_and_bookmark(db, user_id, list_id, bookmark_id)

    membership = await db.get(BookmarkInList, (bookmark_id, list_id))
    if membership is None:
        return False

    await db.delete(membership)
    await db.flush()
    return True


async def get_lists_for_bookmark(
    db: AsyncSession,
    user_id: str,
    bookmark_id: str,
) -> list[BookmarkList]:
    """Get the user's lists that contain a bookmark, ordered by creation date."""
    result = await db.execute(
        select(BookmarkList)
        .join(BookmarkInList, BookmarkInList.list_id == BookmarkList.id)
        .where(
            BookmarkInList.bookmark_id == bookmark_id,
            BookmarkList.user_id == user_id,
        )
        .order_by(BookmarkList.created_at, BookmarkList.id),
    )
    return list(result.scalars().all())
