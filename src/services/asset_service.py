"""Service layer for stored asset metadata."""
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.asset import Asset, AssetType
from models.bookmark import Bookmark
from services.exceptions import AssetAlreadyExistsError, AssetNotFoundError, BookmarkNotFoundError

logger = logging.getLogger(__name__)


async def _check_bookmark_owner(db: AsyncSession, user_id: str, bookmark_id: str) -> None:
    owned = await db.scalar(
        select(Bookmark.id).where(Bookmark.id == bookmark_id, Bookmark.user_id == user_id),
    )
    if owned is None:
        raise BookmarkNotFoundError(bookmark_id)


async def register_asset(
    db: AsyncSession,
    user_id: str,
    asset_id: str,
    asset_type: AssetType,
    size: int = 0,
    content_type: str | None = None,
    file_name: str | None = None,
    bookmark_id: str | None = None,
) -> Asset:
    """
    Record metadata for a file the storage backend has saved under asset_id.

    Raises:
        AssetAlreadyExistsError: If asset_id is already registered.
        BookmarkNotFoundError: If bookmark_id is given but isn't the user's.
    """
    if bookmark_id is not None:
        await _check_bookmark_owner(db, user_id, bookmark_id)
    if await db.get(Asset, asset_id) is not None:
        raise AssetAlreadyExistsError(asset_id)

    asset = Asset(
        id=asset_id,
        asset_type=asset_type,
        size=size,
        content_type=content_type,
        file_name=file_name,
        bookmark_id=bookmark_id,
        user_id=user_id,
    )
    db.add(asset)
    await db.flush()
    logger.info("Registered %s asset %s (%d bytes)", asset_type, asset_id, size)
    return asset


async def get_asset(db: AsyncSession, user_id: str, asset_id: str) -> Asset | None:
    """Get an asset by ID, scoped to user."""
    result = await db.execute(
        select(Asset).where(Asset.id == asset_id, Asset.user_id == user_id),
    )
    return result.scalar_one_or_none()


async def get_user_assets(
    db: AsyncSession,
    user_id: str,
    asset_type: AssetType | None = None,
    bookmark_id: str | None = None,
) -> list[Asset]:
    """Get a user's assets, optionally filtered by type or bookmark."""
    query = select(Asset).where(Asset.user_id == user_id)
    if asset_type is not None:
        query = query.where(Asset.asset_type == asset_type)
    if bookmark_id is not None:
        query = query.where(Asset.bookmark_id == bookmark_id)
    result = await db.execute(query.order_by(Asset.id))
    return list(result.scalars().all())


async def attach_asset_to_bookmark(
    db: AsyncSession,
    user_id: str,
    asset_id: str,
    bookmark_id: str,
    asset_type: AssetType | None = None,
) -> Asset:
    """
    Link an uploaded asset to a bookmark, optionally re-typing it.

    Raises:
        AssetNotFoundError: If the asset doesn't exist or isn't the user's.
        BookmarkNotFoundError: If the bookmark doesn't exist or isn't the user's.
    """
    asset = await get_asset(db, user_id, asset_id)
    if asset is None:
        raise AssetNotFoundError(asset_id)
    await _check_bookmark_owner(db, user_id, bookmark_id)

    asset.bookmark_id = bookmark_id
    if asset_type is not None:
        asset.asset_type = asset_type
    await db.flush()
    return asset


async def delete_asset(db: AsyncSession, user_id: str, asset_id: str) -> bool:
    """
    Delete an asset's metadata row. Returns True if deleted, False if not found.

    Removing the file itself is the storage backend's job.
    """
    asset = await get_asset(db, user_id, asset_id)
    if asset is None:
        return False

    await db.delete(asset)
    await db.flush()
    return True


async def get_user_storage_bytes(db: AsyncSession, user_id: str) -> int:
    """Total size in bytes of all assets owned by a user."""
    total = await db.scalar(
        select(func.coalesce(func.sum(Asset.size), 0)).where(Asset.user_id == user_id),
    )
    return int(total or 0)
