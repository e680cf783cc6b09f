"""RSS feed subscription endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.feed import FeedCreate, FeedResponse, FeedUpdate
from services import feed_service

router = APIRouter(prefix="/feeds", tags=["feeds"])


@router.post("/", response_model=FeedResponse, status_code=201)
async def create_feed(
    data: FeedCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> FeedResponse:
    """Subscribe to an RSS feed."""
    feed = await feed_service.create_feed(db, current_user.id, data)
    return FeedResponse.model_validate(feed)


@router.get("/", response_model=list[FeedResponse])
async def get_feeds(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[FeedResponse]:
    """Get all feeds for the current user."""
    feeds = await feed_service.get_feeds(db, current_user.id)
    return [FeedResponse.model_validate(feed) for feed in feeds]


@router.get("/{feed_id}", response_model=FeedResponse)
async def get_feed(
    feed_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> FeedResponse:
    """Get a specific feed by ID."""
    feed = await feed_service.get_feed(db, current_user.id, feed_id)
    if feed is None:
        raise HTTPException(status_code=404, detail="Feed not found")
    return FeedResponse.model_validate(feed)


@router.patch("/{feed_id}", response_model=FeedResponse)
async def update_feed(
    feed_id: str,
    data: FeedUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> FeedResponse:
    """Rename a feed or change its URL."""
    feed = await feed_service.update_feed(db, current_user.id, feed_id, data)
    if feed is None:
        raise HTTPException(status_code=404, detail="Feed not found")
    return FeedResponse.model_validate(feed)


@router.delete("/{feed_id}", status_code=204)
async def delete_feed(
    feed_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Unsubscribe from a feed. Bookmarks imported from it are kept."""
    deleted = await feed_service.delete_feed(db, current_user.id, feed_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Feed not found")
