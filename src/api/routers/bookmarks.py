"""Bookmark CRUD endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.bookmark import BookmarkType
from models.user import User
from schemas.bookmark import (
    BookmarkCreate,
    BookmarkListResponse,
    BookmarkResponse,
    BookmarkTagsRequest,
    BookmarkUpdate,
)
from schemas.bookmark_list import BookmarkListResponse as ListResponse
from services import bookmark_service, list_service, tag_service
from services.exceptions import BookmarkNotFoundError

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.post("/", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    data: BookmarkCreate,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """
    Create a new link, text or asset bookmark.

    Saving a URL that is already bookmarked returns the existing bookmark with
    `already_exists: true` and status 200 instead of creating a duplicate.
    """
    bookmark, created = await bookmark_service.create_bookmark(db, current_user.id, data)
    result = BookmarkResponse.model_validate(bookmark)
    if not created:
        response.status_code = status.HTTP_200_OK
        result.already_exists = True
    return result


@router.get("/", response_model=BookmarkListResponse)
async def list_bookmarks(
    archived: bool | None = Query(default=None, description="Filter by archived flag"),
    favourited: bool | None = Query(default=None, description="Filter by favourited flag"),
    bookmark_type: BookmarkType | None = Query(
        default=None, alias="type", description="Filter by bookmark type",
    ),
    tag_id: str | None = Query(default=None, description="Only bookmarks carrying this tag"),
    list_id: str | None = Query(default=None, description="Only bookmarks in this list"),
    offset: int = Query(default=0, ge=0, description="Pagination offset"),
    limit: int = Query(default=50, ge=1, le=100, description="Pagination limit"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkListResponse:
    """List bookmarks for the current user, newest first."""
    bookmarks, total = await bookmark_service.search_bookmarks(
        db=db,
        user_id=current_user.id,
        archived=archived,
        favourited=favourited,
        bookmark_type=bookmark_type,
        tag_id=tag_id,
        list_id=list_id,
        offset=offset,
        limit=limit,
    )
    items = [BookmarkResponse.model_validate(b) for b in bookmarks]
    has_more = offset + len(items) < total
    return BookmarkListResponse(
        items=items,
        total=total,
        offset=offset,
        limit=limit,
        has_more=has_more,
    )


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    bookmark = await bookmark_service.get_bookmark(db, current_user.id, bookmark_id)
    if bookmark is None:
        raise HTTPException(status_code=404, detail="Bookmark not found")
    return BookmarkResponse.model_validate(bookmark)


@router.patch("/{bookmark_id}", response_model=BookmarkResponse)
async def update_bookmark(
    bookmark_id: str,
    data: BookmarkUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Update a bookmark."""
    bookmark = await bookmark_service.update_bookmark(
        db, current_user.id, bookmark_id, data,
    )
    if bookmark is None:
        raise HTTPException(status_code=404, detail="Bookmark not found")
    return BookmarkResponse.model_validate(bookmark)


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a bookmark."""
    deleted = await bookmark_service.delete_bookmark(db, current_user.id, bookmark_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Bookmark not found")


@router.post("/{bookmark_id}/tags", response_model=BookmarkResponse)
async def attach_bookmark_tags(
    bookmark_id: str,
    data: BookmarkTagsRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """
    Attach tags to a bookmark, creating tags that don't exist yet.

    Tags already on the bookmark keep their original attribution.
    """
    try:
        await tag_service.attach_tags(
            db, current_user.id, bookmark_id, data.tags, attached_by=data.attached_by,
        )
    except BookmarkNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    bookmark = await bookmark_service.get_bookmark(db, current_user.id, bookmark_id)
    return BookmarkResponse.model_validate(bookmark)


@router.delete("/{bookmark_id}/tags", response_model=BookmarkResponse)
async def detach_bookmark_tags(
    bookmark_id: str,
    data: BookmarkTagsRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Detach tags from a bookmark. Tags that aren't attached are ignored."""
    try:
        await tag_service.detach_tags(db, current_user.id, bookmark_id, data.tags)
    except BookmarkNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    bookmark = await bookmark_service.get_bookmark(db, current_user.id, bookmark_id)
    return BookmarkResponse.model_validate(bookmark)


@router.get("/{bookmark_id}/lists", response_model=list[ListResponse])
async def get_bookmark_lists(
    bookmark_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[ListResponse]:
    """Get the lists that contain a bookmark."""
    if await bookmark_service.get_bookmark(db, current_user.id, bookmark_id) is None:
        raise HTTPException(status_code=404, detail="Bookmark not found")
    lists = await list_service.get_lists_for_bookmark(db, current_user.id, bookmark_id)
    return [ListResponse.model_validate(lst) for lst in lists]
