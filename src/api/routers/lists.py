"""Bookmark list CRUD and membership endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.bookmark_list import (
    BookmarkListCreate,
    BookmarkListResponse,
    BookmarkListUpdate,
)
from services import list_service
from services.exceptions import (
    BookmarkAlreadyInListError,
    InvalidListParentError,
    NotFoundError,
)

router = APIRouter(prefix="/lists", tags=["lists"])


@router.post("/", response_model=BookmarkListResponse, status_code=201)
async def create_list(
    data: BookmarkListCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkListResponse:
    """
    Create a new bookmark list.

    Pass parent_id to nest the list under another of your lists.
    """
    try:
        bookmark_list = await list_service.create_list(db, current_user.id, data)
    except InvalidListParentError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return BookmarkListResponse.model_validate(bookmark_list)


@router.get("/", response_model=list[BookmarkListResponse])
async def get_lists(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkListResponse]:
    """Get all bookmark lists for the current user."""
    lists = await list_service.get_lists(db, current_user.id)
    return [BookmarkListResponse.model_validate(lst) for lst in lists]


@router.get("/{list_id}", response_model=BookmarkListResponse)
async def get_list(
    list_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkListResponse:
    """Get a specific bookmark list by ID."""
    bookmark_list = await list_service.get_list(db, current_user.id, list_id)
    if bookmark_list is None:
        raise HTTPException(status_code=404, detail="List not found")
    return BookmarkListResponse.model_validate(bookmark_list)


@router.patch("/{list_id}", response_model=BookmarkListResponse)
async def update_list(
    list_id: str,
    data: BookmarkListUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkListResponse:
    """Update a bookmark list."""
    try:
        bookmark_list = await list_service.update_list(
            db, current_user.id, list_id, data,
        )
    except InvalidListParentError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    if bookmark_list is None:
        raise HTTPException(status_code=404, detail="List not found")
    return BookmarkListResponse.model_validate(bookmark_list)


@router.delete("/{list_id}", status_code=204)
async def delete_list(
    list_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Delete a bookmark list.

    Bookmarks in the list are kept. Child lists move to the top level.
    """
    deleted = await list_service.delete_list(db, current_user.id, list_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="List not found")


@router.put("/{list_id}/bookmarks/{bookmark_id}", status_code=204)
async def add_bookmark_to_list(
    list_id: str,
    bookmark_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Add a bookmark to a list.

    Returns 404 if either doesn't exist, 409 if the bookmark is already in the list.
    """
    try:
        await list_service.add_bookmark_to_list(db, current_user.id, list_id, bookmark_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except BookmarkAlreadyInListError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e


@router.delete("/{list_id}/bookmarks/{bookmark_id}", status_code=204)
async def remove_bookmark_from_list(
    list_id: str,
    bookmark_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Remove a bookmark from a list. Returns 404 if it isn't in the list."""
    try:
        removed = await list_service.remove_bookmark_from_list(
            db, current_user.id, list_id, bookmark_id,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    if not removed:
        raise HTTPException(status_code=404, detail="Bookmark is not in this list")
