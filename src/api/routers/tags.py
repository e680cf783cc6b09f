"""Endpoints for browsing, renaming, deleting and merging a user's tags."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.tag import TagListResponse, TagMergeRequest, TagRenameRequest, TagResponse
from services import tag_service
from services.exceptions import TagAlreadyExistsError, TagNotFoundError

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("/", response_model=TagListResponse)
async def list_tags(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> TagListResponse:
    """
    List the user's tags, most used first (ties broken by name).

    `count` is split into `ai_count` and `human_count` by who attached the
    tag. Tags no bookmark carries are listed with zero counts.
    """
    counts = await tag_service.get_user_tags_with_counts(db, current_user.id)
    return TagListResponse(tags=counts)


@router.post("/merge", response_model=TagResponse)
async def merge_tags(
    body: TagMergeRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> TagResponse:
    """
    Fold `from_tags` into `into_tag`, creating the target if needed.

    404 when a source tag is unknown.
    """
    try:
        target = await tag_service.merge_tags(
            db, current_user.id, body.into_tag, body.from_tags,
        )
    except TagNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return TagResponse.model_validate(target)


@router.patch("/{tag_name}", response_model=TagResponse)
async def rename_tag(
    tag_name: str,
    body: TagRenameRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> TagResponse:
    """
    Rename a tag; every bookmark carrying it shows the new name.

    404 for an unknown tag, 409 when the new name is taken.
    """
    try:
        renamed = await tag_service.rename_tag(db, current_user.id, tag_name, body.new_name)
    except TagNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except TagAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return TagResponse.model_validate(renamed)


@router.delete("/{tag_name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_name: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a tag and detach it from every bookmark. 404 for an unknown tag."""
    try:
        await tag_service.delete_tag(db, current_user.id, tag_name)
    except TagNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
