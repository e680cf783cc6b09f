"""Asset metadata endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.asset import AssetType
from models.user import User
from schemas.asset import AssetResponse
from services import asset_service

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get("/", response_model=list[AssetResponse])
async def list_assets(
    asset_type: AssetType | None = Query(default=None, description="Filter by asset type"),
    bookmark_id: str | None = Query(default=None, description="Only assets of this bookmark"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[AssetResponse]:
    """List the current user's stored assets."""
    assets = await asset_service.get_user_assets(
        db, current_user.id, asset_type=asset_type, bookmark_id=bookmark_id,
    )
    return [AssetResponse.model_validate(asset) for asset in assets]


@router.delete("/{asset_id}", status_code=204)
async def delete_asset(
    asset_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete an asset's metadata."""
    deleted = await asset_service.delete_asset(db, current_user.id, asset_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Asset not found")
