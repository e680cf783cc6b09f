"""API key management endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.api_key import ApiKeyCreate, ApiKeyCreateResponse, ApiKeyResponse
from services import api_key_service
from services.exceptions import ApiKeyAlreadyExistsError

router = APIRouter(prefix="/api-keys", tags=["api-keys"])


@router.post("/", response_model=ApiKeyCreateResponse, status_code=201)
async def create_api_key(
    data: ApiKeyCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> ApiKeyCreateResponse:
    """
    Create a new API key for programmatic access (e.g. the browser extension).

    The key is only returned once, in this response. Store it securely.
    Returns 409 if you already have a key with this name.
    """
    try:
        api_key, plaintext = await api_key_service.create_api_key(
            db, current_user.id, data.name,
        )
    except ApiKeyAlreadyExistsError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return ApiKeyCreateResponse(
        id=api_key.id,
        name=api_key.name,
        key=plaintext,
        created_at=api_key.created_at,
    )


@router.get("/", response_model=list[ApiKeyResponse])
async def list_api_keys(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[ApiKeyResponse]:
    """List the current user's API keys. Secrets are never returned."""
    api_keys = await api_key_service.get_api_keys(db, current_user.id)
    return [ApiKeyResponse.model_validate(key) for key in api_keys]


@router.delete("/{api_key_id}", status_code=204)
async def revoke_api_key(
    api_key_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Revoke (delete) an API key."""
    deleted = await api_key_service.revoke_api_key(db, current_user.id, api_key_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="API key not found")
