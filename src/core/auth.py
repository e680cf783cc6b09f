"""Resolve the calling user from a Bearer API key, or the dev user in DEV_MODE."""
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from db.session import get_async_session
from models.user import User
from services import api_key_service, user_service
from services.exceptions import UserAlreadyExistsError

logger = logging.getLogger(__name__)


security = HTTPBearer(auto_error=False)

DEV_USER_EMAIL = "dev@localhost"
DEV_USER_NAME = "Local Developer"


async def get_or_create_dev_user(db: AsyncSession) -> User:
    """
    Return the DEV_MODE user, creating it on first use.

    Handles the race where concurrent requests both try to create the user:
    create_user rolls back on the unique email violation and the existing
    user is fetched instead.

    Flushes only; the request session commits.
    """
    user = await user_service.get_user_by_email(db, DEV_USER_EMAIL)
    if user is not None:
        return user

    try:
        return await user_service.create_user(db, name=DEV_USER_NAME, email=DEV_USER_EMAIL)
    except UserAlreadyExistsError:
        user = await user_service.get_user_by_email(db, DEV_USER_EMAIL)
        if user is None:
            raise
        return user


async def validate_api_key(db: AsyncSession, key: str) -> User:
    """
    Validate an API key and return the associated user.

    Raises:
        HTTPException: If the key is malformed, unknown, or has a wrong secret.
    """
    user = await api_key_service.authenticate_api_key(db, key)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Current user for a request.

    DEV_MODE short-circuits to the dev user; otherwise a valid Bearer API key is required.
    """
    if settings.dev_mode:
        return await get_or_create_dev_user(db)

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return await validate_api_key(db, credentials.credentials)
