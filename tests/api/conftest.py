"""Shared fixtures for API tests."""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from api.main import app
from core.config import Settings, get_settings
from db.session import get_async_session
from models.user import User
from services.api_key_service import create_api_key


def non_dev_settings() -> Settings:
    """Settings with API key authentication enforced."""
    return Settings(database_url="sqlite+aiosqlite:///:memory:", dev_mode=False)


@asynccontextmanager
async def create_user2_client(
    db_session: AsyncSession,
    name: str = "User Two",
    email: str = "user2@example.com",
) -> AsyncGenerator[AsyncClient]:
    """
    Create an authenticated AsyncClient for a second user via API key.

    Sets up a new user with an API key, overrides FastAPI dependencies to
    disable dev_mode, and yields an AsyncClient authenticated as that user.
    Restores the previous dependency overrides on exit, so the dev-mode
    `client` fixture keeps working afterwards.
    """
    user2 = User(name=name, email=email)
    db_session.add(user2)
    await db_session.flush()

    _, user2_key = await create_api_key(db_session, user2.id, "Test Key")

    previous_overrides = dict(app.dependency_overrides)

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_settings] = non_dev_settings

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
            headers={"Authorization": f"Bearer {user2_key}"},
        ) as user2_client:
            yield user2_client
    finally:
        app.dependency_overrides.clear()
        app.dependency_overrides.update(previous_overrides)


# Constant for non-existent entity ID
FAKE_ID = "00000000-0000-7000-8000-000000000000"
