"""Tests for user endpoints."""
from httpx import AsyncClient

from core.auth import DEV_USER_EMAIL


async def test_get_current_user_dev_mode(client: AsyncClient) -> None:
    """In dev mode the local developer user is returned."""
    response = await client.get("/users/me")
    assert response.status_code == 200

    data = response.json()
    assert data["email"] == DEV_USER_EMAIL
    assert data["role"] == "admin"
    assert "password" not in data


async def test_dev_user_is_reused(client: AsyncClient) -> None:
    """Repeated requests resolve to the same dev user."""
    first = (await client.get("/users/me")).json()
    second = (await client.get("/users/me")).json()
    assert first["id"] == second["id"]


async def test_get_user_stats(client: AsyncClient) -> None:
    """Stats reflect the user's library."""
    created = await client.post(
        "/bookmarks/", json={"type": "link", "url": "https://example.com", "tags": ["a", "b"]},
    )
    await client.patch(f"/bookmarks/{created.json()['id']}", json={"favourited": True})
    await client.post("/bookmarks/", json={"type": "text", "text": "note"})
    await client.post("/lists/", json={"name": "Reading", "icon": "📚"})

    response = await client.get("/users/me/stats")
    assert response.status_code == 200
    assert response.json() == {
        "num_bookmarks": 2,
        "num_favourites": 1,
        "num_archived": 0,
        "num_tags": 2,
        "num_lists": 1,
    }
