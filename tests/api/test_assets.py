"""Tests for asset metadata endpoints."""
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import get_or_create_dev_user
from models.asset import AssetType
from services import asset_service
from tests.api.conftest import FAKE_ID


async def test_list_and_delete_assets(client: AsyncClient, db_session: AsyncSession) -> None:
    """Assets can be listed with filters and deleted."""
    created = await client.post("/bookmarks/", json={"type": "link", "url": "https://a.com"})
    bookmark_id = created.json()["id"]
    dev_user = await get_or_create_dev_user(db_session)
    await asset_service.register_asset(
        db_session,
        dev_user.id,
        "shot",
        AssetType.LINK_SCREENSHOT,
        size=10,
        bookmark_id=bookmark_id,
    )
    await asset_service.register_asset(db_session, dev_user.id, "loose", AssetType.UNKNOWN)

    response = await client.get("/assets/")
    assert response.status_code == 200
    assert [a["id"] for a in response.json()] == ["loose", "shot"]

    response = await client.get("/assets/", params={"asset_type": "linkScreenshot"})
    assert [a["id"] for a in response.json()] == ["shot"]

    response = await client.get("/assets/", params={"bookmark_id": bookmark_id})
    assert [a["id"] for a in response.json()] == ["shot"]

    assert (await client.delete("/assets/loose")).status_code == 204
    assert (await client.delete("/assets/loose")).status_code == 404


async def test_deleting_bookmark_deletes_its_assets(
    client: AsyncClient,
    db_session: AsyncSession,
) -> None:
    """Assets attached to a bookmark go with it."""
    created = await client.post("/bookmarks/", json={"type": "link", "url": "https://a.com"})
    bookmark_id = created.json()["id"]
    dev_user = await get_or_create_dev_user(db_session)
    await asset_service.register_asset(
        db_session, dev_user.id, "banner", AssetType.LINK_BANNER_IMAGE, bookmark_id=bookmark_id,
    )

    await client.delete(f"/bookmarks/{bookmark_id}")

    assert (await client.get("/assets/")).json() == []


async def test_delete_unknown_asset(client: AsyncClient) -> None:
    """Unknown assets return 404."""
    assert (await client.delete(f"/assets/{FAKE_ID}")).status_code == 404
