"""
Tests for bookmark API endpoints.

Covers creation of each bookmark type, duplicate handling, filtering,
pagination, tag attach/detach and user isolation.
"""
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.api.conftest import FAKE_ID, create_user2_client


async def _create_link(client: AsyncClient, url: str, **extra: object) -> dict:
    response = await client.post("/bookmarks/", json={"type": "link", "url": url, **extra})
    assert response.status_code == 201
    return response.json()


# =============================================================================
# Create
# =============================================================================


async def test_create_link_bookmark(client: AsyncClient) -> None:
    """A link bookmark starts pending crawl and tagging."""
    response = await client.post(
        "/bookmarks/",
        json={"type": "link", "url": "https://example.com", "tags": ["python", "Web  Dev"]},
    )
    assert response.status_code == 201

    data = response.json()
    assert data["type"] == "link"
    assert data["link"]["url"] == "https://example.com/"
    assert data["link"]["crawl_status"] == "pending"
    assert data["tagging_status"] == "pending"
    assert data["archived"] is False
    assert data["favourited"] is False
    assert data["already_exists"] is False
    assert data["text"] is None
    assert data["asset"] is None
    assert sorted(t["name"] for t in data["tags"]) == ["Web Dev", "python"]
    assert all(t["attached_by"] == "human" for t in data["tags"])


async def test_create_text_bookmark(client: AsyncClient) -> None:
    """A text bookmark stores its text in the text extension."""
    response = await client.post(
        "/bookmarks/",
        json={"type": "text", "text": "Remember this", "source_url": "https://example.com/quote"},
    )
    assert response.status_code == 201

    data = response.json()
    assert data["type"] == "text"
    assert data["text"]["text"] == "Remember this"
    assert data["text"]["source_url"] == "https://example.com/quote"
    assert data["link"] is None


async def test_create_asset_bookmark(client: AsyncClient) -> None:
    """An asset bookmark points at an uploaded file."""
    response = await client.post(
        "/bookmarks/",
        json={"type": "asset", "asset_type": "image", "asset_id": "upload-1", "file_name": "a.png"},
    )
    assert response.status_code == 201

    data = response.json()
    assert data["type"] == "asset"
    assert data["asset"]["asset_type"] == "image"
    assert data["asset"]["asset_id"] == "upload-1"


async def test_create_bookmark_duplicate_url_returns_existing(client: AsyncClient) -> None:
    """Saving the same URL twice returns the first bookmark with status 200."""
    first = await _create_link(client, "https://example.com/page")

    response = await client.post(
        "/bookmarks/", json={"type": "link", "url": "https://example.com/page"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == first["id"]
    assert data["already_exists"] is True


async def test_create_bookmark_missing_type_rejected(client: AsyncClient) -> None:
    """The type discriminator is required."""
    response = await client.post("/bookmarks/", json={"url": "https://example.com"})
    assert response.status_code == 422


async def test_create_bookmark_invalid_url_rejected(client: AsyncClient) -> None:
    """Link bookmarks need a valid http(s) URL."""
    response = await client.post("/bookmarks/", json={"type": "link", "url": "not a url"})
    assert response.status_code == 422


async def test_create_text_bookmark_empty_text_rejected(client: AsyncClient) -> None:
    """Text bookmarks need some text."""
    response = await client.post("/bookmarks/", json={"type": "text", "text": ""})
    assert response.status_code == 422


# =============================================================================
# Read / List
# =============================================================================


async def test_get_bookmark(client: AsyncClient) -> None:
    """A bookmark can be fetched by id."""
    created = await _create_link(client, "https://example.com/")

    response = await client.get(f"/bookmarks/{created['id']}")
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


async def test_get_bookmark_not_found(client: AsyncClient) -> None:
    """Unknown ids return 404."""
    response = await client.get(f"/bookmarks/{FAKE_ID}")
    assert response.status_code == 404


async def test_list_bookmarks_pagination(client: AsyncClient) -> None:
    """Bookmarks are listed newest first with pagination metadata."""
    ids = [(await _create_link(client, f"https://example.com/{i}"))["id"] for i in range(3)]

    response = await client.get("/bookmarks/", params={"limit": 2})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["has_more"] is True
    assert [item["id"] for item in data["items"]] == [ids[2], ids[1]]

    response = await client.get("/bookmarks/", params={"limit": 2, "offset": 2})
    data = response.json()
    assert [item["id"] for item in data["items"]] == [ids[0]]
    assert data["has_more"] is False


async def test_list_bookmarks_filters(client: AsyncClient) -> None:
    """Bookmarks can be filtered by flags and type."""
    link = await _create_link(client, "https://example.com/")
    await client.post("/bookmarks/", json={"type": "text", "text": "hello"})
    await client.patch(f"/bookmarks/{link['id']}", json={"favourited": True})

    favourites = (await client.get("/bookmarks/", params={"favourited": "true"})).json()
    texts = (await client.get("/bookmarks/", params={"type": "text"})).json()

    assert [item["id"] for item in favourites["items"]] == [link["id"]]
    assert [item["type"] for item in texts["items"]] == ["text"]


async def test_list_bookmarks_limit_bounds(client: AsyncClient) -> None:
    """The page size is capped."""
    response = await client.get("/bookmarks/", params={"limit": 101})
    assert response.status_code == 422


# =============================================================================
# Update / Delete
# =============================================================================


async def test_update_bookmark(client: AsyncClient) -> None:
    """Only the sent fields change."""
    created = await _create_link(client, "https://example.com/", title="Original")

    response = await client.patch(
        f"/bookmarks/{created['id']}", json={"archived": True, "note": "read later"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["archived"] is True
    assert data["note"] == "read later"
    assert data["title"] == "Original"


async def test_update_bookmark_not_found(client: AsyncClient) -> None:
    """Updating an unknown bookmark returns 404."""
    response = await client.patch(f"/bookmarks/{FAKE_ID}", json={"archived": True})
    assert response.status_code == 404


async def test_delete_bookmark(client: AsyncClient) -> None:
    """Deleting returns 204, then the bookmark is gone."""
    created = await _create_link(client, "https://example.com/")

    response = await client.delete(f"/bookmarks/{created['id']}")
    assert response.status_code == 204

    response = await client.get(f"/bookmarks/{created['id']}")
    assert response.status_code == 404

    response = await client.delete(f"/bookmarks/{created['id']}")
    assert response.status_code == 404


async def test_delete_bookmark_keeps_tags(client: AsyncClient) -> None:
    """Tags outlive the bookmarks that carried them."""
    created = await _create_link(client, "https://example.com/", tags=["keep-me"])

    await client.delete(f"/bookmarks/{created['id']}")

    tags = (await client.get("/tags/")).json()["tags"]
    assert [(t["name"], t["count"]) for t in tags] == [("keep-me", 0)]


# =============================================================================
# Tags on a bookmark
# =============================================================================


async def test_attach_tags(client: AsyncClient) -> None:
    """Tags can be attached with an attribution."""
    created = await _create_link(client, "https://example.com/", tags=["mine"])

    response = await client.post(
        f"/bookmarks/{created['id']}/tags",
        json={"tags": ["suggested", "mine"], "attached_by": "ai"},
    )
    assert response.status_code == 200
    by_name = {t["name"]: t["attached_by"] for t in response.json()["tags"]}
    assert by_name == {"mine": "human", "suggested": "ai"}


async def test_detach_tags(client: AsyncClient) -> None:
    """Detaching removes the tag from the bookmark only."""
    created = await _create_link(client, "https://example.com/", tags=["a", "b"])

    response = await client.request(
        "DELETE", f"/bookmarks/{created['id']}/tags", json={"tags": ["a"]},
    )
    assert response.status_code == 200
    assert [t["name"] for t in response.json()["tags"]] == ["b"]


async def test_attach_tags_unknown_bookmark(client: AsyncClient) -> None:
    """Attaching to an unknown bookmark returns 404."""
    response = await client.post(f"/bookmarks/{FAKE_ID}/tags", json={"tags": ["x"]})
    assert response.status_code == 404


async def test_get_bookmark_lists(client: AsyncClient) -> None:
    """The lists containing a bookmark can be fetched."""
    created = await _create_link(client, "https://example.com/")
    bookmark_list = (await client.post("/lists/", json={"name": "Reading", "icon": "📚"})).json()
    await client.put(f"/lists/{bookmark_list['id']}/bookmarks/{created['id']}")

    response = await client.get(f"/bookmarks/{created['id']}/lists")
    assert response.status_code == 200
    assert [lst["id"] for lst in response.json()] == [bookmark_list["id"]]


# =============================================================================
# User isolation
# =============================================================================


async def test_user_cannot_see_other_users_bookmarks(
    client: AsyncClient,
    db_session: AsyncSession,
) -> None:
    """Bookmarks of one user are invisible to another."""
    created = await _create_link(client, "https://example.com/private")

    async with create_user2_client(db_session) as user2_client:
        response = await user2_client.get(f"/bookmarks/{created['id']}")
        assert response.status_code == 404

        response = await user2_client.delete(f"/bookmarks/{created['id']}")
        assert response.status_code == 404

        listing = (await user2_client.get("/bookmarks/")).json()
        assert listing["total"] == 0

        # Same URL is a new bookmark for user 2, not a duplicate
        response = await user2_client.post(
            "/bookmarks/", json={"type": "link", "url": "https://example.com/private"},
        )
        assert response.status_code == 201

    response = await client.get(f"/bookmarks/{created['id']}")
    assert response.status_code == 200
