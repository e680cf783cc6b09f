"""Tests for bookmark request schemas."""
import pytest
from pydantic import TypeAdapter, ValidationError

from models.bookmark import BookmarkAssetType
from models.tag import TagAttribution
from schemas.bookmark import (
    AssetBookmarkCreate,
    BookmarkCreate,
    BookmarkTagsRequest,
    BookmarkUpdate,
    LinkBookmarkCreate,
    TextBookmarkCreate,
)
from schemas.bookmark_list import BookmarkListUpdate
from schemas.tag import TagMergeRequest, TagRenameRequest

bookmark_create = TypeAdapter(BookmarkCreate)


class TestBookmarkCreate:
    """Tests for the discriminated bookmark creation union."""

    def test__bookmark_create__dispatches_on_type(self) -> None:
        """The type field picks the concrete schema."""
        link = bookmark_create.validate_python({"type": "link", "url": "https://example.com"})
        text = bookmark_create.validate_python({"type": "text", "text": "hello"})
        asset = bookmark_create.validate_python(
            {"type": "asset", "asset_type": "pdf", "asset_id": "file-1"},
        )

        assert isinstance(link, LinkBookmarkCreate)
        assert isinstance(text, TextBookmarkCreate)
        assert isinstance(asset, AssetBookmarkCreate)
        assert asset.asset_type == BookmarkAssetType.PDF

    def test__bookmark_create__unknown_type_rejected(self) -> None:
        """Unknown bookmark types fail validation."""
        with pytest.raises(ValidationError):
            bookmark_create.validate_python({"type": "video", "url": "https://example.com"})

    def test__bookmark_create__missing_type_rejected(self) -> None:
        """The discriminator is required in raw input."""
        with pytest.raises(ValidationError):
            bookmark_create.validate_python({"url": "https://example.com"})

    def test__link_bookmark_create__normalizes_url_and_tags(self) -> None:
        """Root URLs gain a trailing slash and tags are normalized."""
        data = LinkBookmarkCreate(url="https://example.com", tags=[" a ", "a", "b"])
        assert str(data.url) == "https://example.com/"
        assert data.tags == ["a", "b"]

    def test__link_bookmark_create__none_tags(self) -> None:
        """A null tag list becomes empty."""
        assert LinkBookmarkCreate(url="https://example.com", tags=None).tags == []

    def test__asset_bookmark_create__requires_asset_id(self) -> None:
        """Asset bookmarks need a non-empty asset id."""
        with pytest.raises(ValidationError):
            AssetBookmarkCreate(asset_type="image", asset_id="")

    def test__text_bookmark_create__requires_text(self) -> None:
        """Text bookmarks need text."""
        with pytest.raises(ValidationError):
            TextBookmarkCreate(text="")


def test__bookmark_update__only_set_fields_dumped() -> None:
    """Unsent fields are not part of the partial update."""
    update = BookmarkUpdate(favourited=True)
    assert update.model_dump(exclude_unset=True) == {"favourited": True}


def test__bookmark_tags_request__defaults_to_human() -> None:
    """Tag requests default to human attribution and need at least one tag."""
    request = BookmarkTagsRequest(tags=["x", " x "])
    assert request.tags == ["x"]
    assert request.attached_by == TagAttribution.HUMAN

    with pytest.raises(ValidationError):
        BookmarkTagsRequest(tags=[])


def test__bookmark_list_update__explicit_null_parent_is_set() -> None:
    """An explicit null parent_id is distinguishable from an omitted one."""
    assert "parent_id" in BookmarkListUpdate(parent_id=None).model_dump(exclude_unset=True)
    assert "parent_id" not in BookmarkListUpdate(name="x").model_dump(exclude_unset=True)


def test__tag_rename_request__normalizes() -> None:
    """New tag names are normalized."""
    assert TagRenameRequest(new_name="  New   Name ").new_name == "New Name"
    with pytest.raises(ValidationError):
        TagRenameRequest(new_name="   ")


def test__tag_merge_request__normalizes_sources() -> None:
    """Source names are normalized and deduped."""
    request = TagMergeRequest(into_tag="js", from_tags=["JS ", "JS", "javascript"])
    assert request.from_tags == ["JS", "javascript"]
