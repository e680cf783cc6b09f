"""
Initial schema.

Creates users and credential bookkeeping, bookmarks with their link/text/asset
extension tables, assets, tags, lists, custom prompts, RSS feeds and the
config store.

Revision ID: 0f3c9a1d2e4b
Revises:
Create Date: 2026-10-19 09:12:41.508317
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0f3c9a1d2e4b"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _enum(*values: str, name: str) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, length=32)


PROCESSING_STATUS = ("pending", "failure", "success")


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("email_verified", sa.DateTime(timezone=True), nullable=True),
        sa.Column("image", sa.String(length=2048), nullable=True),
        sa.Column(
            "password",
            sa.String(length=255),
            nullable=True,
            comment="Password hash; NULL for users that only sign in through a provider",
        ),
        sa.Column("role", _enum("admin", "user", name="userrole"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "accounts",
        sa.Column("provider", sa.String(length=255), nullable=False),
        sa.Column("provider_account_id", sa.String(length=255), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        sa.Column("access_token", sa.Text(), nullable=True),
        sa.Column(
            "expires_at",
            sa.Integer(),
            nullable=True,
            comment="Provider token expiry as a unix timestamp",
        ),
        sa.Column("token_type", sa.String(length=64), nullable=True),
        sa.Column("scope", sa.Text(), nullable=True),
        sa.Column("id_token", sa.Text(), nullable=True),
        sa.Column("session_state", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("provider", "provider_account_id"),
    )
    op.create_index(op.f("ix_accounts_user_id"), "accounts", ["user_id"], unique=False)

    op.create_table(
        "sessions",
        sa.Column("session_token", sa.String(length=255), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("expires", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("session_token"),
    )
    op.create_index(op.f("ix_sessions_user_id"), "sessions", ["user_id"], unique=False)

    op.create_table(
        "verification_tokens",
        sa.Column("identifier", sa.String(length=255), nullable=False),
        sa.Column("token", sa.String(length=255), nullable=False),
        sa.Column("expires", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("identifier", "token"),
    )

    op.create_table(
        "api_keys",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column(
            "name",
            sa.String(length=100),
            nullable=False,
            comment="User-provided name, e.g., 'Browser extension'",
        ),
        sa.Column("key_id", sa.String(length=32), nullable=False),
        sa.Column(
            "key_hash",
            sa.String(length=64),
            nullable=False,
            comment="SHA-256 hash of the secret half of the key",
        ),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("key_id"),
        sa.UniqueConstraint("name", "user_id", name="uq_api_keys_name_user_id"),
    )
    op.create_index(op.f("ix_api_keys_user_id"), "api_keys", ["user_id"], unique=False)

    op.create_table(
        "bookmarks",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("archived", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("favourited", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column(
            "tagging_status", _enum(*PROCESSING_STATUS, name="processingstatus"), nullable=True,
        ),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("type", _enum("link", "text", "asset", name="bookmarktype"), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_bookmarks_archived"), "bookmarks", ["archived"], unique=False)
    op.create_index(op.f("ix_bookmarks_created_at"), "bookmarks", ["created_at"], unique=False)
    op.create_index(op.f("ix_bookmarks_favourited"), "bookmarks", ["favourited"], unique=False)
    op.create_index(op.f("ix_bookmarks_user_id"), "bookmarks", ["user_id"], unique=False)

    op.create_table(
        "bookmark_links",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("favicon", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("html_content", sa.Text(), nullable=True),
        sa.Column("crawled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "crawl_status", _enum(*PROCESSING_STATUS, name="processingstatus"), nullable=True,
        ),
        sa.ForeignKeyConstraint(["id"], ["bookmarks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_bookmark_links_url"), "bookmark_links", ["url"], unique=False)

    op.create_table(
        "bookmark_texts",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("text", sa.Text(), nullable=True),
        sa.Column("source_url", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["id"], ["bookmarks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "bookmark_assets",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("asset_type", _enum("image", "pdf", name="bookmarkassettype"), nullable=False),
        sa.Column("asset_id", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("metadata", sa.Text(), nullable=True),
        sa.Column("file_name", sa.Text(), nullable=True),
        sa.Column("source_url", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["id"], ["bookmarks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "assets",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column(
            "asset_type",
            _enum(
                "linkBannerImage",
                "linkScreenshot",
                "linkFullPageArchive",
                "linkVideo",
                "bookmarkAsset",
                "unknown",
                name="assettype",
            ),
            nullable=False,
        ),
        sa.Column("size", sa.Integer(), server_default="0", nullable=False),
        sa.Column("content_type", sa.String(length=255), nullable=True),
        sa.Column("file_name", sa.Text(), nullable=True),
        sa.Column("bookmark_id", sa.String(length=36), nullable=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(["bookmark_id"], ["bookmarks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_assets_asset_type"), "assets", ["asset_type"], unique=False)
    op.create_index(op.f("ix_assets_bookmark_id"), "assets", ["bookmark_id"], unique=False)
    op.create_index(op.f("ix_assets_user_id"), "assets", ["user_id"], unique=False)

    op.create_table(
        "tags",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "name", name="uq_tags_user_id_name"),
    )
    op.create_index(op.f("ix_tags_name"), "tags", ["name"], unique=False)
    op.create_index(op.f("ix_tags_user_id"), "tags", ["user_id"], unique=False)

    op.create_table(
        "bookmark_tags",
        sa.Column("bookmark_id", sa.String(length=36), nullable=False),
        sa.Column("tag_id", sa.String(length=36), nullable=False),
        sa.Column("attached_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("attached_by", _enum("ai", "human", name="tagattribution"), nullable=False),
        sa.ForeignKeyConstraint(["bookmark_id"], ["bookmarks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("bookmark_id", "tag_id"),
    )
    op.create_index("ix_bookmark_tags_tag_id", "bookmark_tags", ["tag_id"], unique=False)

    op.create_table(
        "bookmark_lists",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("icon", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("parent_id", sa.String(length=36), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["parent_id"], ["bookmark_lists.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_bookmark_lists_parent_id"), "bookmark_lists", ["parent_id"], unique=False,
    )
    op.create_index(op.f("ix_bookmark_lists_user_id"), "bookmark_lists", ["user_id"], unique=False)

    op.create_table(
        "bookmarks_in_lists",
        sa.Column("bookmark_id", sa.String(length=36), nullable=False),
        sa.Column("list_id", sa.String(length=36), nullable=False),
        sa.Column("added_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["bookmark_id"], ["bookmarks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["list_id"], ["bookmark_lists.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("bookmark_id", "list_id"),
    )
    op.create_index(
        op.f("ix_bookmarks_in_lists_bookmark_id"),
        "bookmarks_in_lists",
        ["bookmark_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_bookmarks_in_lists_list_id"), "bookmarks_in_lists", ["list_id"], unique=False,
    )

    op.create_table(
        "custom_prompts",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.Column(
            "applies_to", _enum("all", "text", "images", name="promptscope"), nullable=False,
        ),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_custom_prompts_user_id"), "custom_prompts", ["user_id"], unique=False)

    op.create_table(
        "rss_feeds",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("last_fetched_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "last_fetched_status",
            _enum(*PROCESSING_STATUS, name="processingstatus"),
            nullable=True,
        ),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_rss_feeds_user_id"), "rss_feeds", ["user_id"], unique=False)

    op.create_table(
        "rss_feed_imports",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("entry_id", sa.Text(), nullable=False),
        sa.Column("rss_feed_id", sa.String(length=36), nullable=False),
        sa.Column("bookmark_id", sa.String(length=36), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["bookmark_id"], ["bookmarks.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["rss_feed_id"], ["rss_feeds.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "rss_feed_id", "entry_id", name="uq_rss_feed_imports_rss_feed_id_entry_id",
        ),
    )
    op.create_index(
        op.f("ix_rss_feed_imports_entry_id"), "rss_feed_imports", ["entry_id"], unique=False,
    )
    op.create_index(
        op.f("ix_rss_feed_imports_rss_feed_id"), "rss_feed_imports", ["rss_feed_id"], unique=False,
    )

    op.create_table(
        "config",
        sa.Column("key", sa.String(length=255), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("key"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("config")
    op.drop_index(op.f("ix_rss_feed_imports_rss_feed_id"), table_name="rss_feed_imports")
    op.drop_index(op.f("ix_rss_feed_imports_entry_id"), table_name="rss_feed_imports")
    op.drop_table("rss_feed_imports")
    op.drop_index(op.f("ix_rss_feeds_user_id"), table_name="rss_feeds")
    op.drop_table("rss_feeds")
    op.drop_index(op.f("ix_custom_prompts_user_id"), table_name="custom_prompts")
    op.drop_table("custom_prompts")
    op.drop_index(op.f("ix_bookmarks_in_lists_list_id"), table_name="bookmarks_in_lists")
    op.drop_index(op.f("ix_bookmarks_in_lists_bookmark_id"), table_name="bookmarks_in_lists")
    op.drop_table("bookmarks_in_lists")
    op.drop_index(op.f("ix_bookmark_lists_user_id"), table_name="bookmark_lists")
    op.drop_index(op.f("ix_bookmark_lists_parent_id"), table_name="bookmark_lists")
    op.drop_table("bookmark_lists")
    op.drop_index("ix_bookmark_tags_tag_id", table_name="bookmark_tags")
    op.drop_table("bookmark_tags")
    op.drop_index(op.f("ix_tags_user_id"), table_name="tags")
    op.drop_index(op.f("ix_tags_name"), table_name="tags")
    op.drop_table("tags")
    op.drop_index(op.f("ix_assets_user_id"), table_name="assets")
    op.drop_index(op.f("ix_assets_bookmark_id"), table_name="assets")
    op.drop_index(op.f("ix_assets_asset_type"), table_name="assets")
    op.drop_table("assets")
    op.drop_table("bookmark_assets")
    op.drop_table("bookmark_texts")
    op.drop_index(op.f("ix_bookmark_links_url"), table_name="bookmark_links")
    op.drop_table("bookmark_links")
    op.drop_index(op.f("ix_bookmarks_user_id"), table_name="bookmarks")
    op.drop_index(op.f("ix_bookmarks_favourited"), table_name="bookmarks")
    op.drop_index(op.f("ix_bookmarks_created_at"), table_name="bookmarks")
    op.drop_index(op.f("ix_bookmarks_archived"), table_name="bookmarks")
    op.drop_table("bookmarks")
    op.drop_index(op.f("ix_api_keys_user_id"), table_name="api_keys")
    op.drop_table("api_keys")
    op.drop_table("verification_tokens")
    op.drop_index(op.f("ix_sessions_user_id"), table_name="sessions")
    op.drop_table("sessions")
    op.drop_index(op.f("ix_accounts_user_id"), table_name="accounts")
    op.drop_table("accounts")
    op.drop_table("users")
