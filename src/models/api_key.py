"""API key model for programmatic access."""
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, CreatedAtMixin, IdMixin

if TYPE_CHECKING:
    from models.user import User


class ApiKey(Base, IdMixin, CreatedAtMixin):
    """
    API key model for programmatic access (browser extension, CLI, scripts).

    Keys are stored hashed - the plaintext is only shown once at creation.
    The key_id is the public half embedded in the plaintext and is used for lookup.
    """

    __tablename__ = "api_keys"
    __table_args__ = (
        UniqueConstraint("name", "user_id", name="uq_api_keys_name_user_id"),
    )

    # id provided by IdMixin
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="User-provided name, e.g., 'Browser extension'",
    )
    key_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    key_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="SHA-256 hash of the secret half of the key",
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship(back_populates="api_keys")
