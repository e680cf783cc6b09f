"""SQLAlchemy declarative base with common mixins."""
from datetime import UTC, datetime
from enum import StrEnum

from sqlalchemy import DateTime, Enum, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid6 import uuid7


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def generate_id() -> str:
    """
    Generate a new opaque row identifier.

    UUIDv7 strings are globally unique and sort by creation time, so an index on
    the id doubles as a rough insertion-order index.
    """
    return str(uuid7())


def enum_column(enum_cls: type[StrEnum]) -> Enum:
    """
    Column type storing a StrEnum by value as a plain string.

    native_enum=False keeps the schema portable between SQLite and PostgreSQL
    (VARCHAR instead of a CREATE TYPE).
    """
    return Enum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class IdMixin:
    """Mixin that adds a generated string primary key."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)


class CreatedAtMixin:
    """
    Mixin that adds a created_at column.

    Timestamps are set on the Python side so the value is available right after
    flush without an extra round trip, on both SQLite and PostgreSQL.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
