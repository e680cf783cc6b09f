"""Installation-wide key/value configuration."""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class ConfigEntry(Base):
    """ConfigEntry model - a single key/value setting, not scoped to any user."""

    __tablename__ = "config"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
