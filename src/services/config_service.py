"""Service layer for the installation-wide key/value config store."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.config_entry import ConfigEntry


async def get_config_value(db: AsyncSession, key: str, default: str | None = None) -> str | None:
    """Get a config value, or default if the key is not set."""
    entry = await db.get(ConfigEntry, key)
    return entry.value if entry is not None else default


async def set_config_value(db: AsyncSession, key: str, value: str) -> ConfigEntry:
    """Set a config value, replacing any previous value."""
    entry = await db.get(ConfigEntry, key)
    if entry is None:
        entry = ConfigEntry(key=key, value=value)
        db.add(entry)
    else:
        entry.value = value
    await db.flush()
    return entry


async def delete_config_value(db: AsyncSession, key: str) -> bool:
    """Remove a config key. Returns True if it existed."""
    entry = await db.get(ConfigEntry, key)
    if entry is None:
        return False
    await db.delete(entry)
    await db.flush()
    return True


async def get_all_config(db: AsyncSession) -> dict[str, str]:
    """Get every config entry as a dict."""
    result = await db.execute(select(ConfigEntry).order_by(ConfigEntry.key))
    return {entry.key: entry.value for entry in result.scalars()}
