"""Runtime settings read from the environment or a .env file."""
from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Hoard API settings. Field names double as environment variable names."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./hoard.db"
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")

    # Every request runs as a local dev user, no API key needed
    dev_mode: bool = Field(default=False, validation_alias="DEV_MODE")

    # Comma-separated; see cors_origins
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        validation_alias="CORS_ORIGINS",
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Field length limits
    max_title_length: int = Field(default=1000, validation_alias="MAX_TITLE_LENGTH")
    max_note_length: int = Field(default=10_000, validation_alias="MAX_NOTE_LENGTH")
    max_text_length: int = Field(default=512_000, validation_alias="MAX_TEXT_LENGTH")

    @model_validator(mode="after")
    def validate_dev_mode_security(self) -> "Settings":
        """
        Refuse DEV_MODE unless the database is SQLite or a PostgreSQL on this machine.

        With DEV_MODE on, anyone reaching the API acts as the dev user, so a
        shared database must never be paired with it.
        """
        if not self.dev_mode or self.is_sqlite:
            return self

        try:
            parsed = urlparse(self.database_url)
            hostname = parsed.hostname or ""
        except ValueError:
            hostname = ""

        local_hosts = {"localhost", "127.0.0.1", "0.0.0.0", "::1"}
        if hostname.lower() not in local_hosts:
            raise ValueError(
                f"DEV_MODE cannot be enabled with a non-local database. "
                f"Host '{hostname}' is not localhost, and DEV_MODE skips API key "
                "checks for every request.",
            )

        return self

    @property
    def is_sqlite(self) -> bool:
        """True when the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    @property
    def cors_origins(self) -> list[str]:
        """CORS_ORIGINS split on commas, blanks dropped."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Settings built once per process; tests call cache_clear() to reload."""
    return Settings()
