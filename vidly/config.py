"""Runtime configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Attributes
    ----------
    app_name : str
        Human-readable application name.
    database_url : str
        SQLAlchemy database URL.
    log_level : str
        Root logger level name.
    log_file : Path | None
        Optional file that receives a copy of every log record.
    min_billable_days : int
        Smallest number of days charged for a returned rental.
    token_prefix : str
        Prefix prepended to issued bearer tokens.
    host : str
        Interface the development server binds to.
    port : int
        Port the development server listens on.
    """

    model_config = SettingsConfigDict(env_prefix="VIDLY_", extra="ignore")

    app_name: str = "Vidly"
    database_url: str = "sqlite+aiosqlite:///./vidly.db"
    log_level: str = "INFO"
    log_file: Path | None = Field(default=None)
    min_billable_days: int = Field(default=1, ge=0)
    token_prefix: str = "vid"
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings.

    Returns
    -------
    Settings
        Cached settings instance.
    """
    return Settings()
