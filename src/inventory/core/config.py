from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_name: str = "Inventory Manager API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Storage: a single named slot holding the whole product collection
    storage_backend: Literal["sqlite", "memory"] = "sqlite"
    database_url: str = "sqlite:///./inventory.db"
    storage_slot: str = "products"

    # Notifications (toast history + optional ntfy/Gotify webhook)
    notification_history_size: int = Field(default=50, ge=1)
    webhook_enabled: bool = False
    webhook_url: str | None = None

    # CORS
    cors_origins: list[str] = Field(default=["*"])

    # Rate Limiting
    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
