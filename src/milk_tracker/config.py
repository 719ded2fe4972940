"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

STORAGE_FILE = "file"
STORAGE_SUPABASE = "supabase"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: str = STORAGE_FILE
    data_file: Path = Path("data") / "milk_tracker.json"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "kv_store"
    default_cow_price: float = 60
    default_buffalo_price: float = 80
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    telegram_bot_token: str | None = None
    telegram_chat_id: int | None = None
    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def validate_storage(settings: Settings) -> None:
    """Raise ValueError when the selected storage backend is incomplete."""
    if settings.storage_backend == STORAGE_FILE:
        return
    if settings.storage_backend != STORAGE_SUPABASE:
        raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
    if not settings.supabase_url or not settings.supabase_service_key:
        raise ValueError(
            "SUPABASE_URL and SUPABASE_SERVICE_KEY are required for supabase storage"
        )
