"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    spoonacular_api_key: str
    spoonacular_base_url: str = "https://api.spoonacular.com"
    recommendation_count: int = 6
    local_storage_path: str = ".healmeal/local_storage.json"
    delivery_fee: float = 5.99
    delivery_eta_minutes: int = 30
    delivery_dwell_seconds: str = "5,10,2,13"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_dwell_seconds(raw: str | None) -> tuple[float, ...] | None:
    """Parse comma-separated delivery dwell times from env."""
    if raw is None:
        return None
    values: list[float] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if not value:
            continue
        try:
            seconds = float(value)
        except ValueError:
            return None
        if seconds < 0:
            return None
        values.append(seconds)
    return tuple(values) or None
