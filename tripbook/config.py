"""Typed settings configuration - single source of truth."""

from datetime import date
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRIPBOOK_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Storage keys (versioned)
    trip_key: str = "trip_planner_v1"
    days_key: str = "trip_planner_days_v1"
    events_key: str = "trip_planner_events_v1"

    # Storage backend
    storage_backend: Literal["memory", "file", "redis"] = "memory"
    storage_dir: str = ".tripbook"
    redis_url: str | None = None
    memory_quota_chars: int | None = None

    # Map links
    maps_search_base_url: str = "https://www.google.com/maps/search/"

    # Seed defaults
    default_trip_name: str = "My Trip"
    default_date_range: str = "Pick a date range"
    new_day_date_text: str = "(date optional)"
    seed_start_date: date = date(2026, 2, 4)

    # Item / event defaults
    default_item_time: str = "09:00"
    default_event_offset_minutes: int = 60

    # Export
    export_indent: int = 2


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
