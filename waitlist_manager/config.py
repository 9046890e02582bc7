"""Application configuration and settings."""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WAITLIST_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Application
    app_name: str = "Venue Waitlist Manager"
    debug: bool = False
    api_prefix: str = "/v1"
    log_level: str = "INFO"

    # Storage (None keeps everything in memory)
    database_url: Optional[str] = None
    seed_demo_data: bool = True

    # Layout
    default_table_count: int = 12
    grid_columns: int = 4
    min_tables: int = 1
    max_tables: int = 24
    min_table_capacity: int = 1
    max_table_capacity: int = 20

    # Wait estimates (minutes)
    base_wait_minutes: int = 15
    wait_minutes_per_party: int = 5

    # Venue occupancy counter
    venue_max_capacity: int = 100
    venue_initial_occupancy: int = 45

    # Notifications
    notification_history_size: int = 200

    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
