"""Application settings via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Admin core configuration loaded from environment variables with TADMIN_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="TADMIN_",
        env_file=".env",
        case_sensitive=False,
    )

    # --- Core ---
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "json"

    # --- Document store ---
    store_backend: str = "firestore"  # "firestore" | "memory"
    firebase_credentials_path: str = ""
    firebase_project_id: str = ""
    firebase_app_name: str = "tadmin"

    # --- Cascades ---
    # Subcollection names are probed one by one; the schema written by the
    # game client is not consistent about which one holds route data.
    activity_subcollections: list[str] = ["territories", "routes", "route", "routePoints"]
    territory_subcollections: list[str] = ["territories", "owners"]

    # --- Territories ---
    territory_default_ttl_days: int = 7


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
