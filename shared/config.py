"""
Centralized configuration for the PetConnect backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, ADMIN_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "PetConnect API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:5173"

    # Client storage cookies
    cookie_secure: bool = False
    local_storage_max_age: int = 60 * 60 * 24 * 400  # seconds

    # End-user session
    sign_in_redirect_delay: float = 0.1  # seconds
    session_timeout_minutes: int = 30
    session_warning_minutes: int = 5

    # Admin session
    admin_revalidate_interval: float = 300.0  # seconds
    admin_max_login_attempts: int = 5
    admin_lockout_minutes: int = 15
    admin_lockout_tick: float = 1.0  # seconds


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
