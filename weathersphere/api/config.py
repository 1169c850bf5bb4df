"""
Configuration management for the WeatherSphere API server.
Loads environment variables and provides typed configuration.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server settings loaded from environment variables."""

    # ========================================================================
    # Provider
    # ========================================================================
    owm_api_key: Optional[str] = None
    owm_base_url: str = "https://api.openweathermap.org/data/2.5"
    upstream_timeout: float = 30.0

    # ========================================================================
    # Server
    # ========================================================================
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ========================================================================
    # Application
    # ========================================================================
    environment: str = "development"
    log_level: str = "info"

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment.lower() == "production"

    @property
    def has_api_key(self) -> bool:
        return bool(self.owm_api_key)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Server settings
    """
    return Settings()
