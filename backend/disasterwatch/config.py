"""
DisasterWatch Gateway
Configuration Settings
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional, Dict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "DisasterWatch Gateway"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # API
    api_prefix: str = "/api"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Upstream providers (one credential per provider)
    openweathermap_api_key: Optional[str] = None
    weather_api_url: str = "https://api.openweathermap.org/data/2.5"

    news_api_key: Optional[str] = None
    news_api_url: str = "https://newsapi.org/v2"

    nasa_api_key: Optional[str] = None
    nasa_api_url: str = "https://api.nasa.gov"

    gemini_api_key: Optional[str] = None
    gemini_api_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-1.5-flash"

    external_api_timeout_seconds: float = Field(
        default=30,
        gt=0,
        description="Default deadline for a single upstream call"
    )

    # Client data adapter
    gateway_url: str = "http://localhost:8000/api/api-proxy"
    adapter_deadline_margin_seconds: float = Field(
        default=5,
        ge=0,
        description="Time the adapter waits beyond the upstream deadline for a gateway round trip"
    )
    adapter_max_attempts: int = Field(
        default=1,
        ge=1,
        le=5,
        description="Gateway round trips per fetch; 1 disables retrying"
    )
    notification_history_size: int = 50

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        frozen = True


class CredentialFields:
    """Settings field holding each provider's credential."""
    WEATHER = "openweathermap_api_key"
    NEWS = "news_api_key"
    NASA = "nasa_api_key"
    GEMINI = "gemini_api_key"


def credential_status(settings: Settings) -> Dict[str, bool]:
    """Which provider credentials are configured. Never exposes the values."""
    return {
        "weather": bool(settings.openweathermap_api_key),
        "news": bool(settings.news_api_key),
        "nasa": bool(settings.nasa_api_key),
        "gemini": bool(settings.gemini_api_key),
    }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
