"""
Application configuration via pydantic-settings.

All config is read from environment variables (or a local ``.env``) with
defaults suitable for local development. Build one ``Settings`` at startup
with ``get_settings()`` and pass it to whatever needs it.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

#: Locale files shipped inside the package.
PACKAGED_LOCALES = Path(__file__).parent / "locales"


class Settings(BaseSettings):
    """Runtime settings for the weather agent."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    app_name: str = "weather-agent"
    app_env: str = Field(default="development", pattern=r"^(development|staging|production)$")
    debug: bool = False
    admin_email: str = ""

    # Upstream provider (WeatherAPI.com)
    weather_api_key: str = ""
    weather_api_base_url: str = "https://api.weatherapi.com/v1"
    weather_api_timeout: float = Field(default=10.0, gt=0)

    # In-memory cache
    cache_duration: timedelta = Field(default=timedelta(minutes=15), gt=timedelta(0))
    cache_cleanup_interval: timedelta = Field(default=timedelta(minutes=5), gt=timedelta(0))

    # HTTP server
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=0, le=65535)
    allowed_origins: str = "*"  # comma-separated

    # i18n
    locales_path: Path = PACKAGED_LOCALES
    default_lang: str = "en"

    # Logging
    log_file: str = "weather-app.log"  # empty disables the file handler

    @property
    def origins(self) -> list[str]:
        """``allowed_origins`` split into a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
