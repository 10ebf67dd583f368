"""
Application configuration via pydantic-settings.
All config read from environment variables with sensible defaults for local dev.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # App
    app_name: str = "roamo-api"
    app_version: str = "0.1.0"
    environment: str = Field(default="development", pattern=r"^(development|staging|production)$")
    debug: bool = False

    # CORS
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "https://roamo.app"]
    )

    # Sentry
    sentry_dsn: str = ""
    sentry_traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)

    # Outbound HTTP
    http_user_agent: str = "Mozilla/5.0 (compatible; SpotBot/1.0)"

    # Short-link resolution (bit.ly, maps.app.goo.gl, ...)
    short_link_timeout_s: float = Field(default=5.0, gt=0.0)

    # Reverse geocoding (Nominatim)
    # Zoom 8 resolves to metro-city granularity instead of borough/neighbourhood.
    reverse_geocode_url: str = "https://nominatim.openstreetmap.org/reverse"
    reverse_geocode_timeout_s: float = Field(default=8.0, gt=0.0)
    reverse_geocode_zoom: int = Field(default=8, ge=0, le=18)
    reverse_geocode_user_agent: str = "Roamo/1.0 (canonical-city)"

    # Spot import request limits
    spot_import_context_max_chars: int = 2000

    # Notification copy cache
    notification_config_ttl_s: float = Field(default=3600.0, gt=0.0)

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}


settings = Settings()
