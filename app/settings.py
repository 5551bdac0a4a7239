"""Process settings for the pricing service, read from the environment or .env."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.config import (
    BASE_FARE,
    COST_PER_KM,
    COST_PER_MINUTE,
    DRIVER_RATING_ADJUSTMENT_RATE,
    RUSH_HOUR_SURGE_INCREMENT,
)


class Settings(BaseSettings):
    """Root settings container."""

    # External signal providers
    google_maps_api_key: Optional[str] = None
    google_directions_url: str = "https://maps.googleapis.com/maps/api/directions/json"
    openweather_api_key: Optional[str] = None
    openweather_url: str = "https://api.openweathermap.org/data/2.5/weather"
    provider_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="HTTP timeout for a single provider call",
    )
    signal_deadline_seconds: float = Field(
        default=3.0,
        gt=0,
        description="Deadline for each signal fetch before falling back to defaults",
    )

    # Pricing knobs
    base_fare: float = BASE_FARE
    cost_per_km: float = COST_PER_KM
    cost_per_minute: float = COST_PER_MINUTE
    driver_rating_adjustment_rate: float = Field(
        default=DRIVER_RATING_ADJUSTMENT_RATE, ge=0.0, lt=1.0
    )
    rush_hour_surge_increment: float = Field(default=RUSH_HOUR_SURGE_INCREMENT, ge=0.0)
    timezone: Optional[str] = Field(
        default=None,
        description="IANA zone for rush-hour wall clock, e.g. Africa/Nairobi; defaults to host local time",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
