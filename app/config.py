"""Application configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the travel proxy.

    No prefix is applied so the variable names used by the deployed functions
    (GOOGLE_MAPS_API_KEY, GEMINI_API_KEY, ...) keep working unchanged.
    """
    model_config = SettingsConfigDict(extra="ignore")

    # one credential per provider; Open-Meteo needs none
    google_maps_api_key: str | None = None
    google_places_api_key: str | None = None
    gemini_api_key: str | None = None
    gemini_model_name: str = "gemini-2.5-flash-lite"
    openweather_api_key: str | None = None

    open_meteo_url: str = "https://api.open-meteo.com/v1/forecast"
    geocoding_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    places_url: str = "https://maps.googleapis.com/maps/api/place/textsearch/json"
    openweather_url: str = "https://api.openweathermap.org/data/2.5/weather"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    forecast_timezone: str = "Asia/Tokyo"
    forecast_days: int = 1
    upstream_language: str = "it"
    description_language: str = "en"
    upstream_timeout_seconds: float = 10.0
    places_radius_meters: int = 50000
    log_level: str = "INFO"

    @field_validator(
        "open_meteo_url",
        "geocoding_url",
        "places_url",
        "openweather_url",
        "gemini_base_url",
        mode="after",
    )
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator(
        "google_maps_api_key",
        "google_places_api_key",
        "gemini_api_key",
        "openweather_api_key",
        mode="after",
    )
    @classmethod
    def blank_key_is_missing(cls, v: str | None) -> str | None:
        """Treat an empty or whitespace-only credential as not configured."""
        if v is None or not str(v).strip():
            return None
        return str(v).strip()


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'google_maps_api_key', 'google_places_api_key', 'gemini_api_key', 'openweather_api_key'})}")
