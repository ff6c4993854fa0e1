"""Factory helpers for wiring the upstream clients at startup."""

from __future__ import annotations

from dataclasses import dataclass

from app import config
from app.data_sources.base import (
    CityWeatherClient,
    ForecastClient,
    GeocodingClient,
    PlaceSearchClient,
    TranslationClient,
)
from app.data_sources.geocoding_client import GoogleGeocodingClient
from app.data_sources.open_meteo_client import OpenMeteoClient
from app.data_sources.openweather_client import OpenWeatherClient
from app.data_sources.places_client import GooglePlacesClient
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


@dataclass
class UpstreamClients:
    """One client per third-party provider; swap any of them out in tests."""

    forecast: ForecastClient
    geocoding: GeocodingClient
    places: PlaceSearchClient
    city_weather: CityWeatherClient
    translation: TranslationClient


def build_clients(settings: config.Settings | None = None) -> UpstreamClients:
    """Instantiate the default provider clients from settings."""
    from app.gemini_client import GeminiClient

    settings = settings or config.settings
    configured = {
        "google_maps": bool(settings.google_maps_api_key),
        "google_places": bool(settings.google_places_api_key),
        "gemini": bool(settings.gemini_api_key),
        "openweather": bool(settings.openweather_api_key),
    }
    logger.info("Building upstream clients", extra={"credentials_present": configured})
    return UpstreamClients(
        forecast=OpenMeteoClient(settings),
        geocoding=GoogleGeocodingClient(settings),
        places=GooglePlacesClient(settings),
        city_weather=OpenWeatherClient(settings),
        translation=GeminiClient(settings),
    )
