"""Upstream API clients and the factory that wires them together."""

from .base import (
    CityWeatherClient,
    ForecastClient,
    GeocodingClient,
    PlaceSearchClient,
    TranslationClient,
)
from .factory import UpstreamClients, build_clients
from .geocoding_client import GoogleGeocodingClient
from .open_meteo_client import OpenMeteoClient
from .openweather_client import OpenWeatherClient
from .places_client import GooglePlacesClient

__all__ = [
    "build_clients",
    "UpstreamClients",
    "ForecastClient",
    "GeocodingClient",
    "PlaceSearchClient",
    "CityWeatherClient",
    "TranslationClient",
    "OpenMeteoClient",
    "GoogleGeocodingClient",
    "GooglePlacesClient",
    "OpenWeatherClient",
]
