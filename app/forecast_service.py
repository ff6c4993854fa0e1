"""Forecast flows built on top of the upstream clients."""
from __future__ import annotations

from typing import Optional

from app.data_sources.base import ForecastClient, GeocodingClient
from app.models import CurrentWeather, ExtendedWeatherResponse
from app.normalizers import normalize_current_weather, normalize_extended_weather
from app.weather_codes import DEFAULT_LANGUAGE
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="app/forecast_service")


def get_current_weather(
    latitude: float,
    longitude: float,
    forecast_client: ForecastClient,
    *,
    language: str = DEFAULT_LANGUAGE,
) -> CurrentWeather:
    """Fetch the forecast for a coordinate and reduce it to current conditions."""
    data = forecast_client.fetch_forecast(latitude, longitude)
    return normalize_current_weather(data, language=language)


def _resolve_location_name(latitude: float, longitude: float, geocoding_client: GeocodingClient) -> Optional[str]:
    """Stage 1: best-effort place name. Never raises."""
    try:
        return geocoding_client.locality_name(latitude, longitude)
    except Exception as exc:
        logger.warning("Reverse geocoding failed; continuing without a location name", extra={"error": str(exc)})
        return None


def build_extended_forecast(
    latitude: float,
    longitude: float,
    forecast_client: ForecastClient,
    geocoding_client: GeocodingClient,
    *,
    language: str = DEFAULT_LANGUAGE,
) -> ExtendedWeatherResponse:
    """
    Reverse-geocode, then fetch the forecast, then summarize it by period.

    The two upstream calls run strictly in order. A geocoding failure only
    leaves `locationName` empty; a forecast failure propagates to the caller.
    """
    logger.info("Building extended forecast", extra={"latitude": latitude, "longitude": longitude})

    location_name = _resolve_location_name(latitude, longitude, geocoding_client)
    data = forecast_client.fetch_forecast(latitude, longitude)

    extended = normalize_extended_weather(data, location_name, language=language)
    logger.debug(
        "Computed extended forecast",
        extra={"location_name": location_name, "hourly_samples": len((data.get("hourly") or {}).get("time") or [])},
    )
    return extended
