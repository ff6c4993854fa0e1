"""Reduce raw upstream payloads to the fields the web client actually reads."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from app.models import (
    CityWeatherResponse,
    CurrentWeather,
    ExtendedCurrentWeather,
    ExtendedWeatherResponse,
    LatLng,
    PeriodConditions,
    PlaceGeometry,
    PlaceResult,
    PlaceSearchResponse,
)
from app.period_aggregator import HourlySeries, summarize_periods
from app.weather_codes import DEFAULT_LANGUAGE, describe_weather_code


def _first(values: Optional[Sequence[Any]]) -> Any:
    """First element of an upstream array, or None when absent/empty."""
    if not values:
        return None
    return values[0]


def normalize_current_weather(data: Mapping[str, Any], *, language: str = DEFAULT_LANGUAGE) -> CurrentWeather:
    """Current conditions from `current_weather` plus hourly humidity/wind at index 0."""
    current = data["current_weather"]
    hourly = data.get("hourly") or {}
    code = current.get("weathercode")
    return CurrentWeather(
        temperature=current.get("temperature"),
        weathercode=code,
        description=describe_weather_code(code, language),
        relativehumidity_2m=_first(hourly.get("relativehumidity_2m")),
        windspeed_10m=_first(hourly.get("windspeed_10m")),
    )


def normalize_extended_weather(
    data: Mapping[str, Any],
    location_name: Optional[str],
    *,
    language: str = DEFAULT_LANGUAGE,
) -> ExtendedWeatherResponse:
    """Current conditions, today's high/low and morning/afternoon/evening summaries."""
    current = normalize_current_weather(data, language=language)
    daily = data.get("daily") or {}
    periods = summarize_periods(HourlySeries.from_open_meteo(data.get("hourly") or {}))
    return ExtendedWeatherResponse(
        locationName=location_name,
        current=ExtendedCurrentWeather(
            **current.model_dump(),
            temperature_2m_max=_first(daily.get("temperature_2m_max")),
            temperature_2m_min=_first(daily.get("temperature_2m_min")),
        ),
        **{name: PeriodConditions(**summary.to_payload(language)) for name, summary in periods.items()},
    )


def normalize_city_weather(data: Mapping[str, Any]) -> CityWeatherResponse:
    """OpenWeatherMap current weather reduced to temp/description/icon/humidity/speed."""
    main = data.get("main") or {}
    weather = _first(data.get("weather")) or {}
    wind = data.get("wind") or {}
    return CityWeatherResponse(
        temp=main.get("temp"),
        description=weather.get("description"),
        icon=weather.get("icon"),
        humidity=main.get("humidity"),
        speed=wind.get("speed"),
    )


def normalize_place(place: Mapping[str, Any]) -> PlaceResult:
    location = (place.get("geometry") or {}).get("location") or {}
    return PlaceResult(
        name=place.get("name"),
        geometry=PlaceGeometry(location=LatLng(lat=location.get("lat"), lng=location.get("lng"))),
        vicinity=place.get("vicinity"),
        formatted_address=place.get("formatted_address"),
        types=list(place.get("types") or []),
    )


def normalize_places(data: Mapping[str, Any]) -> PlaceSearchResponse:
    return PlaceSearchResponse(results=[normalize_place(p) for p in data.get("results") or []])
