"""WMO weather interpretation codes (as returned by Open-Meteo) mapped to text."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

DEFAULT_LANGUAGE = "en"

WEATHER_CODE_DESCRIPTIONS: Mapping[str, Mapping[int, str]] = MappingProxyType({
    "en": MappingProxyType({
        0: "Clear sky",
        1: "Mainly clear",
        2: "Partly cloudy",
        3: "Overcast",
        45: "Fog",
        48: "Depositing rime fog",
        51: "Light drizzle",
        53: "Moderate drizzle",
        55: "Dense drizzle",
        56: "Light freezing drizzle",
        57: "Dense freezing drizzle",
        61: "Slight rain",
        63: "Moderate rain",
        65: "Heavy rain",
        66: "Light freezing rain",
        67: "Heavy freezing rain",
        71: "Slight snowfall",
        73: "Moderate snowfall",
        75: "Heavy snowfall",
        77: "Snow grains",
        80: "Slight rain showers",
        81: "Moderate rain showers",
        82: "Violent rain showers",
        85: "Slight snow showers",
        86: "Heavy snow showers",
        95: "Thunderstorm",
        96: "Thunderstorm with slight hail",
        99: "Thunderstorm with heavy hail",
    }),
    "it": MappingProxyType({
        0: "Cielo sereno",
        1: "Cielo prevalentemente sereno",
        2: "Parzialmente nuvoloso",
        3: "Coperto",
        45: "Nebbia",
        48: "Nebbia gelata",
        51: "Pioggerella leggera",
        53: "Pioggerella moderata",
        55: "Pioggerella intensa",
        56: "Pioggerella gelata leggera",
        57: "Pioggerella gelata intensa",
        61: "Pioggia leggera",
        63: "Pioggia moderata",
        65: "Pioggia forte",
        66: "Pioggia gelata leggera",
        67: "Pioggia gelata forte",
        71: "Nevicata leggera",
        73: "Nevicata moderata",
        75: "Nevicata forte",
        77: "Grandinata leggera",
        80: "Rovesci di pioggia leggeri",
        81: "Rovesci di pioggia moderati",
        82: "Rovesci di pioggia violenti",
        85: "Rovesci di neve leggeri",
        86: "Rovesci di neve forti",
        95: "Temporale",
        96: "Temporale con grandine leggera",
        99: "Temporale con grandine forte",
    }),
})

UNKNOWN_DESCRIPTIONS: Mapping[str, str] = MappingProxyType({
    "en": "Unknown conditions",
    "it": "Condizioni sconosciute",
})


def describe_weather_code(code: object, language: str = DEFAULT_LANGUAGE) -> str:
    """Return the text for a WMO code, or the language's fallback for anything unmapped."""
    lang = language if language in WEATHER_CODE_DESCRIPTIONS else DEFAULT_LANGUAGE
    fallback = UNKNOWN_DESCRIPTIONS[lang]
    # bool is an int subclass; True must not read as code 1
    if isinstance(code, bool) or not isinstance(code, int):
        return fallback
    return WEATHER_CODE_DESCRIPTIONS[lang].get(code, fallback)
