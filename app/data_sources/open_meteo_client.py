"""Client for the Open-Meteo forecast API."""
from __future__ import annotations

from typing import Optional

import requests

from app.config import Settings, settings as default_settings
from app.data_sources.base import ForecastClient, log_upstream_call, raise_for_upstream_status
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="open_meteo_client")

HOURLY_VARS = [
    "temperature_2m",
    "relativehumidity_2m",
    "windspeed_10m",
    "weathercode",
]

DAILY_VARS = [
    "weathercode",
    "temperature_2m_max",
    "temperature_2m_min",
]


class OpenMeteoClient(ForecastClient):
    """Fetch current, hourly and daily forecast fields in a single request."""

    provider = "Open-Meteo"

    def __init__(self, settings: Settings | None = None, session: Optional[requests.Session] = None):
        settings = settings or default_settings
        self.url = settings.open_meteo_url
        self.timezone = settings.forecast_timezone
        self.forecast_days = settings.forecast_days
        self.timeout = settings.upstream_timeout_seconds
        self.session = session or requests.Session()

    def build_params(self, latitude: float, longitude: float) -> dict:
        return {
            "latitude": latitude,
            "longitude": longitude,
            "current_weather": "true",
            "hourly": ",".join(HOURLY_VARS),
            "daily": ",".join(DAILY_VARS),
            "timezone": self.timezone,
            "forecast_days": self.forecast_days,
        }

    def fetch_forecast(self, latitude: float, longitude: float) -> dict:
        """Return the parsed forecast JSON; raise UpstreamError on a non-2xx status."""
        resp = self.session.get(self.url, params=self.build_params(latitude, longitude), timeout=self.timeout)
        log_upstream_call(self.provider, resp)
        raise_for_upstream_status(resp, self.provider, "Error from Open-Meteo API: {body}")
        return resp.json()
