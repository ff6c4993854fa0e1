"""Client for OpenWeatherMap current weather looked up by city name."""
from __future__ import annotations

from typing import Optional

import requests

from app.config import Settings, settings as default_settings
from app.data_sources.base import CityWeatherClient, log_upstream_call, response_json, response_text
from app.errors import UpstreamError, missing_credential
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="openweather_client")


class OpenWeatherClient(CityWeatherClient):
    provider = "OpenWeatherMap"

    def __init__(self, settings: Settings | None = None, session: Optional[requests.Session] = None):
        settings = settings or default_settings
        self.url = settings.openweather_url
        self.api_key = settings.openweather_api_key
        self.language = settings.upstream_language
        self.timeout = settings.upstream_timeout_seconds
        self.session = session or requests.Session()

    def current_by_city(self, city: str) -> dict:
        """Return the raw current-weather payload (metric units) for `city`."""
        if not self.api_key:
            raise missing_credential("OPENWEATHER_API_KEY")

        params = {
            "q": city,
            "appid": self.api_key,
            "units": "metric",
            "lang": self.language,
        }
        resp = self.session.get(self.url, params=params, timeout=self.timeout)
        log_upstream_call(self.provider, resp)

        if not 200 <= resp.status_code < 300:
            # OpenWeatherMap errors look like {"cod": "404", "message": "city not found"}
            body = response_json(resp)
            detail = body.get("message") if isinstance(body, dict) else None
            text = response_text(resp)
            logger.error("%s error %s: %s", self.provider, resp.status_code, text[:500])
            raise UpstreamError(
                f"Error from OpenWeatherMap API: {detail or text or 'Unknown'}",
                status_code=resp.status_code,
                details=text or None,
            )
        return resp.json()
