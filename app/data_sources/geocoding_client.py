"""Reverse geocoding through the Google Geocoding API.

A failed lookup only costs the caller a location label, so every failure here
is logged and reported as a missing name instead of an exception.
"""
from __future__ import annotations

from typing import Optional

import requests

from app.config import Settings, settings as default_settings
from app.data_sources.base import GeocodingClient, log_upstream_call, response_json
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="geocoding_client")


def extract_locality(payload: dict | None) -> Optional[str]:
    """Pick the locality name from a Geocoding response, falling back to the formatted address."""
    if not isinstance(payload, dict) or payload.get("status") != "OK":
        return None
    results = payload.get("results") or []
    for result in results:
        for component in result.get("address_components") or []:
            if "locality" in (component.get("types") or []) and component.get("long_name"):
                return component["long_name"]
    if results and results[0].get("formatted_address"):
        return results[0]["formatted_address"]
    return None


class GoogleGeocodingClient(GeocodingClient):
    provider = "Google Geocoding"

    def __init__(self, settings: Settings | None = None, session: Optional[requests.Session] = None):
        settings = settings or default_settings
        self.url = settings.geocoding_url
        self.api_key = settings.google_maps_api_key
        self.language = settings.upstream_language
        self.timeout = settings.upstream_timeout_seconds
        self.session = session or requests.Session()

    def locality_name(self, latitude: float, longitude: float) -> Optional[str]:
        """Return a human-readable place name for the coordinate, or None."""
        if not self.api_key:
            logger.warning("GOOGLE_MAPS_API_KEY not set; skipping reverse geocoding")
            return None

        params = {
            "latlng": f"{latitude},{longitude}",
            "key": self.api_key,
            "language": self.language,
        }
        try:
            resp = self.session.get(self.url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            logger.warning("Reverse geocoding request failed: %s", exc)
            return None

        log_upstream_call(self.provider, resp)
        if not 200 <= resp.status_code < 300:
            logger.warning("Reverse geocoding returned HTTP %s; continuing without a location name", resp.status_code)
            return None

        payload = response_json(resp)
        name = extract_locality(payload)
        if name is None:
            status = payload.get("status") if isinstance(payload, dict) else None
            logger.warning("Reverse geocoding produced no name (status=%s)", status)
        return name
