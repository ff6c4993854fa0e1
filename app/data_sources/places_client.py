"""Client for the Google Places Text Search API."""
from __future__ import annotations

from typing import Optional

import requests

from app.config import Settings, settings as default_settings
from app.data_sources.base import PlaceSearchClient, log_upstream_call, raise_for_upstream_status
from app.errors import missing_credential
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="places_client")


class GooglePlacesClient(PlaceSearchClient):
    provider = "Google Places"

    def __init__(self, settings: Settings | None = None, session: Optional[requests.Session] = None):
        settings = settings or default_settings
        self.url = settings.places_url
        self.api_key = settings.google_places_api_key
        self.language = settings.upstream_language
        self.radius_meters = settings.places_radius_meters
        self.timeout = settings.upstream_timeout_seconds
        self.session = session or requests.Session()

    def build_params(self, query: str, latitude: float | None = None, longitude: float | None = None) -> dict:
        params = {
            "query": query,
            "key": self.api_key,
            "language": self.language,
        }
        # bias only when both halves of the coordinate are present
        if latitude is not None and longitude is not None:
            params["location"] = f"{latitude},{longitude}"
            params["radius"] = self.radius_meters
        return params

    def text_search(self, query: str, latitude: float | None = None, longitude: float | None = None) -> dict:
        """Run a text search, optionally biased towards a coordinate."""
        if not self.api_key:
            raise missing_credential("GOOGLE_PLACES_API_KEY")

        resp = self.session.get(
            self.url,
            params=self.build_params(query, latitude, longitude),
            timeout=self.timeout,
        )
        log_upstream_call(self.provider, resp)
        raise_for_upstream_status(resp, self.provider, "Error from Google Places API: {reason}")
        return resp.json()
