"""Interfaces and shared helpers for the upstream API clients."""

from __future__ import annotations

from typing import Any, Optional, Protocol

import requests

from app.errors import UpstreamError
from utils.logging_utils import get_tagged_logger, mask_url_secrets

logger = get_tagged_logger(__name__, tag="data_sources/base")


class ForecastClient(Protocol):
    """Anything that can return a raw Open-Meteo style forecast payload."""

    def fetch_forecast(self, latitude: float, longitude: float) -> dict:
        """Return current, hourly and daily forecast fields for a coordinate."""
        ...


class GeocodingClient(Protocol):
    """Reverse geocoder; returns None instead of raising on any failure."""

    def locality_name(self, latitude: float, longitude: float) -> Optional[str]:
        ...


class PlaceSearchClient(Protocol):
    def text_search(self, query: str, latitude: float | None = None, longitude: float | None = None) -> dict:
        """Return the raw text-search payload."""
        ...


class CityWeatherClient(Protocol):
    def current_by_city(self, city: str) -> dict:
        """Return the raw current-weather payload for a city name."""
        ...


class TranslationClient(Protocol):
    def generate(self, prompt: str) -> str:
        """Return the first candidate text for a prompt."""
        ...


def response_text(resp: requests.Response) -> str:
    """Best-effort body text of an upstream response."""
    try:
        return resp.text or ""
    except Exception:  # pragma: no cover - undecodable body
        return ""


def response_json(resp: requests.Response) -> Any:
    """Decode a JSON body or return None when it is not JSON."""
    try:
        return resp.json()
    except ValueError:
        return None


def log_upstream_call(provider: str, resp: requests.Response) -> None:
    """Log an upstream exchange with credentials masked out of the URL."""
    elapsed = getattr(resp, "elapsed", None)
    logger.info(
        "%s responded %s in %.2fs: %s",
        provider,
        resp.status_code,
        elapsed.total_seconds() if elapsed is not None else 0.0,
        mask_url_secrets(str(getattr(resp, "url", "") or "")),
    )


def raise_for_upstream_status(resp: requests.Response, provider: str, message: str) -> None:
    """Convert a non-2xx upstream response into an UpstreamError carrying its status.

    `message` may reference `{body}` (upstream body text) and `{reason}` (HTTP reason phrase).
    """
    if 200 <= resp.status_code < 300:
        return
    body = response_text(resp)
    reason = getattr(resp, "reason", None) or "Unknown"
    logger.error("%s error %s: %s", provider, resp.status_code, body[:500])
    raise UpstreamError(
        message.format(body=body or "Unknown", reason=reason),
        status_code=resp.status_code,
        details=body or None,
    )
