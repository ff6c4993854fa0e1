"""Serverless entry points (Netlify Functions / AWS API Gateway proxy events).

Each callable takes `(event, context)` and returns a
`{"statusCode", "headers", "body"}` dictionary, delegating to the same
ProxyHandlers the FastAPI app uses.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Callable, Dict, Optional

from app.config import settings
from app.handlers import HandlerRequest, ProxyHandlers
from utils.logging_utils import get_tagged_logger, setup_logging

setup_logging(level=settings.log_level, job_name="travel_proxy_functions")
logger = get_tagged_logger(__name__, tag="app/functions")

_handlers: Optional[ProxyHandlers] = None


def get_handlers() -> ProxyHandlers:
    """Build the handler set once per warm container."""
    global _handlers
    if _handlers is None:
        _handlers = ProxyHandlers(settings)
    return _handlers


def event_to_request(event: Dict[str, Any] | None) -> HandlerRequest:
    """Read method and body from a v1 (`httpMethod`) or v2 (`requestContext.http`) event."""
    event = event or {}
    method = event.get("httpMethod")
    if not method:
        http = (event.get("requestContext") or {}).get("http") or {}
        method = http.get("method") or "GET"

    body = event.get("body")
    if isinstance(body, str) and event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body).decode("utf-8", "replace")
        except (binascii.Error, ValueError):
            logger.warning("Could not base64-decode event body; passing it through as-is")
    return HandlerRequest(method=method, body=body)


def _function(handler_name: str) -> Callable[[Dict[str, Any], Any], Dict[str, Any]]:
    def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
        request = event_to_request(event)
        result = getattr(get_handlers(), handler_name)(request)
        return result.to_event_response()

    handler.__name__ = handler_name
    handler.__doc__ = f"Serverless entry point for ProxyHandlers.{handler_name}."
    return handler


get_google_maps_api_key = _function("maps_api_key")
get_weather = _function("weather")
get_extended_weather = _function("extended_weather")
get_city_weather = _function("city_weather")
search_places = _function("search_places")
translate = _function("translate")
