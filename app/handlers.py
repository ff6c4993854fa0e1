"""Framework-independent request handlers, one per proxy capability.

Each handler takes a HandlerRequest (method + raw body) and always returns a
HandlerResponse; failures become a status code plus a JSON `message` instead
of escaping as exceptions. The FastAPI router and the serverless entry points
are thin adapters over these.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.config import Settings
from app.data_sources import UpstreamClients, build_clients
from app.errors import BadRequestError, MethodNotAllowedError, ProxyError, missing_credential
from app.forecast_service import build_extended_forecast, get_current_weather
from app.models import (
    CityWeatherRequest,
    CoordinateRequest,
    ErrorResponse,
    MapsKeyResponse,
    PlaceSearchRequest,
    TranslationRequest,
    TranslationResponse,
)
from app.normalizers import normalize_city_weather, normalize_places
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/handlers")

JSON_HEADERS = {"Content-Type": "application/json"}

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class HandlerRequest:
    """The parts of an inbound HTTP request the handlers look at."""
    method: str
    body: str | bytes | dict | None = None


def json_safe(value: Any) -> Any:
    """Replace NaN and infinities (which strict JSON cannot carry) with None, recursively."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(v) for v in value]
    return value


@dataclass
class HandlerResponse:
    """HTTP-shaped result: status code, JSON body and headers.

    The body is made strict-JSON safe on construction, so every surface
    renders the same document.
    """
    status_code: int
    body: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))

    def __post_init__(self) -> None:
        self.body = json_safe(self.body)

    def to_event_response(self) -> dict:
        """Serverless (Netlify / API Gateway) response dictionary."""
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": json.dumps(self.body, allow_nan=False),
        }


def parse_json_body(raw: str | bytes | dict | None) -> dict:
    """Decode a request body into a JSON object; an empty body counts as `{}`."""
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", "replace")
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        raise BadRequestError("Invalid JSON body")
    if not isinstance(data, dict):
        raise BadRequestError("Invalid JSON body")
    return data


def _quoted(names: Iterable[str]) -> str:
    return " and ".join(f'"{n}"' for n in dict.fromkeys(names))


def parse_body(model: Type[ModelT], raw: str | bytes | dict | None) -> ModelT:
    """Validate the body against `model`, naming missing or invalid fields in a 400."""
    data = parse_json_body(raw)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        missing: list[str] = []
        invalid: list[str] = []
        for err in exc.errors():
            name = str(err["loc"][0]) if err.get("loc") else "body"
            # null and "" read as absent, like a falsy check on the client side
            if err["type"] in ("missing", "string_too_short") or data.get(name) is None:
                missing.append(name)
            else:
                invalid.append(name)
        if missing:
            raise BadRequestError(f"Missing {_quoted(missing)} in request body.")
        raise BadRequestError(f"Invalid {_quoted(invalid)} in request body.")


class ProxyHandlers:
    """All capabilities, bound to one Settings object and one set of upstream clients."""

    def __init__(self, settings: Settings, clients: Optional[UpstreamClients] = None):
        self.settings = settings
        self.clients = clients or build_clients(settings)
        self.language = settings.description_language

    def _dispatch(
        self,
        capability: str,
        request: HandlerRequest,
        work: Callable[[HandlerRequest], BaseModel],
        *,
        methods: tuple[str, ...] | None = ("POST",),
    ) -> HandlerResponse:
        """Run `work` and map its outcome (or failure) onto a HandlerResponse."""
        method = (request.method or "").upper()
        try:
            if methods and method not in methods:
                raise MethodNotAllowedError(f"Method Not Allowed. Use {', '.join(methods)}.")
            result = work(request)
        except ProxyError as exc:
            log = logger.error if exc.status_code >= 500 else logger.info
            log("%s failed with %s: %s", capability, exc.status_code, exc.message)
            return HandlerResponse(exc.status_code, exc.to_body())
        except Exception as exc:
            logger.exception("Unhandled error in %s handler", capability)
            error = ErrorResponse(message=f"Internal server error ({capability}): {exc}")
            return HandlerResponse(500, error.model_dump(exclude_none=True))

        return HandlerResponse(200, result.model_dump())

    def maps_api_key(self, request: HandlerRequest) -> HandlerResponse:
        """Hand the browser its Maps JavaScript key. Accepts any method."""
        def work(_req: HandlerRequest) -> MapsKeyResponse:
            if not self.settings.google_maps_api_key:
                raise missing_credential("GOOGLE_MAPS_API_KEY")
            return MapsKeyResponse(apiKey=self.settings.google_maps_api_key)

        return self._dispatch("maps key", request, work, methods=None)

    def weather(self, request: HandlerRequest) -> HandlerResponse:
        """Current weather for a coordinate; extended payload when `reverseGeocode` is true."""
        def work(req: HandlerRequest):
            body = parse_body(CoordinateRequest, req.body)
            if body.reverseGeocode:
                return self._extended(body)
            return get_current_weather(
                body.latitude,
                body.longitude,
                self.clients.forecast,
                language=self.language,
            )

        return self._dispatch("weather", request, work)

    def extended_weather(self, request: HandlerRequest) -> HandlerResponse:
        """Location name, current conditions and morning/afternoon/evening summaries."""
        def work(req: HandlerRequest):
            return self._extended(parse_body(CoordinateRequest, req.body))

        return self._dispatch("extended weather", request, work)

    def _extended(self, body: CoordinateRequest):
        return build_extended_forecast(
            body.latitude,
            body.longitude,
            self.clients.forecast,
            self.clients.geocoding,
            language=self.language,
        )

    def city_weather(self, request: HandlerRequest) -> HandlerResponse:
        def work(req: HandlerRequest):
            body = parse_body(CityWeatherRequest, req.body)
            if not self.settings.openweather_api_key:
                raise missing_credential("OPENWEATHER_API_KEY")
            return normalize_city_weather(self.clients.city_weather.current_by_city(body.city))

        return self._dispatch("city weather", request, work)

    def search_places(self, request: HandlerRequest) -> HandlerResponse:
        def work(req: HandlerRequest):
            body = parse_body(PlaceSearchRequest, req.body)
            if not self.settings.google_places_api_key:
                raise missing_credential("GOOGLE_PLACES_API_KEY")
            data = self.clients.places.text_search(body.query, body.latitude, body.longitude)
            return normalize_places(data)

        return self._dispatch("places", request, work)

    def translate(self, request: HandlerRequest) -> HandlerResponse:
        def work(req: HandlerRequest):
            body = parse_body(TranslationRequest, req.body)
            if not self.settings.gemini_api_key:
                raise missing_credential("GEMINI_API_KEY")
            return TranslationResponse(translation=self.clients.translation.generate(body.prompt))

        return self._dispatch("translation", request, work)


# route/function name -> ProxyHandlers method name
CAPABILITIES: Dict[str, str] = {
    "maps-key": "maps_api_key",
    "weather": "weather",
    "weather/extended": "extended_weather",
    "weather/city": "city_weather",
    "places/search": "search_places",
    "translate": "translate",
}
