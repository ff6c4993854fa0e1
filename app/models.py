"""Pydantic request bodies and reduced response payloads for each proxy capability."""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# upstream numbers pass through unchanged (ints stay ints)
Number = Union[int, float]


class _RequestBody(BaseModel):
    """Unknown keys sent by the web client are ignored."""
    model_config = ConfigDict(extra="ignore")


class CoordinateRequest(_RequestBody):
    latitude: float
    longitude: float
    reverseGeocode: bool = False


class CityWeatherRequest(_RequestBody):
    city: str = Field(min_length=1)


class PlaceSearchRequest(_RequestBody):
    query: str = Field(min_length=1)
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class TranslationRequest(_RequestBody):
    prompt: str = Field(min_length=1)


class MapsKeyResponse(BaseModel):
    apiKey: str


class CurrentWeather(BaseModel):
    """Current conditions plus the first hourly humidity/wind sample."""
    temperature: Optional[Number] = None
    weathercode: Optional[int] = None
    description: str
    relativehumidity_2m: Optional[Number] = None
    windspeed_10m: Optional[Number] = None


class ExtendedCurrentWeather(CurrentWeather):
    temperature_2m_max: Optional[Number] = None
    temperature_2m_min: Optional[Number] = None


class PeriodConditions(BaseModel):
    temperature: Optional[Number] = None
    weathercode: Optional[int] = None
    description: Optional[str] = None


class ExtendedWeatherResponse(BaseModel):
    locationName: Optional[str] = None
    current: ExtendedCurrentWeather
    morning: PeriodConditions
    afternoon: PeriodConditions
    evening: PeriodConditions


class CityWeatherResponse(BaseModel):
    temp: Optional[Number] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    humidity: Optional[Number] = None
    speed: Optional[Number] = None


class LatLng(BaseModel):
    lat: Optional[float] = None
    lng: Optional[float] = None


class PlaceGeometry(BaseModel):
    location: LatLng


class PlaceResult(BaseModel):
    """Reduced projection of a Places text-search record."""
    name: Optional[str] = None
    geometry: PlaceGeometry
    vicinity: Optional[str] = None
    formatted_address: Optional[str] = None
    types: List[str] = Field(default_factory=list)


class PlaceSearchResponse(BaseModel):
    results: List[PlaceResult]


class TranslationResponse(BaseModel):
    translation: str


class ErrorResponse(BaseModel):
    message: str
    details: Optional[str] = None
