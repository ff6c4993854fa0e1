"""Group hourly forecast samples into morning/afternoon/evening summaries.

Open-Meteo returns hourly data as index-aligned arrays already localized to the
requested timezone, so the local hour is read straight off each timestamp.
Each window is summarized by the mean temperature of its samples and the
weather code of its first sample. Null entries in the upstream arrays mean
"no data" and are left out of both.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from app.weather_codes import DEFAULT_LANGUAGE, describe_weather_code
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="period_aggregator")


@dataclass(frozen=True)
class PeriodWindow:
    """Half-open local-hour interval [start_hour, end_hour)."""
    name: str
    start_hour: int
    end_hour: int

    def contains(self, hour: int) -> bool:
        return self.start_hour <= hour < self.end_hour


# Hours [0, 6) belong to no window.
PERIOD_WINDOWS: Tuple[PeriodWindow, ...] = (
    PeriodWindow("morning", 6, 12),
    PeriodWindow("afternoon", 12, 18),
    PeriodWindow("evening", 18, 24),
)


@dataclass
class HourlySeries:
    """Index-aligned hourly samples; position i of every list is the same instant."""
    time: List[str]
    temperature: List[Optional[float]]
    weathercode: List[Optional[int]]
    relative_humidity: List[Optional[float]] = field(default_factory=list)
    wind_speed: List[Optional[float]] = field(default_factory=list)

    def __post_init__(self) -> None:
        n = len(self.time)
        if not self.relative_humidity:
            self.relative_humidity = [None] * n
        if not self.wind_speed:
            self.wind_speed = [None] * n
        lengths = {
            "time": n,
            "temperature": len(self.temperature),
            "weathercode": len(self.weathercode),
            "relative_humidity": len(self.relative_humidity),
            "wind_speed": len(self.wind_speed),
        }
        if len(set(lengths.values())) != 1:
            raise ValueError(f"Hourly arrays have inconsistent lengths: {lengths}")

    def __len__(self) -> int:
        return len(self.time)

    @classmethod
    def from_open_meteo(cls, hourly: Mapping[str, Sequence]) -> "HourlySeries":
        """Build a series from the `hourly` block of an Open-Meteo forecast response."""
        times = list(hourly.get("time") or [])
        return cls(
            time=times,
            temperature=list(hourly.get("temperature_2m") or [None] * len(times)),
            weathercode=list(hourly.get("weathercode") or [None] * len(times)),
            relative_humidity=list(hourly.get("relativehumidity_2m") or []),
            wind_speed=list(hourly.get("windspeed_10m") or []),
        )


@dataclass
class PeriodSummary:
    """Representative values for one window; both None when no sample fell in it."""
    temperature: Optional[float] = None
    weathercode: Optional[int] = None

    def to_payload(self, language: str = DEFAULT_LANGUAGE) -> dict:
        """Return the reduced JSON shape sent to the client."""
        return {
            "temperature": self.temperature,
            "weathercode": self.weathercode,
            "description": (
                describe_weather_code(self.weathercode, language) if self.weathercode is not None else None
            ),
        }


def _local_hour(timestamp: str) -> int:
    """Hour of day of an upstream-localized ISO timestamp (no tz conversion)."""
    return dt.datetime.fromisoformat(timestamp).hour


def summarize_periods(
    series: HourlySeries,
    windows: Sequence[PeriodWindow] = PERIOD_WINDOWS,
) -> Dict[str, PeriodSummary]:
    """Summarize `series` into one PeriodSummary per window, keyed by window name."""
    buckets: Dict[str, List[int]] = {w.name: [] for w in windows}
    for i, timestamp in enumerate(series.time):
        hour = _local_hour(timestamp)
        for window in windows:
            if window.contains(hour):
                buckets[window.name].append(i)
                break

    out: Dict[str, PeriodSummary] = {}
    for window in windows:
        indices = buckets[window.name]
        if not indices:
            out[window.name] = PeriodSummary()
            continue
        # null samples (missing upstream data) are skipped; NaN is not null and still propagates
        temps = [series.temperature[i] for i in indices if series.temperature[i] is not None]
        codes = [series.weathercode[i] for i in indices if series.weathercode[i] is not None]
        out[window.name] = PeriodSummary(
            temperature=sum(temps) / len(temps) if temps else None,
            # first sample's code, not the most frequent one
            weathercode=codes[0] if codes else None,
        )

    logger.debug(
        "Summarized hourly series into periods",
        extra={"samples": len(series), "assigned": {name: len(idx) for name, idx in buckets.items()}},
    )
    return out
