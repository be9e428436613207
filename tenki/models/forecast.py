"""Normalized forecast data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class WeatherCategory(StrEnum):
    CLEAR = "clear"
    RAIN = "rain"
    CLOUDY = "cloudy"
    SNOW = "snow"
    UNKNOWN = "unknown"


class SlotCap(StrEnum):
    ALL = "all"
    WEEKLY = "weekly"
    SHORT = "short"


@dataclass(frozen=True)
class WeatherRecord:
    timestamp: datetime
    weather_text: str
    wind: str | None = None
    wave: str | None = None
    precipitation_probability: str | None = None  # e.g. "40%"
    reliability: str | None = None
