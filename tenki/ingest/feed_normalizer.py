"""Normalize the JMA forecast feed into time-aligned weather records.

The feed is a JSON array of forecast groups. The first group's first time
series carries the slot axis (``timeDefines``) and the weather text
(``weathers``). Optional attributes such as wind, wave height, precipitation
probability and reliability may sit on that series or on any later one, and
each series has its own slot count. Optional arrays are read by position,
not by timestamp.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from tenki.models.common import TenkiError
from tenki.models.forecast import WeatherRecord

logger = logging.getLogger(__name__)

# Feed array name -> WeatherRecord field
OPTIONAL_ATTRIBUTES: dict[str, str] = {
    "winds": "wind",
    "waves": "wave",
    "pops": "precipitation_probability",
    "reliabilities": "reliability",
}


class MalformedFeedError(TenkiError):
    """Raised when the feed cannot be turned into a complete record list."""


@dataclass(frozen=True)
class AttributeSource:
    series_index: int
    values: list[Any]

    def value_at(self, index: int) -> str | None:
        if index >= len(self.values):
            return None
        value = self.values[index]
        if value is None or value == "":
            return None
        return str(value)


class AttributeLocator:
    """Lookup table from optional attribute name to the series that supplies it."""

    def __init__(self, sources: dict[str, AttributeSource]):
        self._sources = sources

    @classmethod
    def build(cls, series_list: list[Any]) -> "AttributeLocator":
        """Scan series in order; the first series defining an attribute wins."""
        sources: dict[str, AttributeSource] = {}
        for index, series in enumerate(series_list):
            area = _first_area(series)
            if area is None:
                continue
            for name in OPTIONAL_ATTRIBUTES:
                values = area.get(name)
                if not isinstance(values, list):
                    continue
                if name in sources:
                    logger.debug(
                        "Ignoring %s on series %d, already sourced from series %d",
                        name, index, sources[name].series_index,
                    )
                    continue
                sources[name] = AttributeSource(series_index=index, values=values)
        return cls(sources)

    def source_for(self, name: str) -> AttributeSource | None:
        return self._sources.get(name)

    def value(self, name: str, index: int) -> str | None:
        source = self._sources.get(name)
        if source is None:
            return None
        return source.value_at(index)

    def describe(self) -> dict[str, int]:
        return {name: s.series_index for name, s in self._sources.items()}


def normalize(raw_text: str, max_slots: int | None = None) -> list[WeatherRecord]:
    """Parse raw feed text into one WeatherRecord per primary-series slot.

    max_slots caps the number of records; None means every slot. Either
    the full record list is returned or MalformedFeedError is raised.
    """
    if max_slots is not None and max_slots < 0:
        raise ValueError(f"max_slots must be non-negative, got {max_slots}")

    try:
        feed = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise MalformedFeedError(f"Feed is not valid JSON: {e}") from e

    if not isinstance(feed, list):
        raise MalformedFeedError(
            f"Expected a top-level array, got {type(feed).__name__}"
        )
    if not feed:
        raise MalformedFeedError("Feed contains no forecast groups")

    group = feed[0]
    series_list = group.get("timeSeries") if isinstance(group, dict) else None
    if not isinstance(series_list, list) or not series_list:
        raise MalformedFeedError("Primary forecast group has no timeSeries")

    primary = series_list[0]
    time_defines = primary.get("timeDefines") if isinstance(primary, dict) else None
    if not isinstance(time_defines, list):
        raise MalformedFeedError("Primary series has no timeDefines array")

    area = _first_area(primary)
    weathers = area.get("weathers") if area is not None else None
    if not isinstance(weathers, list):
        raise MalformedFeedError("Primary series has no areas[0].weathers array")

    if len(weathers) < len(time_defines):
        raise MalformedFeedError(
            f"weathers has {len(weathers)} entries but timeDefines has "
            f"{len(time_defines)}"
        )

    locator = AttributeLocator.build(series_list)
    logger.debug("Attribute sources: %s", locator.describe())

    count = len(time_defines)
    if max_slots is not None:
        count = min(count, max_slots)

    records: list[WeatherRecord] = []
    for i in range(count):
        weather_text = weathers[i]
        if not isinstance(weather_text, str):
            raise MalformedFeedError(f"weathers[{i}] is not a string")

        optional = {
            field: locator.value(name, i)
            for name, field in OPTIONAL_ATTRIBUTES.items()
        }
        pop = optional["precipitation_probability"]
        if pop is not None:
            optional["precipitation_probability"] = f"{pop}%"

        records.append(
            WeatherRecord(
                timestamp=parse_timestamp(time_defines[i], i),
                weather_text=weather_text,
                **optional,
            )
        )
    return records


def parse_timestamp(value: Any, index: int = 0) -> datetime:
    """Parse an ISO 8601 slot timestamp such as 2024-05-01T11:00:00+09:00."""
    if not isinstance(value, str):
        raise MalformedFeedError(f"timeDefines[{index}] is not a string: {value!r}")
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    # fromisoformat also takes date-only values; a slot needs a time part
    if "T" not in text:
        raise MalformedFeedError(
            f"timeDefines[{index}] has no time part: {value!r}"
        )
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise MalformedFeedError(
            f"timeDefines[{index}] is not an ISO 8601 date-time: {value!r}"
        ) from e


def _first_area(series: Any) -> dict | None:
    if not isinstance(series, dict):
        return None
    areas = series.get("areas")
    if not isinstance(areas, list) or not areas:
        return None
    area = areas[0]
    return area if isinstance(area, dict) else None
