"""Typed models for the forecast reconciliation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .parsing import parse_timestamp

TEMPERATURE = "Temperature"
APPARENT_TEMPERATURE = "ApparentTemperature"
PROBABILITY_OF_PRECIPITATION = "ProbabilityOfPrecipitation"
MAX_TEMPERATURE = "MaxTemperature"
MIN_TEMPERATURE = "MinTemperature"

ELEMENT_SHORT_CODES: dict[str, str] = {
    "T": TEMPERATURE,
    "AT": APPARENT_TEMPERATURE,
    "PoP12h": PROBABILITY_OF_PRECIPITATION,
    "MaxT": MAX_TEMPERATURE,
    "MinT": MIN_TEMPERATURE,
}

SOURCE_TAG = "CWA F-D0047-093"
OUTPUT_NOTE = "values in °C and %, now derived from nearest hourly/3-hourly slot"
FORECAST_DAYS = 7


@dataclass(slots=True, frozen=True)
class ValueList:
    """``elementValue`` given as a list of value objects; holds each entry's raw ``value``."""

    entries: tuple[Any, ...]


@dataclass(slots=True, frozen=True)
class ValueObject:
    """``elementValue`` given as a single object with ``value`` and/or ``parameter``."""

    value: Any = None
    parameter: Any = None


ValuePayload = ValueList | ValueObject | None


def parse_value_payload(raw: Any) -> ValuePayload:
    """Classify a raw ``elementValue`` into one of the tolerated shapes."""
    if isinstance(raw, list):
        if not raw:
            return None
        return ValueList(
            entries=tuple(item.get("value") if isinstance(item, dict) else None for item in raw)
        )
    if isinstance(raw, dict):
        return ValueObject(value=raw.get("value"), parameter=raw.get("parameter"))
    return None


@dataclass(slots=True, frozen=True)
class TimePoint:
    """One observation (``data_time``) or window (``start_time``/``end_time``)."""

    data_time: datetime | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    payload: ValuePayload = None

    @classmethod
    def from_raw(cls, raw: Any) -> TimePoint:
        """Build a point from a raw ``time`` entry; malformed input yields an unusable point."""
        if not isinstance(raw, dict):
            return cls()
        return cls(
            data_time=parse_timestamp(raw.get("dataTime")),
            start_time=parse_timestamp(raw.get("startTime")),
            end_time=parse_timestamp(raw.get("endTime")),
            payload=parse_value_payload(raw.get("elementValue")),
        )

    @property
    def anchor(self) -> datetime | None:
        """Timestamp placing the point on the calendar: start, else instant, else end."""
        if self.start_time is not None:
            return self.start_time
        if self.data_time is not None:
            return self.data_time
        return self.end_time

    def contains(self, instant: datetime) -> bool:
        """Whether ``instant`` falls in the half-open window [start, end)."""
        if self.start_time is None or self.end_time is None:
            return False
        return self.start_time <= instant < self.end_time


@dataclass(slots=True)
class LocationRecord:
    """Identity fields plus canonical element series for one township."""

    town: str | None
    geocode: str | None = None
    county: str | None = None
    lat: float | None = None
    lon: float | None = None
    elements: dict[str, list[TimePoint]] = field(default_factory=dict)

    def series(self, key: str) -> list[TimePoint]:
        return self.elements.get(key, [])


class NowSnapshot(BaseModel):
    """Current-conditions values resolved against the run's reference instant."""

    model_config = ConfigDict(populate_by_name=True)

    temperature: float | None = Field(default=None, alias="T")
    apparent_temperature: float | None = Field(default=None, alias="AT")
    probability_of_precipitation: float | None = Field(default=None, alias="PoP")


class DaySummary(BaseModel):
    """One calendar day (UTC) of the outlook."""

    model_config = ConfigDict(populate_by_name=True)

    date: str
    max_temperature: float | None = Field(default=None, alias="maxT")
    min_temperature: float | None = Field(default=None, alias="minT")
    probability_of_precipitation: float | None = Field(default=None, alias="pop")


class LocationForecast(BaseModel):
    """Assembled per-location output record."""

    geocode: str | None = None
    county: str | None = None
    town: str | None = None
    lat: float | None = None
    lon: float | None = None
    now: NowSnapshot = Field(default_factory=NowSnapshot)
    days: list[DaySummary] = Field(default_factory=list)


class ForecastDocument(BaseModel):
    """Whole-run artifact handed to the persistence layer."""

    model_config = ConfigDict(populate_by_name=True)

    generated_at: str = Field(alias="generatedAt")
    source: str = SOURCE_TAG
    note: str = OUTPUT_NOTE
    locations: list[LocationForecast] = Field(default_factory=list)
