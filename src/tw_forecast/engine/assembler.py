"""Per-location assembly of the now snapshot and day series."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from .daily import daily_first_values, daily_max_values, merge_day_series
from .elements import normalize_elements
from .models import (
    APPARENT_TEMPERATURE,
    FORECAST_DAYS,
    MAX_TEMPERATURE,
    MIN_TEMPERATURE,
    PROBABILITY_OF_PRECIPITATION,
    TEMPERATURE,
    ForecastDocument,
    LocationForecast,
    LocationRecord,
    NowSnapshot,
    TimePoint,
)
from .parsing import first_present, parse_number
from .selection import current_probability, nearest_instant
from .values import extract_value


def resolve_location_entries(payload: Any) -> tuple[list[Any], str | None]:
    """Return the raw location entries and the group-level county name.

    Reads ``records.locations[0].location`` and falls back to the older
    ``records.location`` layout. Anything else yields no locations.
    """
    records = payload.get("records") if isinstance(payload, dict) else None
    if not isinstance(records, dict):
        return [], None

    group: dict[str, Any] | None = None
    groups = records.get("locations")
    if isinstance(groups, list) and groups and isinstance(groups[0], dict):
        group = groups[0]

    group_county = _as_str(group.get("locationsName")) if group else None
    entries = group.get("location") if group else None
    if not entries:
        entries = records.get("location")
    if not isinstance(entries, list):
        return [], group_county
    return entries, group_county


def resolve_county(raw: dict[str, Any], group_county: str | None) -> str | None:
    """County name: group-level name, else the first ``parameter`` value, else ``None``."""
    if group_county:
        return group_county
    parameters = raw.get("parameter")
    if isinstance(parameters, list) and parameters and isinstance(parameters[0], dict):
        return _as_str(parameters[0].get("parameterValue"))
    return None


def parse_location_record(raw: Any, group_county: str | None = None) -> LocationRecord:
    """Parse one raw location entry into a ``LocationRecord``."""
    if not isinstance(raw, dict):
        return LocationRecord(town=None, county=group_county)

    raw_elements = normalize_elements(first_present(raw, "weatherElement", "WeatherElement"))
    elements = {
        key: [TimePoint.from_raw(item) for item in times] for key, times in raw_elements.items()
    }
    return LocationRecord(
        town=_as_str(raw.get("locationName")),
        geocode=_as_str(first_present(raw, "geocode", "Geocode")),
        county=resolve_county(raw, group_county),
        lat=parse_number(first_present(raw, "latitude", "Latitude")),
        lon=parse_number(first_present(raw, "longitude", "Longitude")),
        elements=elements,
    )


class LocationAssembler:
    """Reduce location records against a single shared reference instant."""

    def __init__(
        self,
        now: datetime,
        days: int = FORECAST_DAYS,
        logger: logging.Logger | None = None,
    ) -> None:
        self.now = now.astimezone(UTC) if now.tzinfo else now.replace(tzinfo=UTC)
        self.days = days
        self.logger = logger or logging.getLogger("tw_forecast.engine.assembler")

    def now_snapshot(self, record: LocationRecord) -> NowSnapshot:
        return NowSnapshot(
            temperature=extract_value(nearest_instant(record.series(TEMPERATURE), self.now)),
            apparent_temperature=extract_value(
                nearest_instant(record.series(APPARENT_TEMPERATURE), self.now)
            ),
            probability_of_precipitation=current_probability(
                record.series(PROBABILITY_OF_PRECIPITATION), self.now
            ),
        )

    def assemble(self, record: LocationRecord) -> LocationForecast:
        """Build the output record for one location."""
        days = merge_day_series(
            daily_first_values(record.series(MAX_TEMPERATURE)),
            daily_first_values(record.series(MIN_TEMPERATURE)),
            daily_max_values(record.series(PROBABILITY_OF_PRECIPITATION)),
            limit=self.days,
        )
        self.logger.debug(
            "Assembled %s: elements=%s days=%d",
            record.town,
            sorted(record.elements),
            len(days),
        )
        return LocationForecast(
            geocode=record.geocode,
            county=record.county,
            town=record.town,
            lat=record.lat,
            lon=record.lon,
            now=self.now_snapshot(record),
            days=days,
        )


def format_generated_at(now: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    utc_now = now.astimezone(UTC) if now.tzinfo else now.replace(tzinfo=UTC)
    return utc_now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_document(
    payload: Any,
    now: datetime,
    days: int = FORECAST_DAYS,
    logger: logging.Logger | None = None,
) -> ForecastDocument:
    """Reduce a raw dataset payload to the output document, preserving source order."""
    logger = logger or logging.getLogger("tw_forecast.engine.assembler")
    entries, group_county = resolve_location_entries(payload)
    if not entries:
        logger.warning("Dataset contained no resolvable location entries.")

    assembler = LocationAssembler(now=now, days=days, logger=logger)
    locations = [
        assembler.assemble(parse_location_record(entry, group_county)) for entry in entries
    ]
    return ForecastDocument(generated_at=format_generated_at(now), locations=locations)


def _as_str(value: Any) -> str | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
