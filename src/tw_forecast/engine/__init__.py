"""Temporal reconciliation engine for township forecast datasets."""

from .assembler import (
    LocationAssembler,
    build_document,
    parse_location_record,
    resolve_location_entries,
)
from .daily import daily_first_values, daily_max_values, merge_day_series
from .elements import canonical_element_key, normalize_elements
from .models import (
    DaySummary,
    ForecastDocument,
    LocationForecast,
    LocationRecord,
    NowSnapshot,
    TimePoint,
    ValueList,
    ValueObject,
)
from .selection import current_probability, nearest_instant
from .values import extract_value

__all__ = [
    "DaySummary",
    "ForecastDocument",
    "LocationAssembler",
    "LocationForecast",
    "LocationRecord",
    "NowSnapshot",
    "TimePoint",
    "ValueList",
    "ValueObject",
    "build_document",
    "canonical_element_key",
    "current_probability",
    "daily_first_values",
    "daily_max_values",
    "extract_value",
    "merge_day_series",
    "nearest_instant",
    "normalize_elements",
    "parse_location_record",
    "resolve_location_entries",
]
