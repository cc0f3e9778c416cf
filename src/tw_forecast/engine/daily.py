"""Per-calendar-day reduction of element series and the day-series merge."""

from __future__ import annotations

from datetime import UTC

from .models import FORECAST_DAYS, DaySummary, TimePoint
from .values import extract_value


def _date_key(point: TimePoint) -> str | None:
    anchor = point.anchor
    if anchor is None:
        return None
    return anchor.astimezone(UTC).strftime("%Y-%m-%d")


def _anchored(points: list[TimePoint]) -> list[tuple[str, TimePoint]]:
    # sorted() is stable, so equal anchors keep input order.
    usable = [point for point in points if point.anchor is not None]
    ordered = sorted(usable, key=lambda point: point.anchor)
    return [(_date_key(point), point) for point in ordered]


def daily_first_values(points: list[TimePoint]) -> dict[str, float | None]:
    """Map each UTC date to the value of its earliest-anchored point.

    Later points on the same date are ignored. A ``None`` value on the first
    point is kept as-is.
    """
    daily: dict[str, float | None] = {}
    for key, point in _anchored(points):
        if key not in daily:
            daily[key] = extract_value(point)
    return daily


def daily_max_values(points: list[TimePoint]) -> dict[str, float]:
    """Map each UTC date to the maximum valid value anchored on it.

    Dates with no valid values are left out.
    """
    daily: dict[str, float] = {}
    for point in points:
        key = _date_key(point)
        if key is None:
            continue
        value = extract_value(point)
        if value is None:
            continue
        current = daily.get(key)
        daily[key] = value if current is None else max(current, value)
    return daily


def merge_day_series(
    max_map: dict[str, float | None],
    min_map: dict[str, float | None],
    pop_map: dict[str, float],
    limit: int = FORECAST_DAYS,
) -> list[DaySummary]:
    """Build the ascending day series from the max/min maps, truncated to ``limit``.

    Dates known only to ``pop_map`` are not included.
    """
    dates = sorted(set(max_map) | set(min_map))[:limit]
    return [
        DaySummary(
            date=date,
            max_temperature=max_map.get(date),
            min_temperature=min_map.get(date),
            probability_of_precipitation=pop_map.get(date),
        )
        for date in dates
    ]
