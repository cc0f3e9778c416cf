"""Time-based selection of the "current" point of a series."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from .models import TimePoint
from .values import extract_value


def nearest_instant(points: Iterable[TimePoint], now: datetime) -> TimePoint | None:
    """Return the point whose ``data_time`` is closest to ``now``.

    Points without an instant are skipped. On equal distance the earlier
    point in input order wins.
    """
    best: TimePoint | None = None
    best_diff: float | None = None
    for point in points:
        if point.data_time is None:
            continue
        diff = abs((point.data_time - now).total_seconds())
        if best_diff is None or diff < best_diff:
            best = point
            best_diff = diff
    return best


def current_probability(points: list[TimePoint], now: datetime) -> float | None:
    """Resolve the precipitation probability in effect at ``now``.

    Tries the nearest instant-bearing point first, then the first window
    containing ``now``.
    """
    instants = [point for point in points if point.data_time is not None]
    if instants:
        value = extract_value(nearest_instant(instants, now))
        if value is not None:
            return value

    for point in points:
        if point.contains(now):
            return extract_value(point)
    return None
