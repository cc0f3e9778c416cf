"""Numeric value extraction from a single time point."""

from __future__ import annotations

from .models import TimePoint, ValueList, ValueObject
from .parsing import parse_number


def extract_value(point: TimePoint | None) -> float | None:
    """Return the point's numeric value, or ``None`` when absent or unparseable.

    A value list yields its first entry's ``value``; a value object yields
    ``value``, falling back to ``parameter``.
    """
    if point is None:
        return None
    payload = point.payload
    if isinstance(payload, ValueList):
        return parse_number(payload.entries[0]) if payload.entries else None
    if isinstance(payload, ValueObject):
        raw = payload.value if payload.value is not None else payload.parameter
        return parse_number(raw)
    return None
