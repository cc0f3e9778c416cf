"""Element normalization: raw ``weatherElement`` entries to canonical series."""

from __future__ import annotations

from typing import Any

from .models import ELEMENT_SHORT_CODES


def canonical_element_key(name: Any) -> str:
    """Map a short code to its canonical key; other names pass through trimmed."""
    trimmed = name.strip() if isinstance(name, str) else ""
    return ELEMENT_SHORT_CODES.get(trimmed, trimmed)


def normalize_elements(weather_elements: Any) -> dict[str, list[Any]]:
    """Return ``{canonical key: raw time list}`` for a location's element list.

    Elements without a ``time`` list map to an empty list. Later entries with
    the same canonical key replace earlier ones.
    """
    if not isinstance(weather_elements, list):
        return {}
    element_map: dict[str, list[Any]] = {}
    for element in weather_elements:
        if not isinstance(element, dict):
            continue
        key = canonical_element_key(element.get("elementName"))
        times = element.get("time")
        element_map[key] = list(times) if isinstance(times, list) else []
    return element_map
