"""Shared fixtures for forecast builder tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

NOW = datetime(2025, 8, 18, 4, 30, tzinfo=UTC)


def iso(moment: datetime) -> str:
    return moment.isoformat()


def instant(moment: datetime, value: Any) -> dict[str, Any]:
    return {"dataTime": iso(moment), "elementValue": [{"value": value}]}


def window(start: datetime, hours: int, value: Any) -> dict[str, Any]:
    return {
        "startTime": iso(start),
        "endTime": iso(start + timedelta(hours=hours)),
        "elementValue": [{"value": value}],
    }


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def location_entry() -> dict[str, Any]:
    day1 = datetime(2025, 8, 18, 0, 0, tzinfo=UTC)
    day2 = datetime(2025, 8, 19, 0, 0, tzinfo=UTC)
    return {
        "locationName": "板橋區",
        "geocode": "65000010",
        "latitude": "25.012",
        "longitude": "121.465",
        "weatherElement": [
            {
                "elementName": "T",
                "time": [
                    instant(NOW - timedelta(minutes=5), "28"),
                    instant(NOW + timedelta(minutes=50), "30"),
                ],
            },
            {
                "elementName": "AT",
                "time": [instant(NOW + timedelta(hours=1), "33")],
            },
            {
                "elementName": "PoP12h",
                "time": [
                    window(day1, 12, "20"),
                    window(day1 + timedelta(hours=12), 12, "70"),
                    window(day2, 12, "10"),
                ],
            },
            {
                "elementName": "MaxT",
                "time": [window(day1, 12, "35"), window(day2, 12, "34")],
            },
            {
                "elementName": "MinT",
                "time": [window(day1, 12, "27"), window(day2, 12, "26")],
            },
        ],
    }


@pytest.fixture
def dataset(location_entry: dict[str, Any]) -> dict[str, Any]:
    return {
        "success": "true",
        "records": {
            "locations": [
                {
                    "locationsName": "新北市",
                    "location": [location_entry, {"locationName": "烏來區"}],
                }
            ]
        },
    }
