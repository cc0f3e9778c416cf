"""Element normalization and value extraction tests."""

from __future__ import annotations

from typing import Any

import pytest

from tw_forecast.engine.elements import canonical_element_key, normalize_elements
from tw_forecast.engine.models import TimePoint, ValueList, ValueObject, parse_value_payload
from tw_forecast.engine.values import extract_value


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("T", "Temperature"),
        (" AT ", "ApparentTemperature"),
        ("PoP12h", "ProbabilityOfPrecipitation"),
        ("MaxT", "MaxTemperature"),
        ("MinT", "MinTemperature"),
        ("MaxTemperature", "MaxTemperature"),
        ("  WeatherDescription ", "WeatherDescription"),
        (None, ""),
    ],
)
def test_canonical_element_key(raw: Any, expected: str) -> None:
    assert canonical_element_key(raw) == expected


def test_normalize_elements_defaults_missing_time_lists() -> None:
    element_map = normalize_elements(
        [
            {"elementName": "T", "time": [{"dataTime": "2025-08-18T10:00:00+08:00"}]},
            {"elementName": "MinT"},
            {"elementName": "UVI", "time": None},
            "garbage",
        ]
    )
    assert list(element_map) == ["Temperature", "MinTemperature", "UVI"]
    assert len(element_map["Temperature"]) == 1
    assert element_map["MinTemperature"] == []
    assert element_map["UVI"] == []


def test_normalize_elements_tolerates_non_list_input() -> None:
    assert normalize_elements(None) == {}
    assert normalize_elements({"elementName": "T"}) == {}


def test_parse_value_payload_shapes() -> None:
    assert parse_value_payload([{"value": "30", "measures": "C"}]) == ValueList(entries=("30",))
    assert parse_value_payload({"parameter": "4"}) == ValueObject(value=None, parameter="4")
    assert parse_value_payload([]) is None
    assert parse_value_payload("30") is None


@pytest.mark.parametrize(
    ("element_value", "expected"),
    [
        ([{"value": "30"}, {"value": "99"}], 30.0),
        ([{"measures": "C"}], None),
        (["30"], None),
        ({"value": "12"}, 12.0),
        ({"parameter": "7"}, 7.0),
        ({"value": "5", "parameter": "7"}, 5.0),
        ({"value": ""}, None),
        ({}, None),
        ([], None),
        (None, None),
        ("30", None),
    ],
)
def test_extract_value_is_total(element_value: Any, expected: float | None) -> None:
    point = TimePoint.from_raw({"dataTime": "2025-08-18T10:00:00Z", "elementValue": element_value})
    assert extract_value(point) == expected


def test_extract_value_of_absent_point_is_none() -> None:
    assert extract_value(None) is None
    assert extract_value(TimePoint.from_raw("garbage")) is None
