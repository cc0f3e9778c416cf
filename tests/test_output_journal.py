"""Artifact writer, journal, redaction and logging tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from tw_forecast.engine.models import DaySummary, ForecastDocument, LocationForecast, NowSnapshot
from tw_forecast.exceptions import ArtifactWriteError
from tw_forecast.journal import JournalWriter
from tw_forecast.log_setup import JsonConsoleFormatter
from tw_forecast.output import write_artifact
from tw_forecast.redaction import REDACTED, sanitize_for_logging, sanitize_text


def _document() -> ForecastDocument:
    return ForecastDocument(
        generated_at="2025-08-18T04:30:00.000Z",
        locations=[
            LocationForecast(
                geocode="65000010",
                county="新北市",
                town="板橋區",
                lat=25.012,
                lon=121.465,
                now=NowSnapshot(temperature=28, apparent_temperature=33),
                days=[DaySummary(date="2025-08-18", max_temperature=35, min_temperature=27)],
            )
        ],
    )


def test_write_artifact_uses_published_keys(tmp_path: Path) -> None:
    target = tmp_path / "out" / "tw-forecast.min.json"
    written = write_artifact(_document(), target)

    raw = written.read_text(encoding="utf-8")
    assert "板橋區" in raw
    assert "\n" not in raw
    payload = json.loads(raw)
    assert payload["generatedAt"] == "2025-08-18T04:30:00.000Z"
    assert payload["source"] == "CWA F-D0047-093"
    assert payload["locations"][0]["now"] == {"T": 28.0, "AT": 33.0, "PoP": None}
    assert payload["locations"][0]["days"] == [
        {"date": "2025-08-18", "maxT": 35.0, "minT": 27.0, "pop": None}
    ]
    assert [p.name for p in target.parent.iterdir()] == ["tw-forecast.min.json"]


def test_write_artifact_failure_leaves_target_untouched(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(ArtifactWriteError):
        write_artifact(_document(), blocker / "tw-forecast.min.json")
    assert blocker.read_text(encoding="utf-8") == "x"


def test_journal_writes_redacted_events(tmp_path: Path) -> None:
    journal = JournalWriter(tmp_path / "journal", tmp_path / "raw", session_id="testsession")
    journal.write_event(
        "forecast_startup",
        payload={"cwa_key": "CWA-SECRET-123", "url": "https://x/?Authorization=CWA-SECRET-123"},
    )

    lines = journal.events_path.read_text(encoding="utf-8").splitlines()
    record = json.loads(lines[-1])
    assert record["event_type"] == "forecast_startup"
    assert record["session_id"] == "testsession"
    assert record["payload"]["cwa_key"] == REDACTED
    assert "CWA-SECRET-123" not in lines[-1]


def test_journal_raw_snapshot(tmp_path: Path) -> None:
    journal = JournalWriter(tmp_path / "journal", tmp_path / "raw", session_id="s1")
    path = journal.write_raw_snapshot("F-D0047-093", {"records": {"location": []}})
    assert path.parent == tmp_path / "raw"
    assert json.loads(path.read_text(encoding="utf-8")) == {"records": {"location": []}}


def test_sanitize_text_redacts_query_parameter() -> None:
    text = "GET https://host/api?Authorization=CWA-1234&format=JSON failed"
    sanitized = sanitize_text(text)
    assert "CWA-1234" not in sanitized
    assert "format=JSON" in sanitized


def test_sanitize_for_logging_nested() -> None:
    value: Any = {"outer": [{"api_key": "k"}, ("token=abc",)]}
    sanitized = sanitize_for_logging(value)
    assert sanitized["outer"][0]["api_key"] == REDACTED
    assert "abc" not in sanitized["outer"][1][0]


def test_json_console_formatter_redacts_message() -> None:
    record = logging.LogRecord(
        "tw_forecast", logging.ERROR, __file__, 1, "failed: Authorization=%s", ("s3cr3t",), None
    )
    event = json.loads(JsonConsoleFormatter().format(record))
    assert event["level"] == "ERROR"
    assert "s3cr3t" not in event["message"]
