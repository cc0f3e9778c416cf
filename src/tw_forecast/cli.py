"""Build the township forecast artifact from the CWA dataset."""

from __future__ import annotations

import argparse
import sys
import uuid
from datetime import UTC, datetime
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .config import load_settings
from .cwa.client import CWAForecastClient
from .engine.assembler import build_document
from .engine.models import ForecastDocument
from .exceptions import ArtifactWriteError, ConfigError, ForecastRetrievalError, JournalError
from .journal import JournalWriter
from .log_setup import setup_logger
from .output import write_artifact


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse optional CLI overrides."""
    parser = argparse.ArgumentParser(
        description="Reduce the CWA township forecast dataset to a compact 7-day artifact."
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Override FORECAST_OUTPUT_PATH.",
    )
    parser.add_argument(
        "--max-print",
        type=int,
        default=None,
        help="Number of locations to show in the console summary.",
    )
    return parser.parse_args(argv)


def _fmt(value: float | None) -> str:
    return f"{value:g}" if value is not None else "-"


def _print_document_summary(console: Console, document: ForecastDocument, max_print: int) -> None:
    console.print(
        f"Source={document.source} generatedAt={document.generated_at} "
        f"locations={len(document.locations)}"
    )
    if not document.locations:
        console.print("No locations found in dataset.")
        return

    table = Table(title="Township Forecast")
    table.add_column("Town", overflow="fold")
    table.add_column("County", overflow="fold")
    table.add_column("T")
    table.add_column("AT")
    table.add_column("PoP")
    table.add_column("First Day")
    table.add_column("Max/Min")
    table.add_column("Day PoP")

    for location in document.locations[:max_print]:
        first = location.days[0] if location.days else None
        table.add_row(
            location.town or "-",
            location.county or "-",
            _fmt(location.now.temperature),
            _fmt(location.now.apparent_temperature),
            _fmt(location.now.probability_of_precipitation),
            first.date if first else "-",
            f"{_fmt(first.max_temperature)}/{_fmt(first.min_temperature)}" if first else "-",
            _fmt(first.probability_of_precipitation) if first else "-",
        )
    console.print(table)


def main(argv: list[str] | None = None) -> int:
    """Run one fetch → reduce → write cycle."""
    args = parse_args(argv)
    logger = setup_logger()
    console = Console()
    session_id = uuid.uuid4().hex[:12]
    journal: JournalWriter | None = None

    if args.max_print is not None and args.max_print <= 0:
        logger.error("--max-print must be > 0 when provided.")
        return 2

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2

    try:
        journal = JournalWriter(
            journal_dir=settings.journal_dir,
            raw_payload_dir=settings.raw_payload_dir,
            session_id=session_id,
        )
        journal.write_event(
            event_type="forecast_startup",
            payload=settings.safe_summary(),
            metadata={"session_id": session_id},
        )
    except JournalError as exc:
        logger.error("Failed to initialize journal: %s", exc)
        return 3

    output_path = args.output or settings.forecast_output_path
    exit_code = 0
    try:
        now = datetime.now(UTC)
        with CWAForecastClient(settings=settings, logger=logger) as client:
            payload = client.fetch_dataset()
        journal.write_event(
            "forecast_fetch_success",
            payload={"dataset_id": settings.cwa_dataset_id},
            metadata={"session_id": session_id},
        )

        if settings.forecast_journal_raw_payloads:
            raw_path = journal.write_raw_snapshot(settings.cwa_dataset_id, payload)
            journal.write_event(
                "forecast_raw_snapshot",
                payload={"path": str(raw_path)},
                metadata={"session_id": session_id},
            )

        document = build_document(payload, now=now, days=settings.forecast_days, logger=logger)
        written = write_artifact(document, output_path)
        journal.write_event(
            "forecast_artifact_written",
            payload={
                "path": str(written),
                "location_count": len(document.locations),
                "generated_at": document.generated_at,
            },
            metadata={"session_id": session_id},
        )
        logger.info("%s generated: %d locations", written, len(document.locations))

        max_print = args.max_print or settings.forecast_max_print
        _print_document_summary(console, document=document, max_print=max_print)
    except (ForecastRetrievalError, JournalError, ArtifactWriteError) as exc:
        exit_code = 5 if isinstance(exc, ArtifactWriteError) else 4
        logger.error("Forecast build failure: %s", exc)
        try:
            journal.write_event(
                "forecast_run_failure",
                payload={"error": str(exc), "type": type(exc).__name__},
                metadata={"session_id": session_id},
            )
        except JournalError:
            logger.error("Failed to write forecast_run_failure event.")
    except Exception as exc:  # pragma: no cover - defensive catch for CLI runtime
        exit_code = 99
        logger.exception("Unexpected forecast build failure: %s", exc)
        try:
            journal.write_event(
                "forecast_run_failure_unhandled",
                payload={"error": str(exc), "type": type(exc).__name__},
                metadata={"session_id": session_id},
            )
        except JournalError:
            logger.error("Failed to write forecast_run_failure_unhandled event.")
    finally:
        if journal is not None:
            try:
                journal.write_event(
                    "forecast_shutdown",
                    payload={"exit_code": exit_code},
                    metadata={"session_id": session_id},
                )
            except JournalError:
                logger.error("Failed to write forecast_shutdown event.")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
