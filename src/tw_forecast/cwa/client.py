"""CWA open-data datastore client."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from ..config import Settings
from ..exceptions import ForecastRetrievalError
from ..redaction import sanitize_text
from .base import ForecastSource


class CWAForecastClient(ForecastSource):
    """Fetches the township forecast dataset from the CWA datastore API."""

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        max_retries: int | None = None,
        retry_delay_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._max_retries = settings.cwa_max_retries if max_retries is None else max_retries
        self._retry_delay = (
            settings.cwa_retry_delay_seconds
            if retry_delay_seconds is None
            else retry_delay_seconds
        )
        self._client = httpx.Client(
            timeout=settings.cwa_timeout_seconds,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def __enter__(self) -> CWAForecastClient:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch_dataset(self) -> dict[str, Any]:
        """Fetch the dataset document configured in settings."""
        url = self.settings.dataset_url
        params = {"Authorization": self.settings.cwa_key, "format": "JSON"}
        payload = self._request_json(url, params=params)
        self.logger.info("Fetched CWA dataset %s", self.settings.cwa_dataset_id)
        return payload

    def _request_json(self, url: str, params: dict[str, str]) -> dict[str, Any]:
        last_error: Exception | None = None
        for attempt in range(self._max_retries + 1):
            try:
                response = self._client.get(url, params=params)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                # Client errors other than rate-limiting are not retried.
                if 400 <= status < 500 and status != 429:
                    raise ForecastRetrievalError(
                        f"CWA dataset fetch failed with status {status} "
                        f"at {url}: {sanitize_text(exc.response.text[:300])}",
                        status_code=status,
                    ) from exc
                last_error = exc
                if attempt < self._max_retries:
                    self.logger.warning("CWA dataset fetch failed (HTTP %d); retrying", status)
                    time.sleep(self._retry_delay)
                    continue
                raise ForecastRetrievalError(
                    f"CWA dataset fetch failed with status {status} "
                    f"at {url}: {sanitize_text(exc.response.text[:300])}",
                    status_code=status,
                ) from exc
            except httpx.HTTPError as exc:
                last_error = exc
                if attempt < self._max_retries:
                    self.logger.warning(
                        "CWA dataset request failed (%s); retrying", type(exc).__name__
                    )
                    time.sleep(self._retry_delay)
                    continue
                raise ForecastRetrievalError(
                    f"CWA dataset request failed at {url}: {sanitize_text(str(exc))}"
                ) from exc

            try:
                payload = response.json()
            except ValueError as exc:
                raise ForecastRetrievalError(
                    f"CWA dataset returned non-JSON response at {url}."
                ) from exc

            if not isinstance(payload, dict):
                raise ForecastRetrievalError(
                    f"CWA dataset returned unexpected payload type "
                    f"{type(payload).__name__} at {url}."
                )
            return payload

        raise ForecastRetrievalError(f"CWA dataset fetch failed after retries: {last_error}")
