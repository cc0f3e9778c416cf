"""Source-agnostic forecast dataset interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ForecastSource(ABC):
    """Base contract for collaborators that fetch the raw forecast dataset."""

    @abstractmethod
    def fetch_dataset(self) -> dict[str, Any]:
        """Fetch the raw dataset document."""

    @abstractmethod
    def close(self) -> None:
        """Release source resources."""
