"""Forecast dataset retrieval."""

from .base import ForecastSource
from .client import CWAForecastClient

__all__ = ["CWAForecastClient", "ForecastSource"]
