"""Typed settings loader for the township forecast builder."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AnyUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    cwa_key: str = Field(alias="CWA_KEY", repr=False)
    cwa_api_base_url: AnyUrl = Field(
        default="https://opendata.cwa.gov.tw/api/v1/rest/datastore",
        alias="CWA_API_BASE_URL",
    )
    cwa_dataset_id: str = Field(default="F-D0047-093", alias="CWA_DATASET_ID")
    cwa_timeout_seconds: float = Field(default=30.0, alias="CWA_TIMEOUT_SECONDS")
    cwa_max_retries: int = Field(default=0, alias="CWA_MAX_RETRIES")
    cwa_retry_delay_seconds: float = Field(default=1.0, alias="CWA_RETRY_DELAY_SECONDS")

    forecast_output_path: Path = Field(
        default=Path("./tw-forecast.min.json"),
        alias="FORECAST_OUTPUT_PATH",
    )
    forecast_days: int = Field(default=7, alias="FORECAST_DAYS")
    forecast_max_print: int = Field(default=5, alias="FORECAST_MAX_PRINT")
    forecast_journal_raw_payloads: bool = Field(
        default=False,
        alias="FORECAST_JOURNAL_RAW_PAYLOADS",
    )

    journal_dir: Path = Field(default=Path("./data/journal"), alias="JOURNAL_DIR")
    raw_payload_dir: Path = Field(default=Path("./data/raw"), alias="RAW_PAYLOAD_DIR")

    @field_validator("cwa_key", mode="before")
    @classmethod
    def strip_key(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("cwa_dataset_id", mode="before")
    @classmethod
    def empty_dataset_to_default(cls, value: Any) -> Any:
        """Treat an empty env-string dataset id as unset."""
        if isinstance(value, str) and value.strip() == "":
            return "F-D0047-093"
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        """Validate credential presence and numeric ranges."""
        if not self.cwa_key:
            raise ValueError("CWA_KEY must not be empty.")
        if "/" in self.cwa_dataset_id.strip("/"):
            raise ValueError("CWA_DATASET_ID must be a single path segment.")
        if self.cwa_timeout_seconds <= 0:
            raise ValueError("CWA_TIMEOUT_SECONDS must be > 0.")
        if self.cwa_max_retries < 0:
            raise ValueError("CWA_MAX_RETRIES must be >= 0.")
        if self.cwa_retry_delay_seconds < 0:
            raise ValueError("CWA_RETRY_DELAY_SECONDS must be >= 0.")
        if not (1 <= self.forecast_days <= 14):
            raise ValueError("FORECAST_DAYS must be between 1 and 14.")
        if self.forecast_max_print <= 0:
            raise ValueError("FORECAST_MAX_PRINT must be > 0.")
        return self

    @property
    def dataset_url(self) -> str:
        base = str(self.cwa_api_base_url).rstrip("/")
        return f"{base}/{self.cwa_dataset_id.strip('/')}"

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for journaling (no credentials)."""
        return {
            "dataset_url": self.dataset_url,
            "timeout_seconds": self.cwa_timeout_seconds,
            "max_retries": self.cwa_max_retries,
            "output_path": str(self.forecast_output_path),
            "forecast_days": self.forecast_days,
            "raw_journaling": self.forecast_journal_raw_payloads,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc

    settings.journal_dir.mkdir(parents=True, exist_ok=True)
    settings.raw_payload_dir.mkdir(parents=True, exist_ok=True)
    return settings
