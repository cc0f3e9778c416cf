"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class ForecastRetrievalError(Exception):
    """Raised when the forecast dataset cannot be fetched or is not a JSON object."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ArtifactWriteError(Exception):
    """Raised when the output artifact cannot be written."""


class JournalError(Exception):
    """Raised when writing to journal files fails."""
