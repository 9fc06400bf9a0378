"""Custom exceptions for punch_ingestor."""

from __future__ import annotations


class PunchIngestorError(Exception):
    """Base exception for all punch_ingestor errors."""

    pass


class InputRejectedError(PunchIngestorError):
    """Raised when a request is rejected before any parsing happens."""

    pass


class MissingFieldError(InputRejectedError):
    """Raised when required request fields are absent or empty."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__("text_content and organization_id are required")
        self.fields = fields


class PayloadTooLargeError(InputRejectedError):
    """Raised when the submitted text exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"File content too large ({size} characters, max {limit})"
        )
        self.size = size
        self.limit = limit


class ConfigurationError(PunchIngestorError):
    """Raised when configuration is invalid or missing."""

    pass


class ExtractorNotFoundError(PunchIngestorError):
    """Raised when a requested extractor format is not registered."""

    pass

