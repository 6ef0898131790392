"""Error classes for LinkedIn Profile Extractor."""

from datetime import datetime
from typing import Any, Optional


class ExtractorError(Exception):
    """Base error for extraction operations."""

    def __init__(
        self,
        error_type: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize extractor error."""
        self.error_type = error_type
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now()
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of error."""
        return f"[{self.error_type}] {self.message}"


class ConfigError(ExtractorError):
    """Configuration error."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize config error."""
        super().__init__("config", message, details)


class SurfaceError(ExtractorError):
    """Unrecoverable failure of the rendered surface.

    Raised for navigation failures, a dead browser or a detached context.
    Extraction code never catches it: the whole profile extraction aborts.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize surface error."""
        super().__init__("surface", message, details)
