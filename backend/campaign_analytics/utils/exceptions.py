"""
Custom exception classes for the campaign analytics service.

Routers translate these into HTTP responses; the services raise them
without knowing about HTTP.
"""
from typing import List


class CampaignAnalyticsError(Exception):
    """Base exception for all campaign analytics errors."""
    pass


# =============================================================================
# Upload Errors
# =============================================================================

class UploadError(CampaignAnalyticsError):
    """Base exception for rejected uploads."""
    pass


class InvalidFileTypeError(UploadError):
    """Raised when the uploaded file is not a CSV file."""

    def __init__(self, message: str = "Only CSV files are allowed"):
        super().__init__(message)


class FileTooLargeError(UploadError):
    """Raised when the uploaded file exceeds the configured size limit."""

    def __init__(self, max_size_mb: int):
        self.max_size_mb = max_size_mb
        super().__init__(f"File too large. Maximum size is {max_size_mb}MB")


# =============================================================================
# CSV Errors
# =============================================================================

class CSVParseError(CampaignAnalyticsError):
    """Raised when a CSV file cannot be read."""
    pass


class EmptyCampaignError(CampaignAnalyticsError):
    """Raised when a CSV file has no data rows."""

    def __init__(self, message: str = "CSV file is empty"):
        super().__init__(message)


class MissingFieldsError(CampaignAnalyticsError):
    """Raised when required columns are absent from a CSV header."""

    def __init__(self, missing: List[str], available: List[str]):
        self.missing = list(missing)
        self.available = list(available)
        super().__init__(
            f"Missing required fields: {', '.join(self.missing)}. "
            f"Available fields: {', '.join(self.available)}"
        )
