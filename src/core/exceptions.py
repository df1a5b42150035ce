"""
Exception hierarchy for Clairvz application.

Provides a standardized exception hierarchy for consistent error handling
across the application. All exceptions inherit from ClairvzException.

Listing failures (TransportError, ReadError, ListingEmptyError and a
StatusError raised for the listing) are fatal to a run. ScannerError
subclasses, TransportError and ReadError raised while talking to Clair are
recovered per template by the orchestrator.
"""

from typing import Optional


class ClairvzException(Exception):
    """Base exception for all Clairvz errors."""
    pass


class ValidationException(ClairvzException):
    """Input validation failed."""

    def __init__(self, message: str, field: str = None):
        """
        Initialize validation exception.

        Args:
            message: Validation error message
            field: Field that failed validation (optional)
        """
        self.field = field
        if field:
            super().__init__(f"Validation failed for {field}: {message}")
        else:
            super().__init__(f"Validation failed: {message}")


class OutputException(ClairvzException):
    """Output generation failed."""

    def __init__(self, format_type: str, reason: str):
        """
        Initialize output exception.

        Args:
            format_type: Output format (json, xlsx, etc.)
            reason: Reason for failure
        """
        self.format_type = format_type
        self.reason = reason
        super().__init__(f"Failed to generate {format_type} output: {reason}")


class TransportError(ClairvzException):
    """Connection, DNS or timeout failure before a response was received."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Request to {url} failed: {reason}")


class ReadError(ClairvzException):
    """Response body could not be read completely."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Cannot read response body from {url}: {reason}")


class ListingEmptyError(ClairvzException):
    """Mirror listing contained no template entries."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Listing at {url} contains no templates")


class ScannerError(ClairvzException):
    """A Clair API operation failed."""

    def __init__(self, operation: str, reason: str, template: Optional[str] = None):
        """
        Initialize scanner error.

        Args:
            operation: Operation that failed ("register", "lookup", "listing")
            reason: Reason for failure
            template: Template the operation was about (optional)
        """
        self.operation = operation
        self.reason = reason
        self.template = template
        if template:
            super().__init__(f"{operation} failed for {template}: {reason}")
        else:
            super().__init__(f"{operation} failed: {reason}")


class EncodeError(ScannerError):
    """Request body could not be serialized."""
    pass


class StatusError(ScannerError):
    """Service answered with an unexpected HTTP status."""

    def __init__(
        self,
        operation: str,
        status_code: int,
        detail: str,
        template: Optional[str] = None,
    ):
        """
        Initialize status error.

        Args:
            operation: Operation that failed
            status_code: HTTP status code received
            detail: Verbatim response body
            template: Template the operation was about (optional)
        """
        self.status_code = status_code
        self.detail = detail
        super().__init__(operation, f"HTTP {status_code}: {detail}", template)


class DecodeError(ScannerError):
    """Successful response body was not the expected JSON document."""
    pass


class UnsupportedFeatureError(ScannerError):
    """Requested feature is not implemented."""

    def __init__(self, feature: str):
        self.feature = feature
        super().__init__("configure", f"{feature} is not supported")


__all__ = [
    "ClairvzException",
    "ValidationException",
    "OutputException",
    "TransportError",
    "ReadError",
    "ListingEmptyError",
    "ScannerError",
    "EncodeError",
    "StatusError",
    "DecodeError",
    "UnsupportedFeatureError",
]
