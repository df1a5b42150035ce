"""Utility modules for validation, HTTP transport and logging."""

from utils.http import send_request
from utils.validation import validate_url, validate_severity

__all__ = [
    "send_request",
    "validate_url",
    "validate_severity",
]
