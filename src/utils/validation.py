"""
Input validation utilities for Clairvz application.

Provides validation functions for mirror URLs, scanner settings and
template filter families before they reach the network layer.
"""

from typing import Iterable, Optional
from urllib.parse import urlparse

from core.exceptions import ValidationException
from core.models import SeverityLevel


def validate_url(url: str, field_name: str = "url") -> str:
    """
    Validate an http(s) URL.

    Args:
        url: URL to validate
        field_name: Field name for error messages

    Returns:
        URL with surrounding whitespace removed

    Raises:
        ValidationException: If the URL is empty, not http(s), or has no host

    Examples:
        >>> validate_url("https://download.openvz.org/template/precreated/")
        'https://download.openvz.org/template/precreated/'
        >>> validate_url("ftp://mirror.example.org")
        ValidationException: ...
    """
    if not url or not url.strip():
        raise ValidationException("URL cannot be empty", field_name)

    url = url.strip()

    if any(char in url for char in [" ", "\n", "\r", "\t"]):
        raise ValidationException(f"URL contains whitespace: {url!r}", field_name)

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise ValidationException(
            f"URL must use http or https, got: {url}",
            field_name
        )
    if not parsed.netloc:
        raise ValidationException(f"URL has no host: {url}", field_name)

    return url


def validate_port(port: int, field_name: str = "port") -> int:
    """
    Validate TCP port number.

    Raises:
        ValidationException: If port is outside 1-65535
    """
    if isinstance(port, bool) or not isinstance(port, int):
        raise ValidationException(f"Port must be an integer, got {port!r}", field_name)
    return int(validate_positive_number(port, field_name, min_value=1, max_value=65535))


def validate_severity(severity: str, field_name: str = "minimum_severity") -> str:
    """
    Validate and normalize a Clair priority name.

    Args:
        severity: Priority name in any casing
        field_name: Field name for error messages

    Returns:
        Canonical priority name (e.g., "high" -> "High")

    Raises:
        ValidationException: If the priority is unknown
    """
    if not severity or not severity.strip():
        raise ValidationException("Severity cannot be empty", field_name)

    level = SeverityLevel.from_name(severity)
    if level is None:
        raise ValidationException(
            f"Unknown severity {severity!r}. "
            f"Valid values: {', '.join(SeverityLevel.ordered_levels())}",
            field_name
        )
    return level.value


def validate_families(families: Iterable[str], field_name: str = "families") -> tuple[str, ...]:
    """
    Validate the OS family list used by the template filter.

    Blank entries are dropped and the rest are lower-cased.

    Raises:
        ValidationException: If no usable family remains
    """
    cleaned = tuple(f.strip().lower() for f in families if f and f.strip())
    if not cleaned:
        raise ValidationException("At least one OS family must be given", field_name)
    return cleaned


def validate_positive_number(
    value: float,
    field_name: str,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
) -> float:
    """
    Validate numeric value is within acceptable range.

    Args:
        value: Value to validate
        field_name: Field name for error messages
        min_value: Minimum acceptable value
        max_value: Maximum acceptable value (optional)

    Returns:
        Validated value

    Raises:
        ValidationException: If value is out of range
    """
    if value < min_value:
        raise ValidationException(
            f"Value must be >= {min_value}, got {value}",
            field_name
        )

    if max_value is not None and value > max_value:
        raise ValidationException(
            f"Value must be <= {max_value}, got {value}",
            field_name
        )

    return value


__all__ = [
    "validate_url",
    "validate_port",
    "validate_severity",
    "validate_families",
    "validate_positive_number",
]
