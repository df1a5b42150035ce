"""
Configuration dataclass for output generators.
"""

from dataclasses import dataclass

from constants import DEFAULT_MINIMUM_SEVERITY, DEFAULT_MIRROR_URL


@dataclass
class ReportConfig:
    """Run details written into every report."""

    mirror_url: str = DEFAULT_MIRROR_URL
    scanner: str = ""
    minimum_severity: str = DEFAULT_MINIMUM_SEVERITY

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValidationException: If configuration is invalid
        """
        from utils.validation import validate_severity, validate_url

        self.mirror_url = validate_url(self.mirror_url, "mirror_url")
        self.minimum_severity = validate_severity(self.minimum_severity)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for serialization."""
        return {
            "mirror_url": self.mirror_url,
            "scanner": self.scanner,
            "minimum_severity": self.minimum_severity,
        }


__all__ = [
    "ReportConfig",
]
