"""
Run configuration for Clairvz.

Provides a strongly-typed configuration object that is handed to the
orchestrator and Clair client, replacing process-wide globals.
"""

from dataclasses import dataclass, field, replace

from constants import (
    API_REQUEST_TIMEOUT,
    DEFAULT_MAX_WORKERS,
    DEFAULT_MINIMUM_SEVERITY,
    DEFAULT_MIRROR_URL,
    DEFAULT_SCANNER_HOST,
    DEFAULT_SCANNER_PORT,
    SUPPORTED_OS_FAMILIES,
)
from core.exceptions import ValidationException
from core.models import ScannerEndpoint


@dataclass
class ScanConfig:
    """Settings for one registration and reporting run."""

    mirror_url: str = DEFAULT_MIRROR_URL
    endpoint: ScannerEndpoint = field(
        default_factory=lambda: ScannerEndpoint(
            host=DEFAULT_SCANNER_HOST,
            port=DEFAULT_SCANNER_PORT,
            minimum_severity=DEFAULT_MINIMUM_SEVERITY,
        )
    )
    families: tuple[str, ...] = SUPPORTED_OS_FAMILIES
    max_workers: int = DEFAULT_MAX_WORKERS
    request_timeout: float = API_REQUEST_TIMEOUT

    def validate(self) -> None:
        """
        Validate and normalize configuration values.

        Raises:
            ValidationException: If a value is invalid
            UnsupportedFeatureError: If encrypted transport is requested
        """
        from utils.validation import (
            validate_families,
            validate_port,
            validate_positive_number,
            validate_severity,
            validate_url,
        )

        self.mirror_url = validate_url(self.mirror_url, "mirror_url")
        self.families = validate_families(self.families)
        self.max_workers = int(validate_positive_number(self.max_workers, "max_workers", min_value=1))
        if self.request_timeout <= 0:
            raise ValidationException(
                f"Value must be > 0, got {self.request_timeout}", "request_timeout"
            )

        if not self.endpoint.host or not self.endpoint.host.strip():
            raise ValidationException("Scanner host cannot be empty", "host")

        self.endpoint = replace(
            self.endpoint,
            host=self.endpoint.host.strip(),
            port=validate_port(self.endpoint.port),
            minimum_severity=validate_severity(self.endpoint.minimum_severity),
        )

        # Fail once at startup rather than once per template
        _ = self.endpoint.base_url


__all__ = ["ScanConfig"]
