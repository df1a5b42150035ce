"""Core business logic for template registration and vulnerability lookup."""

from core.models import (
    OutcomeStatus,
    RegisterImageRequest,
    ScannerEndpoint,
    SeverityLevel,
    TemplateOutcome,
    VulnerabilityRecord,
)

__all__ = [
    "OutcomeStatus",
    "RegisterImageRequest",
    "ScannerEndpoint",
    "SeverityLevel",
    "TemplateOutcome",
    "VulnerabilityRecord",
]
