"""
Clairvz - Container Template Vulnerability Registration Tool

Registers precreated OS container templates with a Clair scanning service
and reports the vulnerabilities Clair found for each template.
"""

__version__ = "1.0.0"
__author__ = "Clairvz contributors"

from core.models import (
    ScannerEndpoint,
    TemplateOutcome,
    VulnerabilityRecord,
    OutcomeStatus,
)

__all__ = [
    "ScannerEndpoint",
    "TemplateOutcome",
    "VulnerabilityRecord",
    "OutcomeStatus",
]
