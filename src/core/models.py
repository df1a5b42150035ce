"""
Domain models for template vulnerability registration.

This module defines the core data structures used throughout the application.
All models are immutable (frozen dataclasses) to prevent accidental mutation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from core.exceptions import UnsupportedFeatureError


class SeverityLevel(str, Enum):
    """Vulnerability priorities as ranked by Clair."""

    DEFCON1 = "Defcon1"
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    NEGLIGIBLE = "Negligible"
    UNKNOWN = "Unknown"

    @classmethod
    def ordered_levels(cls) -> list[str]:
        """Return severity levels in display order, most severe first."""
        return [level.value for level in cls]

    @classmethod
    def from_name(cls, name: str) -> Optional["SeverityLevel"]:
        """Look up a level by name, ignoring case. Returns None if unknown."""
        wanted = name.strip().lower()
        for level in cls:
            if level.value.lower() == wanted:
                return level
        return None


class OutcomeStatus(str, Enum):
    """Terminal state of one template's processing."""

    SKIPPED = "skipped"
    REGISTRATION_FAILED = "registration_failed"
    LOOKUP_FAILED = "lookup_failed"
    REPORTED = "reported"


@dataclass(frozen=True)
class ScannerEndpoint:
    """
    Location and query settings of the Clair API.

    Attributes:
        host: Clair API address
        port: Clair API port
        use_tls: Whether to talk HTTPS to Clair (not supported yet)
        minimum_severity: Minimum priority of returned vulnerabilities
    """

    host: str
    port: int
    use_tls: bool = False
    minimum_severity: str = SeverityLevel.HIGH.value

    @property
    def base_url(self) -> str:
        """
        Root URL of the Clair API.

        Raises:
            UnsupportedFeatureError: If encrypted transport is requested
        """
        if self.use_tls:
            raise UnsupportedFeatureError("Encrypted transport (HTTPS) to Clair")
        return f"http://{self.host}:{self.port}"

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class RegisterImageRequest:
    """
    Body of a Clair layer registration.

    Attributes:
        image_id: Layer ID, the template name
        source_path: URL Clair downloads the layer archive from
        parent_id: Parent layer ID, empty when the layer has no parent
    """

    image_id: str
    source_path: str
    parent_id: str = ""

    def to_payload(self) -> dict[str, str]:
        """Convert to the wire object Clair expects."""
        # "ParantID" is the key name the service reads
        return {
            "ID": self.image_id,
            "Path": self.source_path,
            "ParantID": self.parent_id,
        }


@dataclass(frozen=True)
class VulnerabilityRecord:
    """
    A single vulnerability reported by Clair for a layer.

    Attributes:
        id: Vulnerability identifier (e.g., "CVE-2021-3156")
        link: Advisory URL
        severity: Clair priority (e.g., "High")
        description: Free-text description
    """

    id: str
    link: str
    severity: str
    description: str

    WIRE_FIELDS = ("ID", "Link", "Priority", "Description")

    @classmethod
    def from_dict(cls, data: dict) -> "VulnerabilityRecord":
        """Create from a Clair vulnerability object."""
        return cls(
            id=data.get("ID") or "",
            link=data.get("Link") or "",
            severity=data.get("Priority") or "",
            description=data.get("Description") or "",
        )

    def to_dict(self) -> dict[str, str]:
        """Convert to the Clair wire shape."""
        return {
            "ID": self.id,
            "Link": self.link,
            "Priority": self.severity,
            "Description": self.description,
        }


@dataclass(frozen=True)
class TemplateOutcome:
    """
    Result of processing one template.

    Attributes:
        template: Template name from the mirror listing
        status: Terminal state reached
        vulnerabilities: Records returned by Clair, in service order
        error_message: Failure detail for failed states
        minimum_severity: Severity filter used for the lookup
    """

    template: str
    status: OutcomeStatus
    vulnerabilities: tuple[VulnerabilityRecord, ...] = field(default_factory=tuple)
    error_message: Optional[str] = None
    minimum_severity: Optional[str] = None

    @property
    def registered(self) -> bool:
        """Whether Clair accepted the template as a layer."""
        return self.status in (OutcomeStatus.LOOKUP_FAILED, OutcomeStatus.REPORTED)

    @property
    def vulnerability_count(self) -> Optional[int]:
        """Number of vulnerabilities, or None when no report is available."""
        if self.status != OutcomeStatus.REPORTED:
            return None
        return len(self.vulnerabilities)

    def severity_breakdown(self) -> dict[str, int]:
        """Count vulnerabilities per severity, in display order."""
        counts = {level: 0 for level in SeverityLevel.ordered_levels()}
        for record in self.vulnerabilities:
            level = SeverityLevel.from_name(record.severity) if record.severity else None
            key = level.value if level else SeverityLevel.UNKNOWN.value
            counts[key] += 1
        return counts

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "template": self.template,
            "status": self.status.value,
            "minimum_severity": self.minimum_severity,
            "vulnerability_count": self.vulnerability_count,
            "error_message": self.error_message,
            "vulnerabilities": [r.to_dict() for r in self.vulnerabilities],
        }
