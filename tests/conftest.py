"""
Pytest fixtures and configuration for Clairvz tests.

Provides shared fixtures and test utilities across the test suite.
"""

import json

import pytest
import requests
from unittest.mock import MagicMock, Mock

from core.config import ScanConfig
from core.models import (
    OutcomeStatus,
    ScannerEndpoint,
    TemplateOutcome,
    VulnerabilityRecord,
)


def _make_response(status_code: int = 200, text: str = "") -> MagicMock:
    """Build a fake requests.Response with the given status and body."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.text = text
    response.json.side_effect = lambda: json.loads(text)
    return response


@pytest.fixture
def make_response():
    """Factory for fake responses: make_response(status_code, text)."""
    return _make_response


@pytest.fixture
def endpoint():
    """Clair endpoint on the default local address."""
    return ScannerEndpoint(host="127.0.0.1", port=6060, minimum_severity="High")


@pytest.fixture
def mock_session():
    """A requests session whose request() is a mock."""
    session = Mock(spec=requests.Session)
    return session


@pytest.fixture
def scan_config(endpoint):
    """Validated configuration pointing at a test mirror."""
    config = ScanConfig(mirror_url="http://mirror.example.org/templates", endpoint=endpoint)
    config.validate()
    return config


@pytest.fixture
def sample_record():
    """Sample vulnerability record."""
    return VulnerabilityRecord(
        id="CVE-2021-3156",
        link="https://security-tracker.debian.org/tracker/CVE-2021-3156",
        severity="High",
        description="Heap-based buffer overflow in sudo.",
    )


@pytest.fixture
def sample_outcomes(sample_record):
    """One outcome for every terminal state."""
    return [
        TemplateOutcome(
            template="ubuntu-20.04-x86_64",
            status=OutcomeStatus.REPORTED,
            vulnerabilities=(
                sample_record,
                VulnerabilityRecord(id="CVE-2022-0001", link="", severity="Critical", description="d"),
            ),
            minimum_severity="High",
        ),
        TemplateOutcome(template="windows-2019", status=OutcomeStatus.SKIPPED),
        TemplateOutcome(
            template="debian-11-x86_64",
            status=OutcomeStatus.REGISTRATION_FAILED,
            error_message="conflict",
            minimum_severity="High",
        ),
        TemplateOutcome(
            template="centos-7-x86_64",
            status=OutcomeStatus.LOOKUP_FAILED,
            error_message="layer not found",
            minimum_severity="High",
        ),
    ]
