"""
Centralized configuration constants for Clairvz.

This module provides a single source of truth for configuration values
that are used across multiple modules, making them easier to update
and maintain.
"""

# ============================================================================
# Template Mirror
# ============================================================================

DEFAULT_MIRROR_URL = "https://download.openvz.org/template/precreated/"
"""Default OpenVZ mirror with precreated templates."""

LISTING_FILENAME = ".listing"
"""Name of the newline-delimited directory index served by the mirror."""

TEMPLATE_ARCHIVE_SUFFIX = ".tar.gz"
"""Suffix appended to a template name to build its archive path."""

# ============================================================================
# Clair Scanner
# ============================================================================

DEFAULT_SCANNER_HOST = "127.0.0.1"
"""Default Clair API address."""

DEFAULT_SCANNER_PORT = 6060
"""Default Clair API port."""

DEFAULT_MINIMUM_SEVERITY = "High"
"""Default minimum priority of the returned vulnerabilities."""

CLAIR_LAYERS_PATH = "/v1/layers"
"""Clair v1 API path for layer registration."""

CLAIR_VULNERABILITIES_PATH = "/v1/layers/{layer}/vulnerabilities"
"""Clair v1 API path for per-layer vulnerability lookup."""

REGISTER_SUCCESS_STATUS = 201
"""Clair answers "201 Created" for a registered layer."""

LOOKUP_SUCCESS_STATUS = 200
"""Clair answers "200 OK" for a vulnerability lookup."""

# ============================================================================
# Template Filtering
# ============================================================================

SUPPORTED_OS_FAMILIES = ("ubuntu", "debian", "centos")
"""OS families Clair can analyse; matched case-insensitively anywhere in the name."""

# ============================================================================
# Concurrency
# ============================================================================

DEFAULT_MAX_WORKERS = 1
"""Default number of templates processed at once (1 keeps the run strictly sequential)."""

# ============================================================================
# Timeouts (in seconds)
# ============================================================================

LISTING_TIMEOUT = 30
"""Timeout for fetching the mirror listing (30 seconds)."""

API_REQUEST_TIMEOUT = 30
"""Timeout for a single Clair API request (30 seconds)."""

# ============================================================================
# Output
# ============================================================================

OUTPUT_BASENAME = "clairvz_results"
"""Base file name for report outputs."""

OUTPUT_CONFIGS = {
    "json": {
        "description": "Template Outcomes (JSON)",
        "file_suffix": ".json",
    },
    "xlsx": {
        "description": "Vulnerability Workbook (XLSX)",
        "file_suffix": ".xlsx",
    },
}
"""Report file formats selectable with --output."""

RESULTS_FORMAT_VERSION = "1.0"
"""Version stamp written into the JSON results file."""
