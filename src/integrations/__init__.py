"""Integrations with external services."""

from integrations.clair_api import ClairClient

__all__ = [
    "ClairClient",
]
