"""
Template filtering by supported OS family.

Clair only understands a handful of package managers, so only templates of
those distributions are worth registering.
"""

from typing import Iterable

from constants import SUPPORTED_OS_FAMILIES
from utils.validation import validate_families


class TemplateFilter:
    """
    Case-insensitive substring matcher over a list of OS families.

    A name is supported when any family appears anywhere in it, so
    "MyDEBIANbox" matches "debian".
    """

    def __init__(self, families: Iterable[str] = SUPPORTED_OS_FAMILIES):
        """
        Initialize the filter.

        Args:
            families: OS family identifiers to accept

        Raises:
            ValidationException: If no usable family is given
        """
        self.families = validate_families(families)

    def is_supported(self, name: str) -> bool:
        """Return True if the template name belongs to a supported family."""
        lowered = name.lower()
        return any(family in lowered for family in self.families)


_default_filter = TemplateFilter()


def is_supported(name: str) -> bool:
    """Check a template name against the default OS families."""
    return _default_filter.is_supported(name)
