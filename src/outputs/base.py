"""
Base output generator interface.

Defines the contract that all file output generators must implement.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from core.models import TemplateOutcome
from outputs.config import ReportConfig


class OutputGenerator(ABC):
    """
    Abstract base class for report generators.

    All file output generators (JSON, XLSX) must implement this interface.
    """

    @abstractmethod
    def generate(
        self,
        outcomes: list[TemplateOutcome],
        output_path: Path,
        config: ReportConfig,
    ) -> None:
        """
        Generate report from template outcomes.

        Args:
            outcomes: Per-template outcomes to include in report
            output_path: Where to write the output file
            config: Run details to record alongside the outcomes
        """
        pass

    @abstractmethod
    def supports_format(self) -> str:
        """
        Return the format this generator supports.

        Returns:
            Format identifier (e.g., "json", "xlsx")
        """
        pass
