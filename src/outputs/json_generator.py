"""
JSON generator for template outcomes.

Writes every template outcome, including the full vulnerability records,
so results can be post-processed by other tools.
"""

import json
import logging
from datetime import datetime
from pathlib import Path

from constants import RESULTS_FORMAT_VERSION
from core.exceptions import OutputException
from core.models import TemplateOutcome
from outputs.base import OutputGenerator
from outputs.config import ReportConfig

logger = logging.getLogger(__name__)


class JSONGenerator(OutputGenerator):
    """Template outcome export (JSON format)."""

    def supports_format(self) -> str:
        """Return format identifier."""
        return "json"

    def generate(
        self,
        outcomes: list[TemplateOutcome],
        output_path: Path,
        config: ReportConfig,
    ) -> None:
        """
        Write outcomes to a JSON file.

        Args:
            outcomes: Per-template outcomes
            output_path: Output file path
            config: Run details stored as metadata

        Raises:
            OutputException: If the file cannot be written
        """
        config.validate()

        data = {
            "version": RESULTS_FORMAT_VERSION,
            "timestamp": datetime.now().isoformat(),
            "metadata": config.to_dict(),
            "outcomes": [o.to_dict() for o in outcomes],
        }

        try:
            # Write atomically by writing to temp file then renaming
            temp_path = output_path.with_suffix(".tmp")
            temp_path.write_text(json.dumps(data, indent=2, default=str))
            temp_path.replace(output_path)
        except OSError as e:
            raise OutputException("json", str(e))

        logger.info(f"Template outcomes written: {output_path}")
