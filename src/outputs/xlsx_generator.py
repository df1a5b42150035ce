"""
XLSX generator for template vulnerability workbooks.

Generates an Excel workbook with one summary row per template and one row
per vulnerability Clair reported.
"""

import logging
from pathlib import Path

import xlsxwriter

from core.models import OutcomeStatus, SeverityLevel, TemplateOutcome
from outputs.base import OutputGenerator
from outputs.config import ReportConfig
from outputs.xlsx_formats import OutputFormatter

logger = logging.getLogger(__name__)

SUMMARY_HEADERS = ["Template", "Status", "Minimum priority", "Vulnerabilities"]
VULNERABILITY_HEADERS = ["Template", "ID", "Priority", "Link", "Description"]


class XLSXGenerator(OutputGenerator):
    """
    Template vulnerability workbook generator (XLSX format).

    Sheets:
    - summary: status, vulnerability count and per-priority breakdown per template
    - vulnerabilities: every record returned by Clair
    """

    def supports_format(self) -> str:
        """Return format identifier."""
        return "xlsx"

    def generate(
        self,
        outcomes: list[TemplateOutcome],
        output_path: Path,
        config: ReportConfig,
    ) -> None:
        """
        Generate template vulnerability workbook (XLSX).

        Args:
            outcomes: Per-template outcomes
            output_path: Output file path
            config: Run details
        """
        from core.exceptions import OutputException

        if not isinstance(config, ReportConfig):
            raise OutputException(
                "xlsx",
                f"Expected ReportConfig, got {type(config).__name__}"
            )

        config.validate()

        logger.info(f"Generating vulnerability workbook: {output_path}")

        workbook = xlsxwriter.Workbook(str(output_path))
        formatter = OutputFormatter(workbook)

        self._write_summary(workbook.add_worksheet("summary"), formatter, outcomes, config)
        self._write_vulnerabilities(workbook.add_worksheet("vulnerabilities"), formatter, outcomes)

        try:
            workbook.close()
        except xlsxwriter.exceptions.FileCreateError as e:
            raise OutputException("xlsx", str(e))

        logger.info(f"Vulnerability workbook generated: {output_path}")

    def _write_summary(
        self,
        worksheet: xlsxwriter.worksheet.Worksheet,
        formatter: OutputFormatter,
        outcomes: list[TemplateOutcome],
        config: ReportConfig,
    ) -> None:
        """Write run details followed by one row per template."""
        row = 0
        for label, value in (
            ("Mirror", config.mirror_url),
            ("Clair", config.scanner),
            ("Minimum priority", config.minimum_severity),
        ):
            worksheet.write_string(row, 0, label, formatter.get("header_lightgrey"))
            worksheet.write_string(row, 1, value, formatter.get("body_white"))
            row += 1
        row += 1

        levels = SeverityLevel.ordered_levels()
        worksheet.write_row(
            row, 0, SUMMARY_HEADERS + levels + ["Detail"], formatter.get("header_blue")
        )
        row += 1

        for outcome in outcomes:
            worksheet.write_string(row, 0, outcome.template, formatter.get("body_white"))
            worksheet.write_string(row, 1, outcome.status.value, formatter.for_status(outcome.status))
            worksheet.write_string(row, 2, outcome.minimum_severity or "", formatter.get("body_white"))

            if outcome.status == OutcomeStatus.REPORTED:
                worksheet.write_number(row, 3, outcome.vulnerability_count, formatter.get("body_white"))
                breakdown = outcome.severity_breakdown()
                for offset, level in enumerate(levels):
                    worksheet.write_number(row, 4 + offset, breakdown[level], formatter.get("body_white"))
            else:
                worksheet.write_blank(row, 3, None, formatter.get("body_white"))

            worksheet.write_string(row, 4 + len(levels), outcome.error_message or "", formatter.get("body_wrap"))
            row += 1

        worksheet.autofit()

    def _write_vulnerabilities(
        self,
        worksheet: xlsxwriter.worksheet.Worksheet,
        formatter: OutputFormatter,
        outcomes: list[TemplateOutcome],
    ) -> None:
        """Write one row per vulnerability record."""
        worksheet.write_row(0, 0, VULNERABILITY_HEADERS, formatter.get("header_blue"))
        row = 1
        for outcome in outcomes:
            for record in outcome.vulnerabilities:
                worksheet.write_string(row, 0, outcome.template, formatter.get("body_white"))
                worksheet.write_string(row, 1, record.id, formatter.get("body_white"))
                worksheet.write_string(row, 2, record.severity, formatter.for_severity(record.severity))
                worksheet.write_string(row, 3, record.link, formatter.get("body_white"))
                worksheet.write_string(row, 4, record.description, formatter.get("body_wrap"))
                row += 1

        worksheet.autofit()
        worksheet.set_column(4, 4, 80)
