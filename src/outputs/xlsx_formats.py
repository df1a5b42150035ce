"""
Cell formats for the Clairvz workbook.

Every sheet shares one bordered Arial base style. Priority and outcome
cells are tinted by the colour tables on OutputFormatter.
"""

import xlsxwriter

from core.models import OutcomeStatus, SeverityLevel


class OutputFormatter:
    """Builds the workbook's formats once and hands them out by name."""

    BASE_FORMAT = {
        "border": 1,
        "font_name": "Arial",
        "font_size": 10,
        "align": "left",
        "valign": "vcenter",
    }

    COLORS = {
        "blue": "#4285f4",
        "lightgrey": "#D9D9D9",
        "green": "#D9EAD3",
        "lightyellow": "#FFF2CC",
        "orange": "#FCE5CD",
        "red": "#FFE5E5",
        "darkred": "#E06666",
    }

    # Background per Clair priority
    SEVERITY_COLORS = {
        SeverityLevel.DEFCON1.value: "darkred",
        SeverityLevel.CRITICAL.value: "darkred",
        SeverityLevel.HIGH.value: "red",
        SeverityLevel.MEDIUM.value: "orange",
        SeverityLevel.LOW.value: "lightyellow",
    }

    # Background per template outcome
    STATUS_COLORS = {
        OutcomeStatus.REPORTED.value: "green",
        OutcomeStatus.LOOKUP_FAILED.value: "orange",
        OutcomeStatus.REGISTRATION_FAILED.value: "red",
        OutcomeStatus.SKIPPED.value: "lightgrey",
    }

    def __init__(self, workbook: xlsxwriter.Workbook):
        self.workbook = workbook
        self.formats = self._build_formats()

    def _make_format(
        self,
        bg_color: str = None,
        font_color: str = "black",
        bold: bool = False,
        wrap: bool = False,
    ) -> xlsxwriter.format.Format:
        """
        Register a format on the workbook.

        Args:
            bg_color: Cell background, hex value
            font_color: Text colour, left unset when black
            bold: Bold text for header rows
            wrap: Wrap long descriptions inside the cell
        """
        props = dict(self.BASE_FORMAT)
        if bg_color:
            props["bg_color"] = bg_color
        if font_color != "black":
            props["font_color"] = font_color
        if bold:
            props["bold"] = True
        if wrap:
            props["text_wrap"] = True
        return self.workbook.add_format(props)

    def _build_formats(self) -> dict:
        formats = {
            "header_blue": self._make_format(bg_color=self.COLORS["blue"], font_color="white", bold=True),
            "header_lightgrey": self._make_format(bg_color=self.COLORS["lightgrey"], bold=True),
            "body_white": self._make_format(),
            "body_wrap": self._make_format(wrap=True),
        }
        for name, color in self.COLORS.items():
            formats[f"body_{name}"] = self._make_format(bg_color=color)
        return formats

    def get(self, format_name: str) -> xlsxwriter.format.Format:
        """Look up a format by name. Unknown names raise KeyError."""
        return self.formats[format_name]

    def for_severity(self, severity: str) -> xlsxwriter.format.Format:
        """Format for a vulnerability's priority cell."""
        level = SeverityLevel.from_name(severity) if severity else None
        color = self.SEVERITY_COLORS.get(level.value) if level else None
        return self.get(f"body_{color}") if color else self.get("body_white")

    def for_status(self, status: OutcomeStatus) -> xlsxwriter.format.Format:
        """Format for a template's status cell."""
        return self.get(f"body_{self.STATUS_COLORS[status.value]}")
