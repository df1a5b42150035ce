"""Output generators for template vulnerability reports."""

from outputs.base import OutputGenerator
from outputs.console import ConsoleReporter
from outputs.json_generator import JSONGenerator
from outputs.xlsx_generator import XLSXGenerator

__all__ = [
    "OutputGenerator",
    "ConsoleReporter",
    "JSONGenerator",
    "XLSXGenerator",
]
