"""Output formatters for license-check."""

from license_check.output.report_json import ReportJsonFormatter
from license_check.output.terminal import TerminalFormatter, format_result_line

__all__ = [
    "ReportJsonFormatter",
    "TerminalFormatter",
    "format_result_line",
]
