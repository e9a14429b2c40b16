"""JSON output formatter for check reports."""
import json
from datetime import datetime, timezone
from typing import Any

from license_check import __version__
from license_check.models.check import CheckOutcome, CheckReport, CheckResult


class ReportJsonFormatter:
    """Format check reports as JSON for CI/CD integration."""

    def format_report(self, report: CheckReport) -> str:
        """Format a report as a JSON string.

        Args:
            report: The report to format.

        Returns:
            Indented JSON document.
        """
        output = {
            "metadata": self._build_metadata(),
            "summary": self._build_summary(report),
            "results": [self._build_result(result) for result in report.results],
        }
        return json.dumps(output, indent=2)

    def _build_metadata(self) -> dict[str, Any]:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        return {
            "generated_at": timestamp,
            "tool_version": __version__,
        }

    def _build_summary(self, report: CheckReport) -> dict[str, Any]:
        return {
            "total": report.total,
            "outcomes": {
                outcome.value: report.count(outcome)
                for outcome in sorted(CheckOutcome, key=lambda o: o.rank)
            },
            "build_fails": report.build_fails,
            "status": "FAIL" if report.build_fails else "PASS",
        }

    def _build_result(self, result: CheckResult) -> dict[str, Any]:
        return {
            "coordinates": result.artifact.coordinates,
            "scope": result.artifact.scope,
            "license_code": result.license_code,
            "outcome": result.outcome.value,
            "label": result.outcome.label,
        }
