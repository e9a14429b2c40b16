"""Pydantic data models for license-check."""

from license_check.models.artifact import Artifact
from license_check.models.check import (
    CheckOutcome,
    CheckReport,
    CheckResult,
    sort_results,
)
from license_check.models.config import CheckConfig
from license_check.models.license import LicenseRule
from license_check.models.options import ReportOptions, Verbosity
from license_check.models.policy import PolicySet

__all__ = [
    "Artifact",
    "CheckConfig",
    "CheckOutcome",
    "CheckReport",
    "CheckResult",
    "LicenseRule",
    "PolicySet",
    "ReportOptions",
    "Verbosity",
    "sort_results",
]
