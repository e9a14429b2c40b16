"""Compliance check result models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from license_check.models.artifact import Artifact


class CheckOutcome(Enum):
    """Classification of a single dependency.

    Each member carries a ``rank`` used to order the report and a ``label``
    used for display. Neither is used to make decisions.
    """

    ARTIFACT_EXCLUDED = ("excluded", 0, "ARTIFACT_EXCLUDED")
    LICENSE_VALID = ("valid", 1, "VALID")
    LICENSE_INVALID_NOT_RECOGNIZED = ("not_whitelisted", 2, "INVALID (not recognized)")
    LICENSE_INVALID_BLACKLISTED = ("blacklisted", 3, "INVALID (blacklisted)")
    LICENSE_INVALID_NO_INFO = ("no_info", 4, "INVALID (no license info)")

    def __new__(cls, value: str, rank: int, label: str) -> "CheckOutcome":
        member = object.__new__(cls)
        member._value_ = value
        member.rank = rank
        member.label = label
        return member


_CODE_MARKERS = {
    CheckOutcome.LICENSE_INVALID_BLACKLISTED: "IS ON YOUR BLACKLIST",
    CheckOutcome.LICENSE_INVALID_NOT_RECOGNIZED: "IS NOT ON YOUR WHITELIST",
}


class CheckResult(BaseModel):
    """Compliance result for one dependency artifact."""

    model_config = {"extra": "forbid", "frozen": True}

    artifact: Artifact = Field(description="The checked dependency")
    license_code: Optional[str] = Field(
        default=None,
        description="Normalized license code (None if undeterminable)",
    )
    outcome: CheckOutcome = Field(description="Classification outcome")

    @property
    def has_unknown_license(self) -> bool:
        """True if no license could be determined for the artifact."""
        return self.outcome is CheckOutcome.LICENSE_INVALID_NO_INFO

    @property
    def display_code(self) -> str:
        """License code annotated for display.

        Returns:
            ``n/a`` when there is no code, otherwise the code followed by the
            blacklist or whitelist marker where the outcome calls for one.
        """
        if self.license_code is None:
            return "n/a"
        marker = _CODE_MARKERS.get(self.outcome)
        if marker:
            return f"{self.license_code} {marker}"
        return self.license_code


def sort_results(results: list[CheckResult]) -> list[CheckResult]:
    """Order results by outcome rank, keeping input order within a rank."""
    return sorted(results, key=lambda r: r.outcome.rank)


class CheckReport(BaseModel):
    """Outcome of a complete compliance run."""

    model_config = {"extra": "forbid"}

    results: list[CheckResult] = Field(
        default_factory=list,
        description="One result per dependency, ordered by outcome rank",
    )
    build_fails: bool = Field(
        default=False,
        description="True if at least one result fails the build",
    )

    @property
    def total(self) -> int:
        """Number of dependencies checked."""
        return len(self.results)

    def count(self, outcome: CheckOutcome) -> int:
        """Number of results with the given outcome."""
        return sum(1 for r in self.results if r.outcome is outcome)
