"""License rule model."""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, Field


class LicenseRule(BaseModel):
    """One row of the license rule table.

    Maps free-text license names matching ``pattern`` to a short ``code``.
    """

    model_config = {"extra": "forbid", "frozen": True}

    code: str = Field(min_length=1, description="Normalized license code")
    canonical_name: str = Field(description="Human readable license name")
    pattern: re.Pattern[str] = Field(
        description="Case-insensitive pattern searched in license names"
    )

    def matches(self, license_name: Optional[str]) -> bool:
        """True if the pattern occurs anywhere in ``license_name``."""
        if not license_name:
            return False
        return self.pattern.search(license_name) is not None
