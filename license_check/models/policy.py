"""Policy-related Pydantic models for license-check."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field, field_validator

from license_check.constants import DEFAULT_MAX_SEARCH_DEPTH


class PolicySet(BaseModel):
    """Read-only exclusion and license policy for a single run.

    All string sets are stored lowercase. An empty blacklist or whitelist
    disables that check rather than matching nothing.
    """

    model_config = {"extra": "forbid", "frozen": True}

    exclude_coordinates: frozenset[str] = Field(
        default_factory=frozenset,
        description="Exact coordinates to skip",
    )
    exclude_regex: tuple[re.Pattern[str], ...] = Field(
        default=(),
        description="Patterns fully matched against coordinates",
    )
    excluded_scopes: frozenset[str] = Field(
        default_factory=frozenset,
        description="Dependency scopes to skip",
    )
    blacklist: frozenset[str] = Field(
        default_factory=frozenset,
        description="License codes that always fail the build",
    )
    whitelist: frozenset[str] = Field(
        default_factory=frozenset,
        description="License codes that are the only ones allowed",
    )
    exclude_no_license: bool = Field(
        default=False,
        description="Do not fail the build for dependencies without a license",
    )
    max_search_depth: int = Field(
        default=DEFAULT_MAX_SEARCH_DEPTH,
        ge=0,
        description="Maximum number of parents to walk",
    )

    @field_validator(
        "exclude_coordinates", "excluded_scopes", "blacklist", "whitelist", mode="before"
    )
    @classmethod
    def fold_case(cls, v: Any) -> Any:
        if not isinstance(v, (set, frozenset, list, tuple)):
            return v
        return frozenset(item.lower() if isinstance(item, str) else item for item in v)
