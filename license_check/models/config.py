"""Configuration Pydantic models for license-check."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from license_check.constants import (
    DEFAULT_CACHE_DIR,
    DEFAULT_LOCAL_REPOSITORY,
    DEFAULT_MAX_SEARCH_DEPTH,
    DEFAULT_REMOTE_REPOSITORY,
)


class CheckConfig(BaseModel):
    """Configuration for license-check.

    Mirrors the keys accepted in ``.license-check.yaml``. Every field has a
    default so partial files are valid.
    """

    model_config = {"extra": "forbid"}

    excludes: List[str] = Field(
        default_factory=list,
        description="Exact groupId:artifactId:version coordinates to skip.",
    )
    excludes_regex: List[str] = Field(
        default_factory=list,
        description="Regular expressions fully matched against coordinates.",
    )
    excludes_no_license: bool = Field(
        default=False,
        description="Do not fail the build for dependencies without a license.",
    )
    blacklist: List[str] = Field(
        default_factory=list,
        description="License codes that fail the build.",
    )
    whitelist: List[str] = Field(
        default_factory=list,
        description="License codes allowed; any other code fails the build.",
    )
    excluded_scopes: List[str] = Field(
        default_factory=list,
        description="Dependency scopes to skip, e.g. test or provided.",
    )
    max_search_depth: int = Field(
        default=DEFAULT_MAX_SEARCH_DEPTH,
        ge=0,
        description="Maximum number of parent POMs to search.",
    )
    local_repository: Optional[str] = Field(
        default=DEFAULT_LOCAL_REPOSITORY,
        description="Local Maven repository root (None disables it).",
    )
    remote_repositories: List[str] = Field(
        default_factory=lambda: [DEFAULT_REMOTE_REPOSITORY],
        description="Remote Maven repository base URLs, tried in order.",
    )
    cache_dir: str = Field(
        default=DEFAULT_CACHE_DIR,
        description="Directory where downloaded POMs are cached.",
    )
    offline: bool = Field(
        default=False,
        description="Never contact remote repositories.",
    )
