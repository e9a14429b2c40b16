"""Compliance policy logic for license-check."""
from license_check.analysis.policy import (
    build_policy,
    classify,
    compile_exclude_patterns,
    fails_build,
    is_excluded,
)

__all__ = [
    "build_policy",
    "classify",
    "compile_exclude_patterns",
    "fails_build",
    "is_excluded",
]
