"""Exclusion and license policy evaluation."""
from __future__ import annotations

import re
from typing import Iterable, Optional

import structlog

from license_check.models.artifact import Artifact
from license_check.models.check import CheckOutcome
from license_check.models.config import CheckConfig
from license_check.models.policy import PolicySet

logger = structlog.get_logger("policy")


def compile_exclude_patterns(sources: Iterable[str]) -> tuple[re.Pattern[str], ...]:
    """Compile exclude patterns, dropping invalid ones with a warning."""
    patterns: list[re.Pattern[str]] = []
    for source in sources:
        try:
            patterns.append(re.compile(source))
        except re.error as e:
            logger.warning("Ignoring invalid exclude regex", regex=source, error=str(e))
    return tuple(patterns)


def build_policy(config: CheckConfig) -> PolicySet:
    """Build the read-only policy for a run from configuration.

    Args:
        config: Loaded configuration.

    Returns:
        PolicySet with case-folded sets and compiled exclude patterns.
    """
    return PolicySet(
        exclude_coordinates=frozenset(config.excludes),
        exclude_regex=compile_exclude_patterns(config.excludes_regex),
        excluded_scopes=frozenset(config.excluded_scopes),
        blacklist=frozenset(config.blacklist),
        whitelist=frozenset(config.whitelist),
        exclude_no_license=config.excludes_no_license,
        max_search_depth=config.max_search_depth,
    )


def is_excluded(policy: PolicySet, artifact: Artifact) -> bool:
    """Check whether an artifact is skipped by the exclusion policy.

    An artifact is excluded when its coordinates are listed exactly
    (case-insensitive), fully match one of the exclude patterns, or its
    scope is excluded.
    """
    coordinates = artifact.coordinates
    if coordinates.lower() in policy.exclude_coordinates:
        return True
    if any(pattern.fullmatch(coordinates) for pattern in policy.exclude_regex):
        return True
    return artifact.scope.lower() in policy.excluded_scopes


def classify(policy: PolicySet, license_code: Optional[str]) -> CheckOutcome:
    """Classify a resolved license code against the policy.

    Checks apply in a fixed order: missing code, blacklist, whitelist.
    An empty blacklist or whitelist skips that check.

    Args:
        policy: Policy for the run.
        license_code: Code from the license table, or None.

    Returns:
        The outcome for the dependency.
    """
    if license_code is None:
        return CheckOutcome.LICENSE_INVALID_NO_INFO
    folded = license_code.lower()
    if policy.blacklist and folded in policy.blacklist:
        return CheckOutcome.LICENSE_INVALID_BLACKLISTED
    if policy.whitelist and folded not in policy.whitelist:
        return CheckOutcome.LICENSE_INVALID_NOT_RECOGNIZED
    return CheckOutcome.LICENSE_VALID


def fails_build(policy: PolicySet, outcome: CheckOutcome) -> bool:
    """Whether an outcome makes the build fail under the policy."""
    if outcome is CheckOutcome.LICENSE_INVALID_NO_INFO:
        return not policy.exclude_no_license
    return outcome in (
        CheckOutcome.LICENSE_INVALID_BLACKLISTED,
        CheckOutcome.LICENSE_INVALID_NOT_RECOGNIZED,
    )
