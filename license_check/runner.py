"""Compliance run: resolve, classify and aggregate every dependency."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import httpx
import structlog

from license_check.analysis.policy import classify, fails_build, is_excluded
from license_check.exceptions import ConfigurationError
from license_check.licenses.table import LicenseTable
from license_check.models.artifact import Artifact
from license_check.models.check import (
    CheckOutcome,
    CheckReport,
    CheckResult,
    sort_results,
)
from license_check.models.config import CheckConfig
from license_check.models.policy import PolicySet
from license_check.resolvers.base import BaseArtifactResolver
from license_check.resolvers.chain import ChainedResolver
from license_check.resolvers.local import LocalRepositoryResolver
from license_check.resolvers.metadata import read_metadata
from license_check.resolvers.parent_chain import MetadataReader, ParentChainResolver
from license_check.resolvers.remote import RemoteRepositoryResolver

logger = structlog.get_logger("runner")


def load_dependencies(path: Path) -> list[Artifact]:
    """Read a dependency list file.

    One ``groupId:artifactId:version[:scope]`` per line. Blank lines and
    lines starting with ``#`` are ignored.

    Raises:
        ConfigurationError: If the file cannot be read or a line is invalid.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read dependency list '{path}': {e}") from e

    artifacts: list[Artifact] = []
    for line_number, line in enumerate(content.splitlines(), start=1):
        entry = line.strip()
        if not entry or entry.startswith("#"):
            continue
        try:
            artifacts.append(Artifact.from_coordinates(entry))
        except ValueError as e:
            raise ConfigurationError(f"{path}:{line_number}: {e}") from e
    return artifacts


def parse_dependencies(coordinates: Iterable[str]) -> list[Artifact]:
    """Parse coordinate strings given on the command line.

    Raises:
        ConfigurationError: If a coordinate string is invalid.
    """
    artifacts: list[Artifact] = []
    for text in coordinates:
        try:
            artifacts.append(Artifact.from_coordinates(text))
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
    return artifacts


def build_artifact_resolver(
    config: CheckConfig, client: Optional[httpx.Client] = None
) -> BaseArtifactResolver:
    """Build the resolver chain described by the configuration.

    The local repository is consulted first, then the remote repositories
    unless ``offline`` is set.
    """
    resolvers: list[BaseArtifactResolver] = []
    if config.local_repository:
        resolvers.append(LocalRepositoryResolver(Path(config.local_repository)))
    if not config.offline and config.remote_repositories:
        resolvers.append(
            RemoteRepositoryResolver(
                cache_dir=Path(config.cache_dir),
                repositories=config.remote_repositories,
                client=client,
            )
        )
    return ChainedResolver(resolvers)


class ComplianceRunner:
    """Check every dependency of a project against a policy."""

    def __init__(
        self,
        artifact_resolver: BaseArtifactResolver,
        table: Optional[LicenseTable] = None,
        reader: MetadataReader = read_metadata,
    ) -> None:
        """Initialize the runner.

        Args:
            artifact_resolver: Locates dependencies and their parents.
            table: License rule table. Defaults to the bundled rules.
            reader: Metadata reader used for every POM.
        """
        self._artifact_resolver = artifact_resolver
        self._table = table if table is not None else LicenseTable()
        self._reader = reader

    @property
    def table(self) -> LicenseTable:
        return self._table

    def run(self, dependencies: Iterable[Artifact], policy: PolicySet) -> CheckReport:
        """Check all dependencies sequentially.

        Args:
            dependencies: Direct dependencies of the project.
            policy: Read-only policy for this run.

        Returns:
            CheckReport with one result per dependency, ordered by outcome.

        Raises:
            ResolutionError: If a dependency itself cannot be located.
            MetadataReadError: If a dependency's own POM cannot be read.
            RuleTableError: If the license rules are malformed.
        """
        self._table.load()
        chain = ParentChainResolver(
            self._artifact_resolver,
            max_search_depth=policy.max_search_depth,
            reader=self._reader,
        )

        results: list[CheckResult] = []
        build_fails = False
        for artifact in dependencies:
            result = self._check(artifact, policy, chain)
            if fails_build(policy, result.outcome):
                build_fails = True
                if result.has_unknown_license:
                    logger.warning(
                        "Build will fail because no license was found",
                        coordinates=artifact.coordinates,
                    )
            results.append(result)

        return CheckReport(results=sort_results(results), build_fails=build_fails)

    def _check(
        self, artifact: Artifact, policy: PolicySet, chain: ParentChainResolver
    ) -> CheckResult:
        if is_excluded(policy, artifact):
            return CheckResult(artifact=artifact, outcome=CheckOutcome.ARTIFACT_EXCLUDED)

        located = artifact if artifact.is_located else self._artifact_resolver.resolve(artifact)
        logger.debug("Checking artifact", coordinates=artifact.coordinates)

        license_name = chain.resolve_license_name(located, 0)
        license_code = self._table.code_for(license_name)
        outcome = classify(policy, license_code)
        logger.debug(
            "Artifact classified",
            coordinates=artifact.coordinates,
            license_name=license_name,
            license_code=license_code,
            outcome=outcome.value,
        )
        return CheckResult(artifact=artifact, license_code=license_code, outcome=outcome)
