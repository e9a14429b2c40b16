"""Resolver for artifacts in a local Maven repository."""

from __future__ import annotations

from pathlib import Path

import structlog

from license_check.exceptions import ResolutionError
from license_check.models.artifact import Artifact
from license_check.resolvers.base import BaseArtifactResolver

logger = structlog.get_logger("local_resolver")


def repository_path(artifact: Artifact) -> str:
    """Relative POM path of an artifact in the Maven repository layout.

    Example: ``org/apache/commons/commons-lang3/3.12.0/commons-lang3-3.12.0.pom``
    """
    group_path = artifact.group_id.replace(".", "/")
    return (
        f"{group_path}/{artifact.artifact_id}/{artifact.version}/"
        f"{artifact.artifact_id}-{artifact.version}.pom"
    )


class LocalRepositoryResolver(BaseArtifactResolver):
    """Locate POMs in a directory using the Maven repository layout."""

    def __init__(self, root: Path) -> None:
        self._root = root.expanduser()

    def resolve(self, artifact: Artifact) -> Artifact:
        """Locate the artifact's POM under the repository root.

        Raises:
            ResolutionError: If the POM file does not exist.
        """
        pom = self._root / repository_path(artifact)
        if not pom.is_file():
            raise ResolutionError(
                f"{artifact.coordinates} not found in local repository {self._root}"
            )
        logger.debug("Artifact resolved", coordinates=artifact.coordinates, path=str(pom))
        return artifact.with_file(pom)
