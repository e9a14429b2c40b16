"""License name resolution through the POM parent chain."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import structlog

from license_check.constants import DEFAULT_MAX_SEARCH_DEPTH
from license_check.exceptions import MetadataReadError, ResolutionError
from license_check.models.artifact import Artifact
from license_check.resolvers.base import BaseArtifactResolver
from license_check.resolvers.metadata import (
    extract_license_name,
    extract_parent_coordinates,
    pom_path_for,
    read_metadata,
)

logger = structlog.get_logger("parent_chain")

MetadataReader = Callable[[Path], str]


class ParentChainResolver:
    """Find the license name declared by an artifact or its ancestors.

    An artifact without a license of its own inherits one from the first
    ancestor that declares it, searching at most ``max_search_depth``
    parents.
    """

    def __init__(
        self,
        artifact_resolver: BaseArtifactResolver,
        max_search_depth: int = DEFAULT_MAX_SEARCH_DEPTH,
        reader: MetadataReader = read_metadata,
    ) -> None:
        if max_search_depth < 0:
            raise ValueError("max_search_depth must be non-negative")
        self._artifact_resolver = artifact_resolver
        self._max_search_depth = max_search_depth
        self._reader = reader

    def resolve_license_name(self, artifact: Artifact, depth: int = 0) -> Optional[str]:
        """Resolve the license name for a located artifact.

        Args:
            artifact: Artifact whose ``file`` is set.
            depth: Number of parents already walked to reach ``artifact``.

        Returns:
            The first license name found in the chain, or None.

        Raises:
            MetadataReadError: If the POM of ``artifact`` itself cannot be
                read. Read failures of its ancestors are logged and yield None.
        """
        pom = self._reader(pom_path_for(artifact))

        license_name = extract_license_name(pom)
        if license_name is not None:
            return license_name

        parent_coordinates = extract_parent_coordinates(pom)
        if parent_coordinates is None:
            return None

        group_id, artifact_id, version = parent_coordinates
        parent = Artifact(group_id=group_id, artifact_id=artifact_id, version=version)

        if depth >= self._max_search_depth:
            logger.warning(
                "Parent search depth limit reached",
                coordinates=artifact.coordinates,
                parent=parent.coordinates,
                max_search_depth=self._max_search_depth,
            )
            return None

        try:
            located = self._artifact_resolver.resolve(parent)
        except ResolutionError as e:
            logger.warning(
                "Could not resolve parent artifact",
                coordinates=artifact.coordinates,
                parent=parent.coordinates,
                error=str(e),
            )
            return None

        try:
            return self.resolve_license_name(located, depth + 1)
        except MetadataReadError as e:
            logger.warning(
                "Could not read parent metadata",
                parent=parent.coordinates,
                error=str(e),
            )
            return None
