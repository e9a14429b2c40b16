"""Resolver that tries several resolvers in order."""

from __future__ import annotations

from typing import Sequence

from license_check.exceptions import ResolutionError
from license_check.models.artifact import Artifact
from license_check.resolvers.base import BaseArtifactResolver


class ChainedResolver(BaseArtifactResolver):
    """Return the result of the first resolver that locates the artifact."""

    def __init__(self, resolvers: Sequence[BaseArtifactResolver]) -> None:
        self._resolvers = list(resolvers)

    def resolve(self, artifact: Artifact) -> Artifact:
        errors: list[str] = []
        for resolver in self._resolvers:
            try:
                return resolver.resolve(artifact)
            except ResolutionError as e:
                errors.append(str(e))
        detail = "; ".join(errors) if errors else "no resolvers configured"
        raise ResolutionError(f"Could not resolve {artifact.coordinates}: {detail}")
