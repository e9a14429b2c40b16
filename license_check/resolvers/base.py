"""Base artifact resolver interface."""

from abc import ABC, abstractmethod

from license_check.models.artifact import Artifact


class BaseArtifactResolver(ABC):
    """Abstract base class for artifact resolvers.

    A resolver locates the POM of an artifact and returns a copy of the
    artifact whose ``file`` points at it.
    """

    @abstractmethod
    def resolve(self, artifact: Artifact) -> Artifact:
        """Locate an artifact.

        Args:
            artifact: The artifact to locate (``file`` may be unset).

        Returns:
            A located copy of the artifact.

        Raises:
            ResolutionError: If the artifact cannot be found.
        """
