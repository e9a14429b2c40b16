"""Artifact identity model."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from license_check.constants import DEFAULT_SCOPE


class Artifact(BaseModel):
    """A dependency artifact identified by Maven-style coordinates.

    The ``file`` field stays unset until a resolver has located the artifact's
    POM on disk.
    """

    model_config = {"extra": "forbid", "frozen": True}

    group_id: str = Field(min_length=1, description="Maven groupId")
    artifact_id: str = Field(min_length=1, description="Maven artifactId")
    version: str = Field(min_length=1, description="Artifact version")
    scope: str = Field(default=DEFAULT_SCOPE, description="Dependency scope")
    file: Optional[Path] = Field(
        default=None,
        description="Location of the resolved POM file",
    )

    @property
    def coordinates(self) -> str:
        """Coordinate string ``groupId:artifactId:version``."""
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    @property
    def is_located(self) -> bool:
        """True once a resolver has set the file location."""
        return self.file is not None

    def with_file(self, path: Path) -> Artifact:
        """Return a copy of this artifact located at ``path``."""
        return self.model_copy(update={"file": path})

    @classmethod
    def from_coordinates(cls, text: str) -> Artifact:
        """Parse ``groupId:artifactId:version[:scope]``.

        Args:
            text: Coordinate string.

        Returns:
            Unlocated Artifact.

        Raises:
            ValueError: If the string does not have three or four non-empty parts.
        """
        parts = [part.strip() for part in text.strip().split(":")]
        if len(parts) not in (3, 4) or not all(parts):
            raise ValueError(
                f"Invalid coordinates '{text}': expected groupId:artifactId:version[:scope]"
            )
        if len(parts) == 4:
            return cls(
                group_id=parts[0],
                artifact_id=parts[1],
                version=parts[2],
                scope=parts[3],
            )
        return cls(group_id=parts[0], artifact_id=parts[1], version=parts[2])

    def __str__(self) -> str:
        return f"{self.coordinates}:{self.scope}"
