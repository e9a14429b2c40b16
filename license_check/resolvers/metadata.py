"""POM metadata reading and targeted extraction.

The extraction deliberately does not parse XML. It scans for the first
``<license>`` and the first ``<parent>`` block with plain substring search,
and any missing delimiter simply yields None.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from license_check.exceptions import MetadataReadError
from license_check.models.artifact import Artifact

POM_EXTENSION = ".pom"


def pom_path_for(artifact: Artifact) -> Path:
    """Return the conventional POM location next to a located artifact.

    Raises:
        MetadataReadError: If the artifact has not been located.
    """
    if artifact.file is None:
        raise MetadataReadError(f"Artifact {artifact.coordinates} has not been resolved")
    return artifact.file.parent / f"{artifact.artifact_id}-{artifact.version}{POM_EXTENSION}"


def read_metadata(path: Path) -> str:
    """Read a POM file as a single line of text.

    Line breaks are dropped so that tags split over several lines can be
    found with substring search.

    Raises:
        MetadataReadError: If the file cannot be read.
    """
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise MetadataReadError(f"Cannot read metadata '{path}': {e}") from e
    return "".join(text.splitlines())


def _between(text: str, start_tag: str, stop_tag: str) -> Optional[str]:
    start = text.find(start_tag)
    if start == -1:
        return None
    start += len(start_tag)
    stop = text.find(stop_tag, start)
    if stop == -1:
        return None
    return text[start:stop]


def extract_license_name(pom: str) -> Optional[str]:
    """Return the name of the first declared license, or None."""
    block = _between(pom, "<license>", "</license>")
    if block is None:
        return None
    name = _between(block, "<name>", "</name>")
    return name.strip() if name is not None else None


def extract_parent_coordinates(pom: str) -> Optional[tuple[str, str, str]]:
    """Return ``(groupId, artifactId, version)`` of the first parent block.

    All three elements are required; a partial parent yields None.
    """
    block = _between(pom, "<parent>", "</parent>")
    if block is None:
        return None
    group_id = _between(block, "<groupId>", "</groupId>")
    artifact_id = _between(block, "<artifactId>", "</artifactId>")
    version = _between(block, "<version>", "</version>")
    if group_id is None or artifact_id is None or version is None:
        return None
    triple = (group_id.strip(), artifact_id.strip(), version.strip())
    if not all(triple):
        return None
    return triple
