"""Shared fixtures for license-check tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import pytest
from click.testing import CliRunner

from license_check.models.artifact import Artifact

PomWriter = Callable[..., Path]


def build_pom(
    artifact_id: str,
    license_name: Optional[str] = None,
    parent: Optional[str] = None,
) -> str:
    """Build a small but realistic POM document."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        "<project>",
        "  <modelVersion>4.0.0</modelVersion>",
    ]
    if parent is not None:
        group_id, parent_artifact, version = parent.split(":")
        lines += [
            "  <parent>",
            f"    <groupId>{group_id}</groupId>",
            f"    <artifactId>{parent_artifact}</artifactId>",
            f"    <version>{version}</version>",
            "  </parent>",
        ]
    lines.append(f"  <artifactId>{artifact_id}</artifactId>")
    lines.append(f"  <name>{artifact_id} project</name>")
    if license_name is not None:
        lines += [
            "  <licenses>",
            "    <license>",
            f"      <name>{license_name}</name>",
            "      <distribution>repo</distribution>",
            "    </license>",
            "  </licenses>",
        ]
    lines.append("</project>")
    return "\n".join(lines)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """Empty local Maven repository."""
    root = tmp_path / "repository"
    root.mkdir()
    return root


@pytest.fixture
def write_pom(repo_root: Path) -> PomWriter:
    """Write a POM into the local repository using the Maven layout.

    Call as ``write_pom("g:a:1.0", license_name=..., parent="g:p:1.0")``;
    pass ``content`` to write raw POM text instead.
    """

    def _write(
        coordinates: str,
        license_name: Optional[str] = None,
        parent: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Path:
        artifact = Artifact.from_coordinates(coordinates)
        directory = (
            repo_root
            / artifact.group_id.replace(".", "/")
            / artifact.artifact_id
            / artifact.version
        )
        directory.mkdir(parents=True, exist_ok=True)
        pom = directory / f"{artifact.artifact_id}-{artifact.version}.pom"
        if content is None:
            content = build_pom(artifact.artifact_id, license_name, parent)
        pom.write_text(content, encoding="utf-8")
        return pom

    return _write
