"""Tests for the compliance runner."""
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from license_check.analysis.policy import build_policy
from license_check.exceptions import (
    ConfigurationError,
    MetadataReadError,
    ResolutionError,
    RuleTableError,
)
from license_check.licenses.table import LicenseTable
from license_check.models.artifact import Artifact
from license_check.models.check import CheckOutcome
from license_check.models.config import CheckConfig
from license_check.models.policy import PolicySet
from license_check.resolvers.base import BaseArtifactResolver
from license_check.resolvers.chain import ChainedResolver
from license_check.resolvers.local import LocalRepositoryResolver
from license_check.resolvers.remote import RemoteRepositoryResolver
from license_check.runner import (
    ComplianceRunner,
    build_artifact_resolver,
    load_dependencies,
    parse_dependencies,
)


class _Recording(BaseArtifactResolver):
    def __init__(self, inner: BaseArtifactResolver) -> None:
        self.inner = inner
        self.requested: list[str] = []

    def resolve(self, artifact: Artifact) -> Artifact:
        self.requested.append(artifact.coordinates)
        return self.inner.resolve(artifact)


@pytest.fixture
def runner(repo_root: Path) -> ComplianceRunner:
    return ComplianceRunner(LocalRepositoryResolver(repo_root))


def _deps(*coordinates: str) -> list[Artifact]:
    return [Artifact.from_coordinates(c) for c in coordinates]


class TestComplianceRunner:
    """Tests for ComplianceRunner.run."""

    def test_valid_license(self, runner: ComplianceRunner, write_pom) -> None:
        """Test a dependency with a direct Apache license and no lists."""
        write_pom("g:a:1.0", license_name="Apache License, Version 2.0")

        report = runner.run(_deps("g:a:1.0"), PolicySet())

        assert len(report.results) == 1
        result = report.results[0]
        assert result.outcome is CheckOutcome.LICENSE_VALID
        assert result.license_code == "apache2.0"
        assert report.build_fails is False

    def test_blacklisted_license_fails_build(self, runner: ComplianceRunner, write_pom) -> None:
        """Test the same dependency with apache2.0 on the blacklist."""
        write_pom("g:a:1.0", license_name="Apache License, Version 2.0")
        policy = build_policy(CheckConfig(blacklist=["apache2.0"]))

        report = runner.run(_deps("g:a:1.0"), policy)

        assert report.results[0].outcome is CheckOutcome.LICENSE_INVALID_BLACKLISTED
        assert report.build_fails is True

    def test_blacklisted_gpl(self, runner: ComplianceRunner, write_pom) -> None:
        """Test a GPL dependency against a GPL blacklist."""
        write_pom("g:gpl:1.0", license_name="GNU General Public License v3.0")
        policy = PolicySet(blacklist=frozenset({"gpl-3.0"}))

        report = runner.run(_deps("g:gpl:1.0"), policy)

        assert report.results[0].license_code == "gpl-3.0"
        assert report.results[0].outcome is CheckOutcome.LICENSE_INVALID_BLACKLISTED
        assert report.build_fails

    def test_whitelist(self, runner: ComplianceRunner, write_pom) -> None:
        """Test whitelist acceptance and rejection."""
        write_pom("g:apache:1.0", license_name="Apache License, Version 2.0")
        write_pom("g:mit:1.0", license_name="The MIT License")
        policy = PolicySet(whitelist=frozenset({"mit"}))

        report = runner.run(_deps("g:apache:1.0", "g:mit:1.0"), policy)

        outcomes = {r.artifact.artifact_id: r.outcome for r in report.results}
        assert outcomes == {
            "apache": CheckOutcome.LICENSE_INVALID_NOT_RECOGNIZED,
            "mit": CheckOutcome.LICENSE_VALID,
        }
        assert report.build_fails

    def test_no_license_fails_build(self, runner: ComplianceRunner, write_pom) -> None:
        """Test that a dependency without license fails by default."""
        write_pom("g:bare:1.0")

        with capture_logs() as captured:
            report = runner.run(_deps("g:bare:1.0"), PolicySet())

        assert report.results[0].outcome is CheckOutcome.LICENSE_INVALID_NO_INFO
        assert report.results[0].license_code is None
        assert report.build_fails
        assert any(
            e["event"] == "Build will fail because no license was found"
            and e["coordinates"] == "g:bare:1.0"
            for e in captured
        )

    def test_exclude_no_license_keeps_outcome(self, runner: ComplianceRunner, write_pom) -> None:
        """Test that excludeNoLicense only suppresses the build failure."""
        write_pom("g:bare:1.0")
        policy = PolicySet(exclude_no_license=True)

        report = runner.run(_deps("g:bare:1.0"), policy)

        assert report.results[0].outcome is CheckOutcome.LICENSE_INVALID_NO_INFO
        assert report.build_fails is False

    def test_unrecognized_license_name_is_no_info(
        self, runner: ComplianceRunner, write_pom
    ) -> None:
        """Test a declared license that matches no rule."""
        write_pom("g:odd:1.0", license_name="Acme Corporate Terms")

        report = runner.run(_deps("g:odd:1.0"), PolicySet())

        assert report.results[0].outcome is CheckOutcome.LICENSE_INVALID_NO_INFO

    def test_excluded_artifact_is_never_resolved(self, repo_root: Path) -> None:
        """Test that excluded dependencies skip resolution entirely."""
        recording = _Recording(LocalRepositoryResolver(repo_root))
        runner = ComplianceRunner(recording)
        policy = build_policy(CheckConfig(excludes=["g:internal:1.0"]))

        report = runner.run(_deps("g:internal:1.0"), policy)

        assert report.results[0].outcome is CheckOutcome.ARTIFACT_EXCLUDED
        assert report.results[0].license_code is None
        assert recording.requested == []
        assert report.build_fails is False

    def test_excluded_scope(self, runner: ComplianceRunner) -> None:
        """Test that excluded scopes are reported as excluded."""
        policy = build_policy(CheckConfig(excluded_scopes=["test"]))

        report = runner.run(_deps("junit:junit:4.13.2:test"), policy)

        assert report.results[0].outcome is CheckOutcome.ARTIFACT_EXCLUDED

    def test_inherited_license(self, runner: ComplianceRunner, write_pom) -> None:
        """Test that a license inherited from the parent is used."""
        write_pom("org.acme:child:1.0", parent="org.acme:parent:3")
        write_pom("org.acme:parent:3", license_name="Eclipse Public License - v 1.0")

        report = runner.run(_deps("org.acme:child:1.0"), PolicySet())

        assert report.results[0].license_code == "epl-1.0"

    def test_max_search_depth_from_policy(self, runner: ComplianceRunner, write_pom) -> None:
        """Test that the policy's depth bound is applied."""
        write_pom("org.acme:child:1.0", parent="org.acme:parent:3")
        write_pom("org.acme:parent:3", license_name="MIT")

        report = runner.run(_deps("org.acme:child:1.0"), PolicySet(max_search_depth=0))

        assert report.results[0].outcome is CheckOutcome.LICENSE_INVALID_NO_INFO

    def test_one_result_per_dependency_sorted(self, runner: ComplianceRunner, write_pom) -> None:
        """Test report completeness and ordering."""
        write_pom("g:none:1", parent="g:gone:1")
        write_pom("g:ok:1", license_name="MIT")
        write_pom("g:bad:1", license_name="GNU Affero General Public License v3")
        policy = build_policy(
            CheckConfig(blacklist=["agpl-3.0"], excluded_scopes=["test"])
        )

        report = runner.run(
            _deps("g:none:1", "g:ok:1", "g:skip:1:test", "g:bad:1"), policy
        )

        assert [r.artifact.artifact_id for r in report.results] == ["skip", "ok", "bad", "none"]
        assert report.count(CheckOutcome.LICENSE_INVALID_NO_INFO) == 1

    def test_top_level_resolution_failure_aborts(self, runner: ComplianceRunner, write_pom) -> None:
        """Test that an unresolvable dependency stops the whole run."""
        write_pom("g:ok:1", license_name="MIT")

        with pytest.raises(ResolutionError):
            runner.run(_deps("g:ok:1", "g:missing:1"), PolicySet())

    def test_top_level_read_failure_aborts(self, tmp_path: Path, runner: ComplianceRunner) -> None:
        """Test that unreadable metadata of a dependency stops the run."""
        located = Artifact.from_coordinates("g:a:1").with_file(tmp_path / "a-1.jar")

        with pytest.raises(MetadataReadError):
            runner.run([located], PolicySet())

    def test_located_dependencies_are_not_resolved_again(
        self, repo_root: Path, write_pom
    ) -> None:
        """Test that dependencies with a file skip the resolver."""
        pom = write_pom("g:a:1", license_name="MIT")
        recording = _Recording(LocalRepositoryResolver(repo_root))

        report = ComplianceRunner(recording).run(
            [Artifact.from_coordinates("g:a:1").with_file(pom)], PolicySet()
        )

        assert report.results[0].license_code == "mit"
        assert recording.requested == []

    def test_custom_table(self, repo_root: Path, write_pom, tmp_path: Path) -> None:
        """Test that the runner uses the table it was given."""
        rules = tmp_path / "rules.txt"
        rules.write_text("acme\tx\tAcme License\tacme\n")
        write_pom("g:a:1", license_name="Acme Corporate Terms")
        runner = ComplianceRunner(LocalRepositoryResolver(repo_root), LicenseTable(rules))

        report = runner.run(_deps("g:a:1"), PolicySet())

        assert report.results[0].license_code == "acme"
        assert runner.table.is_loaded

    def test_malformed_table_aborts_before_checking(
        self, repo_root: Path, tmp_path: Path
    ) -> None:
        """Test that the rule table is loaded before any dependency."""
        rules = tmp_path / "rules.txt"
        rules.write_text("broken row\n")
        recording = _Recording(LocalRepositoryResolver(repo_root))

        with pytest.raises(RuleTableError):
            ComplianceRunner(recording, LicenseTable(rules)).run(_deps("g:a:1"), PolicySet())
        assert recording.requested == []


class TestLoadDependencies:
    """Tests for load_dependencies and parse_dependencies."""

    def test_reads_file(self, tmp_path: Path) -> None:
        """Test comments, blank lines and scopes."""
        path = tmp_path / "deps.txt"
        path.write_text(
            "# runtime\n"
            "org.slf4j:slf4j-api:2.0.9\n"
            "\n"
            "junit:junit:4.13.2:test\n"
        )

        artifacts = load_dependencies(path)

        assert [a.coordinates for a in artifacts] == [
            "org.slf4j:slf4j-api:2.0.9",
            "junit:junit:4.13.2",
        ]
        assert artifacts[1].scope == "test"

    def test_invalid_line(self, tmp_path: Path) -> None:
        """Test that bad lines name their line number."""
        path = tmp_path / "deps.txt"
        path.write_text("g:a:1\nnot-a-coordinate\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_dependencies(path)
        assert ":2:" in str(exc_info.value)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            load_dependencies(tmp_path / "missing.txt")

    def test_parse_dependencies_rejects_bad_input(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_dependencies(["g:a"])


class TestBuildArtifactResolver:
    """Tests for build_artifact_resolver."""

    def test_local_then_remote(self, tmp_path: Path) -> None:
        resolver = build_artifact_resolver(
            CheckConfig(local_repository=str(tmp_path), cache_dir=str(tmp_path / "cache"))
        )
        assert isinstance(resolver, ChainedResolver)
        kinds = [type(r) for r in resolver._resolvers]
        assert kinds == [LocalRepositoryResolver, RemoteRepositoryResolver]

    def test_offline(self, tmp_path: Path) -> None:
        resolver = build_artifact_resolver(
            CheckConfig(local_repository=str(tmp_path), offline=True)
        )
        assert [type(r) for r in resolver._resolvers] == [LocalRepositoryResolver]
