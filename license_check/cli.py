"""CLI entry point for license-check."""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path
from typing import Literal, Optional, cast

import click
import httpx
from rich.console import Console
from rich.text import Text

from license_check import __version__
from license_check.analysis.policy import build_policy
from license_check.config import CheckConfig, load_config
from license_check.constants import EXIT_ERROR, EXIT_ISSUES, EXIT_SUCCESS
from license_check.exceptions import ConfigurationError, LicenseCheckError
from license_check.log import setup_logging
from license_check.models.artifact import Artifact
from license_check.models.check import CheckReport
from license_check.models.options import ReportOptions, Verbosity
from license_check.output.report_json import ReportJsonFormatter
from license_check.output.terminal import TerminalFormatter
from license_check.runner import (
    ComplianceRunner,
    build_artifact_resolver,
    load_dependencies,
    parse_dependencies,
)

# Module-level console for consistent output
_console = Console()
# Separate console for error output (writes to stderr)
_error_console = Console(stderr=True)

_LOG_LEVELS = {
    Verbosity.QUIET: logging.ERROR,
    Verbosity.NORMAL: logging.WARNING,
    Verbosity.VERBOSE: logging.DEBUG,
}


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Open Source License Check - fail the build on unacceptable licenses.

    Reads the license declared in each dependency's POM (or its parents),
    normalizes it to a license code and checks it against your policy.

    \b
    Examples:
        license-check check org.slf4j:slf4j-api:2.0.9
        license-check check -d dependencies.txt --blacklist gpl-3.0
        license-check check -d dependencies.txt --format json
    """
    pass


@main.command()
@click.argument("coordinates", nargs=-1)
@click.option(
    "--dependencies",
    "-d",
    "dependencies_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="File listing groupId:artifactId:version[:scope], one per line.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
@click.option("--exclude", "excludes", multiple=True, help="Coordinates to skip.")
@click.option(
    "--exclude-regex",
    "excludes_regex",
    multiple=True,
    help="Regex fully matched against coordinates to skip.",
)
@click.option(
    "--exclude-no-license",
    "excludes_no_license",
    is_flag=True,
    default=False,
    help="Do not fail the build for dependencies without a license.",
)
@click.option("--blacklist", multiple=True, help="License code that fails the build.")
@click.option("--whitelist", multiple=True, help="License code that is allowed.")
@click.option(
    "--excluded-scope",
    "excluded_scopes",
    multiple=True,
    help="Dependency scope to skip (e.g. test).",
)
@click.option(
    "--max-search-depth",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum number of parent POMs to search (default: 12).",
)
@click.option(
    "--local-repository",
    type=click.Path(file_okay=False),
    default=None,
    help="Local Maven repository root (default: ~/.m2/repository).",
)
@click.option(
    "--offline",
    is_flag=True,
    default=False,
    help="Never contact remote repositories.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["terminal", "json"], case_sensitive=False),
    default="terminal",
    help="Output format for the report (default: terminal).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write report to file instead of stdout.",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Show debug logging and per-outcome counts.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_flag",
    is_flag=True,
    default=False,
    help="Show only failing dependencies and the result.",
)
def check(
    coordinates: tuple[str, ...],
    dependencies_path: str | None,
    config_path: str | None,
    excludes: tuple[str, ...],
    excludes_regex: tuple[str, ...],
    excludes_no_license: bool,
    blacklist: tuple[str, ...],
    whitelist: tuple[str, ...],
    excluded_scopes: tuple[str, ...],
    max_search_depth: Optional[int],
    local_repository: str | None,
    offline: bool,
    output_format: str,
    output_path: str | None,
    verbose_flag: bool,
    quiet_flag: bool,
) -> None:
    """Check dependency licenses against your policy.

    Dependencies are given as COORDINATES arguments, with --dependencies,
    or both.

    \b
    Examples:
        license-check check org.slf4j:slf4j-api:2.0.9
        license-check check -d dependencies.txt --whitelist mit --whitelist apache2.0
        license-check check -d dependencies.txt --excluded-scope test
        license-check check -d dependencies.txt --offline --format json -o report.json
    """
    if verbose_flag and quiet_flag:
        raise click.UsageError("--verbose and --quiet are mutually exclusive.")
    if not coordinates and dependencies_path is None:
        raise click.UsageError("No dependencies given: pass COORDINATES or --dependencies.")

    if quiet_flag:
        verbosity = Verbosity.QUIET
    elif verbose_flag:
        verbosity = Verbosity.VERBOSE
    else:
        verbosity = Verbosity.NORMAL

    format_value = cast(Literal["terminal", "json"], output_format.lower())
    options = ReportOptions(format=format_value, verbosity=verbosity)
    setup_logging(_LOG_LEVELS[verbosity])

    try:
        config = load_config(config_path)
        config = _apply_overrides(
            config,
            excludes=excludes,
            excludes_regex=excludes_regex,
            excludes_no_license=excludes_no_license,
            blacklist=blacklist,
            whitelist=whitelist,
            excluded_scopes=excluded_scopes,
            max_search_depth=max_search_depth,
            local_repository=local_repository,
            offline=offline,
        )

        dependencies = _collect_dependencies(coordinates, dependencies_path)
        report = _run_check(dependencies, config)
        _display_report(report, options, output_path)

        if report.build_fails:
            sys.exit(EXIT_ISSUES)
        sys.exit(EXIT_SUCCESS)

    except LicenseCheckError as e:
        _display_error(e, options.format)
        sys.exit(EXIT_ERROR)


def _apply_overrides(
    config: CheckConfig,
    *,
    excludes: tuple[str, ...],
    excludes_regex: tuple[str, ...],
    excludes_no_license: bool,
    blacklist: tuple[str, ...],
    whitelist: tuple[str, ...],
    excluded_scopes: tuple[str, ...],
    max_search_depth: Optional[int],
    local_repository: str | None,
    offline: bool,
) -> CheckConfig:
    """Merge command line options into the loaded configuration.

    List options extend the configured lists; flags can only switch
    behaviour on; scalar options replace the configured value when given.
    """
    update: dict[str, object] = {
        "excludes": [*config.excludes, *excludes],
        "excludes_regex": [*config.excludes_regex, *excludes_regex],
        "blacklist": [*config.blacklist, *blacklist],
        "whitelist": [*config.whitelist, *whitelist],
        "excluded_scopes": [*config.excluded_scopes, *excluded_scopes],
        "excludes_no_license": config.excludes_no_license or excludes_no_license,
        "offline": config.offline or offline,
    }
    if max_search_depth is not None:
        update["max_search_depth"] = max_search_depth
    if local_repository is not None:
        update["local_repository"] = local_repository
    return config.model_copy(update=update)


def _collect_dependencies(
    coordinates: tuple[str, ...], dependencies_path: str | None
) -> list[Artifact]:
    dependencies = parse_dependencies(coordinates)
    if dependencies_path is not None:
        dependencies.extend(load_dependencies(Path(dependencies_path)))
    return dependencies


def _run_check(dependencies: list[Artifact], config: CheckConfig) -> CheckReport:
    """Execute the compliance run.

    Args:
        dependencies: Direct dependencies to check.
        config: Effective configuration.

    Returns:
        The sorted check report.
    """
    policy = build_policy(config)
    with httpx.Client() as client:
        resolver = build_artifact_resolver(config, client=client)
        return ComplianceRunner(resolver).run(dependencies, policy)


def _write_output_to_file(content: str, path: str) -> None:
    """Write report content to file.

    Raises:
        ConfigurationError: If file cannot be written.
    """
    file_path = Path(path)
    try:
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot write to file '{path}': {e}") from e

    _error_console.print(f"[green]Report written to {path}[/green]")


def _display_report(
    report: CheckReport, options: ReportOptions, output_path: str | None = None
) -> None:
    """Display the report in the requested format.

    Args:
        report: The report to display.
        options: Report options including format and verbosity.
        output_path: Optional file path to write output to.
    """
    if options.format == "json":
        content = ReportJsonFormatter().format_report(report)
    elif output_path:
        # Plain fixed-width text when the terminal report goes to a file
        file_console = Console(record=True, width=120, file=io.StringIO())
        TerminalFormatter(console=file_console, verbosity=options.verbosity).format_report(
            report
        )
        content = file_console.export_text()
    else:
        TerminalFormatter(console=_console, verbosity=options.verbosity).format_report(
            report
        )
        return

    if output_path:
        _write_output_to_file(content, output_path)
    else:
        click.echo(content)


def _display_error(error: LicenseCheckError, format_type: str) -> None:
    """Display error message to user on stderr.

    Args:
        error: The exception that occurred.
        format_type: Output format type for styling.
    """
    error_type = type(error).__name__
    message = f"Error: {error_type}: {error}"

    if format_type == "terminal":
        _error_console.print(Text(message, style="red bold"))
    else:
        click.echo(message, err=True)


if __name__ == "__main__":
    main()
