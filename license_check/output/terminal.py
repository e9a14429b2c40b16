"""Terminal output formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

from license_check.constants import BANNER, DISCLAIMER, EXPLANATION
from license_check.models.check import CheckOutcome, CheckReport, CheckResult
from license_check.models.options import Verbosity

LABEL_WIDTH = 25
CODE_WIDTH = 10

_OUTCOME_STYLES = {
    CheckOutcome.ARTIFACT_EXCLUDED: "dim",
    CheckOutcome.LICENSE_VALID: "green",
    CheckOutcome.LICENSE_INVALID_NOT_RECOGNIZED: "red",
    CheckOutcome.LICENSE_INVALID_BLACKLISTED: "bold red",
    CheckOutcome.LICENSE_INVALID_NO_INFO: "yellow",
}

PASS_MESSAGE = "RESULT: license check complete, no issues found."
FAIL_MESSAGE = (
    "RESULT: At least one license could not be verified or appears on your "
    "blacklist or is not on your whitelist. Build fails."
)


def format_result_line(result: CheckResult) -> str:
    """Format one result as a fixed-width report line.

    Example::

        LICENSE: VALID                      [  apache2.0 ] g:a:1.0:compile
    """
    label = result.outcome.label.ljust(LABEL_WIDTH)
    code = result.display_code.rjust(CODE_WIDTH)
    return f"LICENSE: {label}  [ {code} ] {result.artifact}"


class TerminalFormatter:
    """Format check reports for terminal display using Rich.

    Results are printed one per line in report order, with the outcome label
    and license code aligned in fixed-width columns.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        verbosity: Verbosity = Verbosity.NORMAL,
    ) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
            verbosity: Output verbosity level.
        """
        self._console = console if console is not None else Console()
        self._verbosity = verbosity

    def format_report(self, report: CheckReport) -> None:
        """Display a check report.

        Args:
            report: The report to display.
        """
        if self._verbosity == Verbosity.QUIET:
            self._print_quiet_output(report)
            return

        self._console.print(Rule(BANNER, style="bold"))
        self._console.print(f"Validating licenses for {report.total} artifact(s)")
        self._console.print("")
        self._console.print(EXPLANATION)
        self._console.print("")
        self._console.print(DISCLAIMER, style="dim")
        self._console.print("")
        self._console.print("--[ Licenses found ]------", highlight=False, markup=False)

        for result in report.results:
            self._print_result(result)

        if self._verbosity == Verbosity.VERBOSE:
            self._print_counts(report)

        self._console.print("")
        self._print_verdict(report)

    def _print_result(self, result: CheckResult) -> None:
        line = Text(format_result_line(result), style=_OUTCOME_STYLES[result.outcome])
        self._console.print(line, soft_wrap=True)

    def _print_counts(self, report: CheckReport) -> None:
        self._console.print("")
        for outcome in sorted(CheckOutcome, key=lambda o: o.rank):
            count = report.count(outcome)
            if count:
                self._console.print(
                    Text(f"{outcome.label.ljust(LABEL_WIDTH)} {count}")
                )

    def _print_verdict(self, report: CheckReport) -> None:
        if report.build_fails:
            self._console.print(Text(FAIL_MESSAGE, style="bold red"))
        else:
            self._console.print(Text(PASS_MESSAGE, style="green"))

    def _print_quiet_output(self, report: CheckReport) -> None:
        """Print only results that need attention and the verdict.

        Args:
            report: The report to display.
        """
        for result in report.results:
            if result.outcome in (
                CheckOutcome.LICENSE_VALID,
                CheckOutcome.ARTIFACT_EXCLUDED,
            ):
                continue
            self._print_result(result)
        self._print_verdict(report)
