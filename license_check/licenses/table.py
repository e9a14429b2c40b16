"""License rule table: maps free-text license names to license codes."""

from __future__ import annotations

import re
from importlib.resources import files
from pathlib import Path
from typing import Optional

from license_check.exceptions import RuleTableError
from license_check.models.license import LicenseRule

# Column layout of the tab-delimited rule resource
CODE_COLUMN = 0
NAME_COLUMN = 2
PATTERN_COLUMN = 3
MIN_COLUMNS = 4


def _read_bundled_rules() -> str:
    resource = files("license_check") / "data" / "licenses.txt"
    return resource.read_text(encoding="utf-8")


def parse_rules(text: str, source: str = "<rules>") -> list[LicenseRule]:
    """Parse tab-delimited rule rows.

    Blank lines are skipped. Any other row must provide at least four
    columns, a code, a pattern, and a pattern that compiles.

    Args:
        text: Full contents of the rule resource.
        source: Name used in error messages.

    Returns:
        Rules in file order.

    Raises:
        RuleTableError: On the first malformed row.
    """
    rules: list[LicenseRule] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        columns = line.split("\t")
        if len(columns) < MIN_COLUMNS:
            raise RuleTableError(
                f"{source}:{line_number}: expected at least {MIN_COLUMNS} "
                f"tab-separated columns, found {len(columns)}"
            )
        code = columns[CODE_COLUMN].strip()
        raw_pattern = columns[PATTERN_COLUMN].strip()
        if not code or not raw_pattern:
            raise RuleTableError(f"{source}:{line_number}: empty code or pattern")
        try:
            pattern = re.compile(raw_pattern, re.IGNORECASE)
        except re.error as e:
            raise RuleTableError(
                f"{source}:{line_number}: invalid pattern '{raw_pattern}': {e}"
            ) from e
        rules.append(
            LicenseRule(
                code=code,
                canonical_name=columns[NAME_COLUMN].strip(),
                pattern=pattern,
            )
        )
    return rules


class LicenseTable:
    """Ordered, read-only collection of license rules.

    Rules are loaded on first use and cached; the first rule whose pattern
    occurs in a license name decides its code.
    """

    def __init__(self, source: Optional[Path] = None) -> None:
        """Initialize the table.

        Args:
            source: Optional path to a rule file. Defaults to the rules
                bundled with the package.
        """
        self._source = source
        self._rules: Optional[tuple[LicenseRule, ...]] = None

    @property
    def is_loaded(self) -> bool:
        """True once the rules have been read."""
        return self._rules is not None

    @property
    def rules(self) -> tuple[LicenseRule, ...]:
        """All rules in precedence order, loading them if needed."""
        if self._rules is None:
            self.load()
        assert self._rules is not None
        return self._rules

    def load(self) -> LicenseTable:
        """Read the rule resource once.

        Returns:
            This table, for chaining.

        Raises:
            RuleTableError: If the resource cannot be read or is malformed.
        """
        if self._rules is not None:
            return self

        if self._source is None:
            source_name = "licenses.txt"
            try:
                text = _read_bundled_rules()
            except OSError as e:
                raise RuleTableError(f"Cannot read bundled license rules: {e}") from e
        else:
            source_name = str(self._source)
            try:
                text = self._source.read_text(encoding="utf-8")
            except OSError as e:
                raise RuleTableError(
                    f"Cannot read license rules '{self._source}': {e}"
                ) from e

        self._rules = tuple(parse_rules(text, source_name))
        return self

    def rule_for(self, license_name: Optional[str]) -> Optional[LicenseRule]:
        """Return the first rule matching ``license_name``, if any."""
        if not license_name:
            return None
        for rule in self.rules:
            if rule.matches(license_name):
                return rule
        return None

    def code_for(self, license_name: Optional[str]) -> Optional[str]:
        """Convert a free-text license name to its license code.

        Args:
            license_name: License name as declared in a POM.

        Returns:
            Code of the first matching rule, or None when the name is
            missing, empty, or matches no rule.
        """
        rule = self.rule_for(license_name)
        return rule.code if rule is not None else None
