"""License rule table."""

from license_check.licenses.table import LicenseTable, parse_rules

__all__ = ["LicenseTable", "parse_rules"]
