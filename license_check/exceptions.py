"""Custom exceptions for license-check."""


class LicenseCheckError(Exception):
    """Base exception for all license-check errors."""

    pass


class ResolutionError(LicenseCheckError):
    """Exception raised when an artifact cannot be located in any repository."""

    pass


class MetadataReadError(LicenseCheckError):
    """Exception raised when an artifact's POM metadata cannot be read."""

    pass


class RuleTableError(LicenseCheckError):
    """Exception raised when the license rule table is malformed."""

    pass


class NetworkError(LicenseCheckError):
    """Exception raised when a network request fails."""

    pass


class ConfigurationError(LicenseCheckError):
    """Exception raised when configuration is invalid."""

    pass
