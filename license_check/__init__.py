"""Open source license compliance checker for Maven-style dependencies."""

__version__ = "0.1.0"
