"""Exceptions raised by fixtures."""

from __future__ import annotations


class FixtureError(Exception):
    """Base class for fixture errors."""

    @property
    def name(self) -> str:
        """Return the user-friendly name of this error."""
        return "Fixture Error"


class InvalidConfigError(FixtureError):
    """Raised when a fixture is used with incorrect or missing configuration."""

    @property
    def name(self) -> str:
        return "Invalid Configuration"
