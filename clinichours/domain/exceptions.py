"""
Domain-specific exception hierarchy for the clinic hours application.
"""


class ClinicHoursError(Exception):
    """Base class for all application-level errors."""


class RosterLoadError(ClinicHoursError):
    """Raised when a clinic roster cannot be read or has the wrong shape."""
