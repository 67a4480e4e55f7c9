"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .clinic_finder import ClinicFinderService, RosterSourceProtocol

__all__ = ["ClinicFinderService", "RosterSourceProtocol"]
