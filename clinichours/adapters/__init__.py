"""
Adapters layer - Clinic roster sources (files and bundled example data).
"""

from .roster_loader import ExampleRosterSource, RosterFileLoader, StaticRosterSource

__all__ = ["ExampleRosterSource", "RosterFileLoader", "StaticRosterSource"]
