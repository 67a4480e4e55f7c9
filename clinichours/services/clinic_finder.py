"""
Application service for answering "which clinics are open?".

The service loads the roster through a roster source adapter, compiles it
once with the domain-level ``ScheduleCompiler`` and answers queries against
the cached schedule. Roster sources are described by a simple protocol so
tests can plug in a stub.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Protocol

from ..domain.availability import get_open_clinics
from ..domain.models import Clinic, CompiledSchedule
from ..domain.schedule_compiler import ScheduleCompiler

logger = logging.getLogger(__name__)


class RosterSourceProtocol(Protocol):
    """Protocol describing the roster source behaviour needed by the service."""

    def load_roster(self) -> List[Clinic]:
        """Return every clinic in the roster."""


class ClinicFinderService:
    """
    Orchestrates roster loading, schedule compilation and availability queries.

    The compiled schedule is built on first use and kept until ``refresh()``
    is called.
    """

    def __init__(
        self,
        roster_source: RosterSourceProtocol,
        compiler: Optional[ScheduleCompiler] = None,
    ) -> None:
        self._roster_source = roster_source
        self._compiler = compiler or ScheduleCompiler()
        self._clinics: Optional[List[Clinic]] = None
        self._schedule: Optional[CompiledSchedule] = None

    @property
    def schedule(self) -> CompiledSchedule:
        """The compiled schedule, compiling the roster if needed."""
        if self._schedule is None:
            self._schedule = self._compiler.compile(self.clinics())
        return self._schedule

    def clinics(self) -> List[Clinic]:
        """The roster as last loaded from the source."""
        if self._clinics is None:
            self._clinics = self._roster_source.load_roster()
            logger.debug("Roster loaded with %d clinic(s)", len(self._clinics))
        return list(self._clinics)

    def refresh(self) -> CompiledSchedule:
        """Reload the roster and recompile the schedule from scratch."""
        self._clinics = None
        self._schedule = None
        return self.schedule

    def open_clinics(self, at: datetime) -> List[str]:
        """Names of the clinics open at the given moment, sorted."""
        return get_open_clinics(self.schedule, at)
