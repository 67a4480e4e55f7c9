"""
clinichours - find out which clinics are open at a given moment.
"""

from .domain.availability import get_open_clinics
from .domain.models import Clinic, CompiledSchedule, TimeWindow
from .domain.schedule_compiler import ScheduleCompiler, parse_opening_hours

__version__ = "0.1.0"

__all__ = [
    "Clinic",
    "CompiledSchedule",
    "ScheduleCompiler",
    "TimeWindow",
    "get_open_clinics",
    "parse_opening_hours",
]
