"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability import get_open_clinics
from .models import Clinic, CompiledSchedule, OpeningRule, TimeWindow
from .schedule_compiler import ScheduleCompiler, parse_opening_hours

__all__ = [
    "Clinic",
    "CompiledSchedule",
    "OpeningRule",
    "TimeWindow",
    "ScheduleCompiler",
    "get_open_clinics",
    "parse_opening_hours",
]
