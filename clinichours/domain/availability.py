"""
Answers which clinics are open at a given moment.
"""

import logging
from datetime import datetime
from typing import List

from .models import CompiledSchedule, weekday_abbreviation

logger = logging.getLogger(__name__)


def get_open_clinics(schedule: CompiledSchedule, at: datetime) -> List[str]:
    """
    Return the names of the clinics open at the given moment, sorted.

    Only the weekday and time of day of ``at`` are used; converting it to
    the clinics' local time is up to the caller.
    """
    day = weekday_abbreviation(at.isoweekday())
    moment = at.time()

    open_clinics = [
        name
        for name, windows in schedule.clinics_on(day).items()
        if any(window.contains(moment) for window in windows)
    ]

    logger.debug("%d clinic(s) open on %s at %s", len(open_clinics), day, moment)

    return sorted(open_clinics)
