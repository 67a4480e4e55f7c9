"""
Compiles clinic opening-hour rules into a queryable weekly schedule.

Pure domain logic: no I/O, no clock, no shared state. The compiled
schedule is a new value on every call.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Union

from .models import (
    END_OF_DAY,
    START_OF_DAY,
    Clinic,
    CompiledSchedule,
    OpeningRule,
    TimeWindow,
    weekday_abbreviation,
)

logger = logging.getLogger(__name__)

RosterEntry = Union[Clinic, Mapping[str, Any]]


class ScheduleCompiler:
    """
    Builds a CompiledSchedule from a clinic roster.

    Algorithm, for every rule of every clinic:
    1. Parse the rule into a day range and opening/closing times
    2. Walk the day range forward, one weekday at a time
    3. Same-day rules add one window to that day
    4. Overnight rules add a window up to midnight on that day and a
       window from midnight on the following day
    """

    def compile(self, roster: Iterable[RosterEntry]) -> CompiledSchedule:
        """
        Compile a roster of clinics.

        Args:
            roster: Clinic values or ``{name, openingHours}`` records

        Returns:
            CompiledSchedule indexed by weekday abbreviation
        """
        buckets: Dict[str, Dict[str, List[TimeWindow]]] = {}
        clinic_count = 0
        rule_count = 0

        for entry in roster:
            clinic = entry if isinstance(entry, Clinic) else Clinic.from_record(entry)
            clinic_count += 1

            for text in clinic.opening_hours:
                rule_count += 1
                self._add_rule(buckets, clinic.name, OpeningRule.parse(text))

        logger.debug(
            "Compiled %d rule(s) for %d clinic(s) across %d weekday(s)",
            rule_count,
            clinic_count,
            len(buckets),
        )

        return CompiledSchedule.from_buckets(buckets)

    def _add_rule(
        self,
        buckets: Dict[str, Dict[str, List[TimeWindow]]],
        clinic_name: str,
        rule: OpeningRule,
    ) -> None:
        """Add the windows of a single rule to the day buckets."""
        for day_index in rule.weekdays():
            day = weekday_abbreviation(day_index)

            if rule.is_overnight:
                self._bucket(buckets, day, clinic_name).append(
                    TimeWindow(start=rule.opens, end=END_OF_DAY)
                )

                next_day = weekday_abbreviation(day_index + 1)
                self._bucket(buckets, next_day, clinic_name).append(
                    TimeWindow(start=START_OF_DAY, end=rule.closes)
                )
            else:
                self._bucket(buckets, day, clinic_name).append(
                    TimeWindow(start=rule.opens, end=rule.closes)
                )

    @staticmethod
    def _bucket(
        buckets: Dict[str, Dict[str, List[TimeWindow]]],
        day: str,
        clinic_name: str,
    ) -> List[TimeWindow]:
        """Return the window list for a (day, clinic) pair, creating it if new."""
        return buckets.setdefault(day, {}).setdefault(clinic_name, [])


def parse_opening_hours(roster: Iterable[RosterEntry]) -> CompiledSchedule:
    """
    Compile a clinic roster into a schedule that get_open_clinics() can query.

    The roster is assumed to be well formed; malformed rules are not
    reported and may raise whatever parsing raises.
    """
    return ScheduleCompiler().compile(roster)
