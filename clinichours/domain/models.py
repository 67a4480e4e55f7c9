"""
Domain models for opening-hour rules and compiled clinic schedules.
"""

from dataclasses import dataclass, field
from datetime import datetime, time
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

# Monday is weekday 1 and Sunday is weekday 7 (ISO ordering).
WEEKDAY_ABBREVIATIONS: Tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

START_OF_DAY = time.min
END_OF_DAY = time.max


def weekday_index(abbreviation: str) -> int:
    """Resolve a three-letter weekday abbreviation to its index (Mon=1 .. Sun=7)."""
    return WEEKDAY_ABBREVIATIONS.index(abbreviation.title()) + 1


def weekday_abbreviation(index: int) -> str:
    """Resolve a weekday index to its abbreviation, Monday following Sunday."""
    return WEEKDAY_ABBREVIATIONS[(index - 1) % 7]


def parse_time_token(token: str) -> time:
    """
    Parse a 12-hour clock token such as ``9am``, ``12pm`` or ``9:30pm``.
    """
    normalized = token.strip().upper()
    fmt = "%I:%M%p" if ":" in normalized else "%I%p"
    return datetime.strptime(normalized, fmt).time()


def format_time(value: time) -> str:
    """Format a time of day the way opening-hour rules write it."""
    if value == END_OF_DAY:
        return "midnight"
    hour = value.hour % 12 or 12
    suffix = "am" if value.hour < 12 else "pm"
    if value.minute:
        return f"{hour}:{value.minute:02d}{suffix}"
    return f"{hour}{suffix}"


@dataclass(frozen=True)
class TimeWindow:
    """
    A closed window of time on a single day.

    Invariant: start must not be after end.
    """
    start: time
    end: time

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Start time {self.start} must not be after end time {self.end}")

    def contains(self, moment: time) -> bool:
        """Check if a time of day lies within the window, both ends included."""
        return self.start <= moment <= self.end

    def __str__(self) -> str:
        return f"{format_time(self.start)} - {format_time(self.end)}"


@dataclass(frozen=True)
class OpeningRule:
    """
    A parsed opening-hour rule such as ``Mon-Fri 9am - 5pm``.

    The day range is inclusive and is only ever walked forward, so a range
    like ``Sat-Mon`` covers no days at all.
    """
    start_day: int
    end_day: int
    opens: time
    closes: time

    @classmethod
    def parse(cls, text: str) -> "OpeningRule":
        """Parse a rule of the shape ``DAYS START - END``."""
        days, opens, _, closes = text.split()
        start_day, _, end_day = days.partition("-")

        start_index = weekday_index(start_day)
        end_index = weekday_index(end_day) if end_day else start_index

        return cls(
            start_day=start_index,
            end_day=end_index,
            opens=parse_time_token(opens),
            closes=parse_time_token(closes),
        )

    @property
    def is_overnight(self) -> bool:
        """A rule closing at or before its opening time runs past midnight."""
        return self.closes <= self.opens

    def weekdays(self) -> range:
        """Indexes of the days the rule opens on."""
        return range(self.start_day, self.end_day + 1)


@dataclass(frozen=True)
class Clinic:
    """A clinic and its opening-hour rules."""
    name: str
    opening_hours: Tuple[str, ...] = ()

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Clinic":
        """Build a clinic from a ``{name, openingHours}`` roster record."""
        hours = record.get("openingHours", record.get("opening_hours", ()))
        return cls(name=record["name"], opening_hours=tuple(hours))


ClinicWindows = Mapping[str, Tuple[TimeWindow, ...]]

_NO_CLINICS: ClinicWindows = MappingProxyType({})


@dataclass(frozen=True)
class CompiledSchedule:
    """
    Per-weekday index of the time windows during which each clinic is open.

    Maps a weekday abbreviation to a mapping of clinic name to windows.
    Days on which no clinic opens are absent. Instances are read-only.
    """
    days: Mapping[str, ClinicWindows] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_buckets(cls, buckets: Dict[str, Dict[str, List[TimeWindow]]]) -> "CompiledSchedule":
        """Freeze mutable day buckets into a schedule."""
        frozen = {
            day: MappingProxyType({name: tuple(windows) for name, windows in clinics.items()})
            for day, clinics in buckets.items()
        }
        return cls(days=MappingProxyType(frozen))

    def clinics_on(self, day: str) -> ClinicWindows:
        """Return the clinic windows for a weekday, empty if nobody opens."""
        return self.days.get(day, _NO_CLINICS)

    def windows_for(self, day: str, clinic_name: str) -> Tuple[TimeWindow, ...]:
        """Return one clinic's windows for a weekday."""
        return self.clinics_on(day).get(clinic_name, ())

    def clinic_names(self) -> List[str]:
        """All clinics opening on at least one day, sorted."""
        return sorted({name for clinics in self.days.values() for name in clinics})
