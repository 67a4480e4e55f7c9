"""
Tests for the availability query.
"""

import json

import pendulum
import pytest

from clinichours.adapters.roster_loader import EXAMPLE_ROSTER_FILE
from clinichours.domain.availability import get_open_clinics
from clinichours.domain.schedule_compiler import parse_opening_hours

TZ = "Pacific/Auckland"

# 2024-11-25 is a Monday.
DAY_OF_MONTH = {"Mon": 25, "Tue": 26, "Wed": 27, "Thu": 28, "Fri": 29, "Sat": 30, "Sun": 24}


def at(day: str, hour: int, minute: int = 0):
    return pendulum.datetime(2024, 11, DAY_OF_MONTH[day], hour, minute, tz=TZ)


@pytest.fixture
def example_schedule():
    with open(EXAMPLE_ROSTER_FILE, "r", encoding="utf-8") as f:
        return parse_opening_hours(json.load(f))


class TestExampleRoster:
    """Queries against the bundled example clinics."""

    def test_no_clinics_open_on_sunday_at_5am(self, example_schedule):
        assert get_open_clinics(example_schedule, at("Sun", 5)) == []

    def test_only_mayo_clinic_open_on_monday_at_8am(self, example_schedule):
        assert get_open_clinics(example_schedule, at("Mon", 8)) == ["Mayo Clinic"]

    def test_all_except_angios_r_us_open_on_monday_at_12pm(self, example_schedule):
        assert get_open_clinics(example_schedule, at("Mon", 12)) == [
            "Atrium Analysts",
            "Auckland Cardiology",
            "Mayo Clinic",
            "The Heart Team",
        ]

    def test_all_except_angios_r_us_open_on_friday_at_8pm(self, example_schedule):
        """Atrium Analysts closes at 8pm and still counts as open at 8pm."""
        assert get_open_clinics(example_schedule, at("Fri", 20)) == [
            "Atrium Analysts",
            "Auckland Cardiology",
            "Mayo Clinic",
            "The Heart Team",
        ]

    def test_only_the_heart_team_open_on_sunday_at_1am(self, example_schedule):
        assert get_open_clinics(example_schedule, at("Sun", 1)) == ["The Heart Team"]

    def test_weekend_clinics_open_on_sunday_at_11am(self, example_schedule):
        assert get_open_clinics(example_schedule, at("Sun", 11)) == [
            "Angios R Us",
            "Auckland Cardiology",
            "Mayo Clinic",
        ]

    def test_late_clinics_open_on_tuesday_at_10pm(self, example_schedule):
        assert get_open_clinics(example_schedule, at("Tue", 22)) == [
            "Auckland Cardiology",
            "The Heart Team",
        ]


class TestGetOpenClinics:
    """Tests for get_open_clinics."""

    def test_day_without_bucket_returns_empty_list(self):
        schedule = parse_opening_hours([{"name": "C", "openingHours": ["Mon-Fri 9am - 5pm"]}])

        for hour in range(24):
            assert get_open_clinics(schedule, at("Sat", hour)) == []
            assert get_open_clinics(schedule, at("Sun", hour)) == []

    def test_weekday_range(self):
        """Open every hour from 9 to 17 inclusive, closed at 8 and 18."""
        schedule = parse_opening_hours([{"name": "C", "openingHours": ["Mon-Fri 9am - 5pm"]}])

        for day in ("Mon", "Tue", "Wed", "Thu", "Fri"):
            for hour in range(9, 18):
                assert get_open_clinics(schedule, at(day, hour)) == ["C"]
            assert get_open_clinics(schedule, at(day, 8)) == []
            assert get_open_clinics(schedule, at(day, 18)) == []

    def test_closing_time_is_inclusive_to_the_minute(self):
        schedule = parse_opening_hours([{"name": "C", "openingHours": ["Mon 9am - 5pm"]}])

        assert get_open_clinics(schedule, at("Mon", 17, 0)) == ["C"]
        assert get_open_clinics(schedule, at("Mon", 17, 1)) == []

    def test_overnight_rule(self):
        schedule = parse_opening_hours([{"name": "C", "openingHours": ["Sat 10pm - 2am"]}])

        assert get_open_clinics(schedule, at("Sat", 23)) == ["C"]
        assert get_open_clinics(schedule, at("Sat", 23, 59)) == ["C"]
        assert get_open_clinics(schedule, at("Sun", 0)) == ["C"]
        assert get_open_clinics(schedule, at("Sun", 1)) == ["C"]
        assert get_open_clinics(schedule, at("Sun", 3)) == []
        assert get_open_clinics(schedule, at("Sat", 21)) == []

    def test_overnight_tail_found_on_following_day(self):
        """A Monday night rule is found on Tuesday through the Tuesday bucket."""
        schedule = parse_opening_hours([{"name": "C", "openingHours": ["Mon 10pm - 2am"]}])

        assert "C" in schedule.clinics_on("Tue")
        assert get_open_clinics(schedule, at("Tue", 1)) == ["C"]
        assert get_open_clinics(schedule, at("Mon", 1)) == []

    def test_results_sorted_without_duplicates(self):
        """Overlapping rules do not list a clinic twice."""
        schedule = parse_opening_hours(
            [
                {"name": "beta", "openingHours": ["Mon 9am - 5pm"]},
                {"name": "Alpha", "openingHours": ["Mon 8am - 6pm", "Mon 10am - 2pm"]},
                {"name": "Zulu", "openingHours": ["Mon 11am - 1pm"]},
            ]
        )

        assert get_open_clinics(schedule, at("Mon", 12)) == ["Alpha", "Zulu", "beta"]

    def test_only_weekday_and_time_of_day_matter(self):
        """Any week gives the same answer."""
        schedule = parse_opening_hours([{"name": "C", "openingHours": ["Wed 9am - 5pm"]}])

        assert get_open_clinics(schedule, pendulum.datetime(2019, 1, 2, 10, tz=TZ)) == ["C"]
        assert get_open_clinics(schedule, pendulum.datetime(2031, 6, 4, 10, tz="UTC")) == ["C"]

    def test_compiling_twice_gives_same_answers(self, example_schedule):
        with open(EXAMPLE_ROSTER_FILE, "r", encoding="utf-8") as f:
            again = parse_opening_hours(json.load(f))

        for day in DAY_OF_MONTH:
            for hour in range(24):
                moment = at(day, hour)
                assert get_open_clinics(example_schedule, moment) == get_open_clinics(again, moment)

    def test_query_does_not_mutate_schedule(self, example_schedule):
        before = {day: dict(clinics) for day, clinics in example_schedule.days.items()}

        get_open_clinics(example_schedule, at("Mon", 12))

        assert {day: dict(clinics) for day, clinics in example_schedule.days.items()} == before
