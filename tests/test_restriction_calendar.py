# tests/test_restriction_calendar.py
"""Unit tests for the pico y placa calendar."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import date
from parking_manager.schemas.enums import RestrictionDay
from parking_manager.services.restriction_calendar import restriction_day, weekday_of, is_restricted_on

MONDAY = date(2024, 1, 15)
THURSDAY = date(2024, 1, 18)
FRIDAY = date(2024, 1, 19)
SATURDAY = date(2024, 1, 20)
SUNDAY = date(2024, 1, 21)


class TestRestrictionDay:
    @pytest.mark.parametrize("plate,expected", [
        ("ABC121", RestrictionDay.MONDAY),
        ("ABC122", RestrictionDay.MONDAY),
        ("ABC123", RestrictionDay.TUESDAY),
        ("ABC124", RestrictionDay.TUESDAY),
        ("ABC125", RestrictionDay.WEDNESDAY),
        ("ABC126", RestrictionDay.WEDNESDAY),
        ("ABC127", RestrictionDay.THURSDAY),
        ("ABC128", RestrictionDay.THURSDAY),
        ("ABC129", RestrictionDay.FRIDAY),
        ("ABC120", RestrictionDay.FRIDAY),
    ])
    def test_last_digit_picks_weekday(self, plate, expected):
        assert restriction_day(plate) == expected

    @pytest.mark.parametrize("plate", [None, "", "A", "A7", "07"])
    def test_short_or_missing_plate_is_unrestricted(self, plate):
        assert restriction_day(plate) == RestrictionDay.NONE

    def test_non_digit_last_character_is_unrestricted(self):
        assert restriction_day("ABC12X") == RestrictionDay.NONE

    def test_only_last_character_matters(self):
        assert restriction_day("XYZ007") == restriction_day("AB7") == RestrictionDay.THURSDAY


class TestWeekday:
    def test_weekdays(self):
        assert weekday_of(MONDAY) == RestrictionDay.MONDAY
        assert weekday_of(THURSDAY) == RestrictionDay.THURSDAY
        assert weekday_of(FRIDAY) == RestrictionDay.FRIDAY

    def test_weekend_is_none(self):
        assert weekday_of(SATURDAY) == RestrictionDay.NONE
        assert weekday_of(SUNDAY) == RestrictionDay.NONE

    def test_is_restricted_on(self):
        assert is_restricted_on("ABC127", THURSDAY)
        assert not is_restricted_on("ABC127", FRIDAY)
        assert is_restricted_on("ABC120", FRIDAY)

    def test_never_restricted_on_weekend(self):
        for plate in ("ABC121", "ABC123", "ABC125", "ABC127", "ABC129", "ABC12X"):
            assert not is_restricted_on(plate, SATURDAY)
            assert not is_restricted_on(plate, SUNDAY)
