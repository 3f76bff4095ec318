"""
Pico y placa calendar.
Each plate is restricted one weekday, picked by its last digit:
  1,2 → monday   3,4 → tuesday   5,6 → wednesday   7,8 → thursday   9,0 → friday
Weekends are never restricted.
"""

from datetime import date
from typing import Optional
from parking_manager.schemas.enums import RestrictionDay

RESTRICTION_BY_DIGIT = {
    "1": RestrictionDay.MONDAY, "2": RestrictionDay.MONDAY,
    "3": RestrictionDay.TUESDAY, "4": RestrictionDay.TUESDAY,
    "5": RestrictionDay.WEDNESDAY, "6": RestrictionDay.WEDNESDAY,
    "7": RestrictionDay.THURSDAY, "8": RestrictionDay.THURSDAY,
    "9": RestrictionDay.FRIDAY, "0": RestrictionDay.FRIDAY,
}

# date.weekday(): 0=monday ... 6=sunday
WEEKDAYS = (
    RestrictionDay.MONDAY,
    RestrictionDay.TUESDAY,
    RestrictionDay.WEDNESDAY,
    RestrictionDay.THURSDAY,
    RestrictionDay.FRIDAY,
    RestrictionDay.NONE,
    RestrictionDay.NONE,
)


def restriction_day(plate: Optional[str]) -> RestrictionDay:
    """Restriction weekday for a plate; NONE when absent, too short or not ending in a digit."""
    if not plate or len(plate) < 3:
        return RestrictionDay.NONE
    return RESTRICTION_BY_DIGIT.get(plate[-1], RestrictionDay.NONE)


def weekday_of(target: date) -> RestrictionDay:
    return WEEKDAYS[target.weekday()]


def is_restricted_on(plate: Optional[str], target: date) -> bool:
    day = restriction_day(plate)
    return day is not RestrictionDay.NONE and day == weekday_of(target)
