"""
Daily availability partition.
For a date, every space lands in exactly one list:
  - available  : nobody assigned (or the assigned employee no longer exists)
  - restricted : holder's plate is under pico y placa that weekday, so the space is free for the day
  - occupied   : holder drives that day
  - excluded   : space under maintenance
Pure: depends only on the spaces, the employees and the date.
"""

from datetime import date
from typing import Iterable
from parking_manager.schemas.availability import (
    AvailabilityEntry, AvailabilitySummary, DailyAvailability,
)
from parking_manager.schemas.employee import Employee
from parking_manager.schemas.enums import SpaceStatus
from parking_manager.schemas.parking_space import ParkingSpace
from parking_manager.services.restriction_calendar import is_restricted_on, weekday_of


def calculate_daily_availability(spaces: Iterable[ParkingSpace],
                                 employees: Iterable[Employee],
                                 target_date: date) -> DailyAvailability:
    employees_by_id = {e.id: e for e in employees}
    available, restricted, occupied, excluded = [], [], [], []

    for space in spaces:
        if space.status == SpaceStatus.MAINTENANCE:
            excluded.append(AvailabilityEntry(space=space, reason="maintenance"))
            continue

        if space.assigned_employee_id is None:
            available.append(AvailabilityEntry(space=space, reason="unassigned"))
            continue

        employee = employees_by_id.get(space.assigned_employee_id)
        if employee is None:
            available.append(AvailabilityEntry(space=space, reason="employee_not_found"))
            continue

        if is_restricted_on(employee.plate, target_date):
            restricted.append(AvailabilityEntry(space=space, employee=employee, reason="restriction"))
        else:
            occupied.append(AvailabilityEntry(space=space, employee=employee, reason="occupied"))

    return DailyAvailability(
        date=target_date,
        weekday=weekday_of(target_date),
        available=available,
        restricted=restricted,
        occupied=occupied,
        excluded=excluded,
        summary=AvailabilitySummary(
            total_available=len(available) + len(restricted),
            normally_available=len(available),
            restricted_available=len(restricted),
            occupied=len(occupied),
            maintenance=len(excluded),
        ),
    )
