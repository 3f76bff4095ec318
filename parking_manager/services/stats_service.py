# parking_manager/services/stats_service.py
"""Dashboard figures for employees, spaces and assignments on a given date."""

from collections import Counter
from datetime import date
from parking_manager.schemas.assignment import Assignment
from parking_manager.schemas.availability import DashboardOut, EmployeeStats, SpaceStats
from parking_manager.schemas.employee import Employee
from parking_manager.schemas.enums import SpaceStatus, VehicleType, BasementLevel, RestrictionDay
from parking_manager.schemas.parking_space import ParkingSpace
from parking_manager.services.availability_service import calculate_daily_availability
from parking_manager.services.restriction_calendar import weekday_of


def employee_stats(employees: list[Employee], assignments: list[Assignment],
                   target_date: date) -> EmployeeStats:
    with_parking = {a.employee_id for a in assignments if a.active}
    by_type = Counter(e.vehicle_type.value for e in employees)
    by_status = Counter(e.employment_status.value for e in employees)
    # stored restriction day, manual override included
    weekday = weekday_of(target_date)
    if weekday is RestrictionDay.NONE:
        weekday = None
    return EmployeeStats(
        total=len(employees),
        by_vehicle_type={t.value: by_type.get(t.value, 0) for t in VehicleType},
        by_status=dict(by_status),
        with_parking=sum(1 for e in employees if e.id in with_parking),
        restricted_on_date=sum(1 for e in employees if e.restriction_day == weekday),
    )


def space_stats(spaces: list[ParkingSpace]) -> SpaceStats:
    by_status = Counter(s.status for s in spaces)
    by_type = Counter(s.space_type.value for s in spaces)
    by_basement = Counter(s.basement.value for s in spaces)
    occupied = by_status.get(SpaceStatus.OCCUPIED, 0)
    return SpaceStats(
        total=len(spaces),
        available=by_status.get(SpaceStatus.AVAILABLE, 0),
        occupied=occupied,
        maintenance=by_status.get(SpaceStatus.MAINTENANCE, 0),
        by_type={t.value: by_type.get(t.value, 0) for t in VehicleType},
        by_basement={b.value: by_basement.get(b.value, 0) for b in BasementLevel},
        occupancy_rate=round(occupied / len(spaces) * 100) if spaces else 0,
    )


def build_dashboard(employees: list[Employee], spaces: list[ParkingSpace],
                    assignments: list[Assignment], target_date: date) -> DashboardOut:
    availability = calculate_daily_availability(spaces, employees, target_date)
    return DashboardOut(
        date=target_date,
        employees=employee_stats(employees, assignments, target_date),
        spaces=space_stats(spaces),
        active_assignments=sum(1 for a in assignments if a.active),
        availability=availability.summary,
    )
