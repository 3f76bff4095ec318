# parking_manager/schemas/availability.py
from pydantic import BaseModel
from datetime import date
from typing import Optional
from parking_manager.schemas.employee import Employee
from parking_manager.schemas.enums import RestrictionDay
from parking_manager.schemas.parking_space import ParkingSpace


class AvailabilityEntry(BaseModel):
    space: ParkingSpace
    employee: Optional[Employee] = None
    reason: str      # unassigned | employee_not_found | restriction | occupied | maintenance


class AvailabilitySummary(BaseModel):
    total_available: int          # normally_available + restricted_available
    normally_available: int
    restricted_available: int
    occupied: int
    maintenance: int


class DailyAvailability(BaseModel):
    date: date
    weekday: RestrictionDay       # none on weekends
    available: list[AvailabilityEntry]
    restricted: list[AvailabilityEntry]
    occupied: list[AvailabilityEntry]
    excluded: list[AvailabilityEntry]
    summary: AvailabilitySummary


class EmployeeStats(BaseModel):
    total: int
    by_vehicle_type: dict[str, int]
    by_status: dict[str, int]
    with_parking: int
    restricted_on_date: int


class SpaceStats(BaseModel):
    total: int
    available: int
    occupied: int
    maintenance: int
    by_type: dict[str, int]
    by_basement: dict[str, int]
    occupancy_rate: int           # percent, rounded


class DashboardOut(BaseModel):
    date: date
    employees: EmployeeStats
    spaces: SpaceStats
    active_assignments: int
    availability: AvailabilitySummary
