# parking_manager/schemas/enums.py
from enum import Enum


class VehicleType(str, Enum):
    CAR = "car"
    MOTORCYCLE = "motorcycle"
    BICYCLE = "bicycle"


class SpaceStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class BasementLevel(str, Enum):
    MINUS_ONE = "-1"
    MINUS_THREE = "-3"


class RestrictionDay(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    NONE = "none"


class EmploymentStatus(str, Enum):
    ACTIVE = "active"
    VACATION = "vacation"
    SICK_LEAVE = "sick_leave"
    LEAVE = "leave"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"


class PresenceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    VACATION = "vacation"
    SICK_LEAVE = "sick_leave"
    LEAVE = "leave"
    LATE = "late"
    REMOTE = "remote"
