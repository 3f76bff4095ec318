# parking_manager/schemas/employee.py
from pydantic import BaseModel, field_validator
from datetime import date
from typing import Optional
from parking_manager.schemas.enums import (
    VehicleType, RestrictionDay, EmploymentStatus, PresenceStatus,
)
from parking_manager.utils.validators import (
    check_name, check_cedula, check_plate, check_phone, sanitize_string,
)


class EmployeeDetails(BaseModel):
    """Descriptive fields: carried and filtered on, never used by the assignment rules."""
    email: Optional[str] = None
    phone: Optional[str] = None            # 10 digits
    department: Optional[str] = None
    role: Optional[str] = None
    employee_code: Optional[str] = None
    hire_date: Optional[date] = None
    supervisor: Optional[str] = None
    vehicle_brand: Optional[str] = None
    vehicle_model: Optional[str] = None
    vehicle_color: Optional[str] = None
    emergency_contact: Optional[str] = None
    notes: Optional[str] = None


class Employee(EmployeeDetails):
    id: int
    name: str
    cedula: str
    plate: str
    vehicle_type: VehicleType
    restriction_day: RestrictionDay = RestrictionDay.NONE
    restriction_exemption: str = "no"
    employment_status: EmploymentStatus = EmploymentStatus.ACTIVE
    today_status: PresenceStatus = PresenceStatus.PRESENT
    registration_date: date


class EmployeeCreate(EmployeeDetails):
    name: str
    cedula: str
    plate: str
    vehicle_type: VehicleType
    restriction_day: Optional[RestrictionDay] = None   # manual override; computed from plate when None
    restriction_exemption: str = "no"
    employment_status: EmploymentStatus = EmploymentStatus.ACTIVE
    today_status: PresenceStatus = PresenceStatus.PRESENT

    @field_validator("name")
    @classmethod
    def _check_name(cls, v):
        return check_name(v)

    @field_validator("cedula")
    @classmethod
    def _check_cedula(cls, v):
        return check_cedula(v)

    @field_validator("plate")
    @classmethod
    def _check_plate(cls, v):
        return check_plate(v)

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, v):
        return check_phone(v)

    @field_validator("email", "department", "role", "employee_code", "supervisor",
                     "vehicle_brand", "vehicle_model", "vehicle_color",
                     "emergency_contact", "notes")
    @classmethod
    def _clean_text(cls, v):
        return sanitize_string(v) or None


class EmployeeUpdate(BaseModel):
    """Partial update: only the fields that are set get applied."""
    name: Optional[str] = None
    cedula: Optional[str] = None
    plate: Optional[str] = None
    vehicle_type: Optional[VehicleType] = None
    restriction_day: Optional[RestrictionDay] = None
    restriction_exemption: Optional[str] = None
    employment_status: Optional[EmploymentStatus] = None
    today_status: Optional[PresenceStatus] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    department: Optional[str] = None
    role: Optional[str] = None
    employee_code: Optional[str] = None
    hire_date: Optional[date] = None
    supervisor: Optional[str] = None
    vehicle_brand: Optional[str] = None
    vehicle_model: Optional[str] = None
    vehicle_color: Optional[str] = None
    emergency_contact: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, v):
        return None if v is None else check_name(v)

    @field_validator("cedula")
    @classmethod
    def _check_cedula(cls, v):
        return None if v is None else check_cedula(v)

    @field_validator("plate")
    @classmethod
    def _check_plate(cls, v):
        return None if v is None else check_plate(v)

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, v):
        return None if v is None else check_phone(v)


class EmployeeAssignmentInfo(BaseModel):
    employee_id: int
    assigned: bool
    assignment_id: Optional[int] = None
    space_id: Optional[int] = None
    space_number: Optional[str] = None
    basement: Optional[str] = None
    start_date: Optional[date] = None
    restricted_today: bool = False
