# parking_manager/services/employee_store.py
from datetime import date
from typing import Optional
from parking_manager.schemas.employee import Employee, EmployeeCreate, EmployeeUpdate
from parking_manager.schemas.enums import VehicleType, EmploymentStatus
from parking_manager.services.record_store import RecordStore
from parking_manager.services.restriction_calendar import restriction_day
from parking_manager.utils.errors import (
    EmployeeNotFoundError, DuplicateCedulaError, DuplicatePlateError,
)
from parking_manager.utils.logger import get_logger

logger = get_logger(__name__)

SEARCH_FIELDS = ("name", "cedula", "plate", "department", "role", "email")


class EmployeeStore(RecordStore[Employee]):
    not_found_error = EmployeeNotFoundError

    def check_unique(self, cedula: Optional[str] = None, plate: Optional[str] = None,
                     exclude_id: Optional[int] = None):
        for employee in self.items:
            if employee.id == exclude_id:
                continue
            if cedula and employee.cedula == cedula:
                raise DuplicateCedulaError(cedula)
            if plate and employee.plate == plate:
                raise DuplicatePlateError(plate)

    def add(self, data: EmployeeCreate, today: Optional[date] = None) -> Employee:
        self.check_unique(cedula=data.cedula, plate=data.plate)
        fields = data.model_dump()
        fields["restriction_day"] = data.restriction_day or restriction_day(data.plate)
        employee = Employee(id=self.next_id(), registration_date=today or date.today(), **fields)
        self.items.append(employee)
        logger.info(f"Employee added: {employee.id} {employee.name} ({employee.plate})")
        return employee

    def update(self, employee_id: int, data: EmployeeUpdate) -> Employee:
        employee = self.require(employee_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        self.check_unique(cedula=changes.get("cedula"), plate=changes.get("plate"),
                          exclude_id=employee_id)

        if "plate" in changes and "restriction_day" not in changes:
            changes["restriction_day"] = restriction_day(changes["plate"])

        for field, value in changes.items():
            setattr(employee, field, value)
        logger.info(f"Employee updated: {employee_id} fields={sorted(changes)}")
        return employee

    def find(self, search: Optional[str] = None, vehicle_type: Optional[VehicleType] = None,
             department: Optional[str] = None,
             employment_status: Optional[EmploymentStatus] = None) -> list[Employee]:
        results = self.items
        if search:
            term = search.strip().lower()
            results = [e for e in results
                       if any(term in (getattr(e, f) or "").lower() for f in SEARCH_FIELDS)]
        if vehicle_type:
            results = [e for e in results if e.vehicle_type == vehicle_type]
        if department:
            results = [e for e in results if (e.department or "").lower() == department.lower()]
        if employment_status:
            results = [e for e in results if e.employment_status == employment_status]
        return sorted(results, key=lambda e: e.name.lower())
