"""
Assignment rules: who may take which space, and the in-memory mutations
that create and end assignments.

Every path that creates an assignment (manual, quick, automatic) goes
through validate_assignment first. Nothing here persists; the manager
wraps these calls with the write lock and the storage flush.
"""

from datetime import date
from typing import Iterable, Optional
from parking_manager.schemas.assignment import Assignment
from parking_manager.schemas.employee import Employee, EmployeeUpdate
from parking_manager.schemas.enums import SpaceStatus
from parking_manager.schemas.parking_space import ParkingSpace, ParkingSpaceUpdate
from parking_manager.services.assignment_store import AssignmentStore
from parking_manager.services.employee_store import EmployeeStore
from parking_manager.services.parking_store import ParkingSpaceStore
from parking_manager.utils.errors import (
    EmployeeNotFoundError, ParkingSpaceNotFoundError, EmployeeAlreadyAssignedError,
    ParkingSpaceAlreadyAssignedError, VehicleTypeMismatchError, NoCompatibleEmployeeError,
    InvalidDateRangeError, SpaceStatusConflictError,
)
from parking_manager.utils.logger import get_logger

logger = get_logger(__name__)


def validate_assignment(employee_id: int, space_id: int,
                        employees: Iterable[Employee],
                        spaces: Iterable[ParkingSpace],
                        assignments: Iterable[Assignment]) -> tuple[Employee, ParkingSpace]:
    """Raise the first rule the pairing breaks; return (employee, space) otherwise."""
    employee = next((e for e in employees if e.id == employee_id), None)
    if employee is None:
        raise EmployeeNotFoundError(employee_id)

    space = next((s for s in spaces if s.id == space_id), None)
    if space is None:
        raise ParkingSpaceNotFoundError(space_id)

    active = [a for a in assignments if a.active]
    if any(a.employee_id == employee_id for a in active):
        raise EmployeeAlreadyAssignedError(employee_id)
    if any(a.space_id == space_id for a in active):
        raise ParkingSpaceAlreadyAssignedError(space_id)

    if employee.vehicle_type != space.space_type:
        raise VehicleTypeMismatchError(employee.vehicle_type.value, space.space_type.value)

    return employee, space


def assign(employee_id: int, space_id: int,
           employees: EmployeeStore, spaces: ParkingSpaceStore, assignments: AssignmentStore,
           start_date: Optional[date] = None, end_date: Optional[date] = None,
           today: Optional[date] = None) -> Assignment:
    today = today or date.today()
    employee, space = validate_assignment(employee_id, space_id,
                                          employees.items, spaces.items, assignments.items)
    start_date = start_date or today
    check_date_range(start_date, end_date)

    assignment = assignments.add(employee.id, space.id,
                                 start_date=start_date, end_date=end_date, today=today)
    space.status = SpaceStatus.OCCUPIED
    space.assigned_employee_id = employee.id
    logger.info(f"Assigned space {space.number} to employee {employee.id} ({employee.plate})")
    return assignment


def end_assignment(assignment_id: int, spaces: ParkingSpaceStore, assignments: AssignmentStore,
                   end_date: Optional[date] = None) -> tuple[Assignment, bool]:
    """End an assignment and free its space. Returns (assignment, changed)."""
    assignment = assignments.require(assignment_id)
    if not assignment.active:
        return assignment, False

    end_date = end_date or date.today()
    check_date_range(assignment.start_date, end_date)
    assignment.active = False
    assignment.end_date = end_date
    release_space(spaces.get(assignment.space_id))
    logger.info(f"Ended assignment {assignment.id} (employee {assignment.employee_id}, space {assignment.space_id})")
    return assignment, True


def check_date_range(start_date: date, end_date: Optional[date]):
    if end_date is not None and end_date < start_date:
        raise InvalidDateRangeError(start_date, end_date)


def release_space(space: Optional[ParkingSpace]):
    if space is None:
        return
    if space.status == SpaceStatus.OCCUPIED:
        space.status = SpaceStatus.AVAILABLE
    space.assigned_employee_id = None


def check_space_update(space: ParkingSpace, data: ParkingSpaceUpdate,
                       holder: Optional[Employee]):
    """
    Reject edits that would contradict the space's assignment.

    A held space keeps its type compatible with the holder and may only move
    between occupied and maintenance; a free space is never marked occupied
    by hand.
    """
    if holder is None:
        if data.status == SpaceStatus.OCCUPIED:
            raise SpaceStatusConflictError(
                f"Parking space {space.number} has no assignment; assign an employee to occupy it")
        return

    if data.space_type is not None and data.space_type != holder.vehicle_type:
        raise VehicleTypeMismatchError(holder.vehicle_type.value, data.space_type.value)
    if data.status == SpaceStatus.AVAILABLE:
        raise SpaceStatusConflictError(
            f"Parking space {space.number} is assigned to employee {holder.id}; end the assignment to free it")


def check_employee_update(employee: Employee, data: EmployeeUpdate,
                          space: Optional[ParkingSpace]):
    """An assigned employee may not switch to a vehicle type their space does not take."""
    if space is None or data.vehicle_type is None:
        return
    if data.vehicle_type != space.space_type:
        raise VehicleTypeMismatchError(data.vehicle_type.value, space.space_type.value)


def unassigned_employees(employees: EmployeeStore, assignments: AssignmentStore) -> list[Employee]:
    taken = {a.employee_id for a in assignments.items if a.active}
    return [e for e in employees.items if e.id not in taken]


def open_spaces(spaces: ParkingSpaceStore, assignments: AssignmentStore) -> list[ParkingSpace]:
    taken = {a.space_id for a in assignments.items if a.active}
    return [s for s in spaces.available() if s.id not in taken]


def auto_assign(employees: EmployeeStore, spaces: ParkingSpaceStore, assignments: AssignmentStore,
                today: Optional[date] = None) -> list[Assignment]:
    """
    Greedy pass: each unassigned employee, in store order, takes the first open
    space of the same vehicle type not already claimed in this pass.
    """
    today = today or date.today()
    candidates = open_spaces(spaces, assignments)
    claimed = set()
    created = []

    for employee in unassigned_employees(employees, assignments):
        space = next((s for s in candidates
                      if s.id not in claimed and s.space_type == employee.vehicle_type), None)
        if space is None:
            continue
        claimed.add(space.id)
        created.append(assign(employee.id, space.id, employees, spaces, assignments, today=today))

    logger.info(f"Auto-assign created {len(created)} assignments")
    return created


def quick_assign(space_id: int, employees: EmployeeStore, spaces: ParkingSpaceStore,
                 assignments: AssignmentStore, today: Optional[date] = None) -> Assignment:
    space = spaces.require(space_id)
    employee = next((e for e in unassigned_employees(employees, assignments)
                     if e.vehicle_type == space.space_type), None)
    if employee is None:
        raise NoCompatibleEmployeeError(space_id)
    return assign(employee.id, space.id, employees, spaces, assignments, today=today)
