# tests/test_assignment_service.py
"""Unit tests for assignment validation, manual/quick/automatic assignment and termination."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import date
from parking_manager.schemas.employee import EmployeeCreate
from parking_manager.schemas.enums import BasementLevel, SpaceStatus, VehicleType
from parking_manager.schemas.parking_space import ParkingSpaceCreate
from parking_manager.services import assignment_service
from parking_manager.services.assignment_store import AssignmentStore
from parking_manager.services.employee_store import EmployeeStore
from parking_manager.services.parking_store import ParkingSpaceStore
from parking_manager.utils.errors import (
    EmployeeNotFoundError, ParkingSpaceNotFoundError, EmployeeAlreadyAssignedError,
    ParkingSpaceAlreadyAssignedError, VehicleTypeMismatchError, NoCompatibleEmployeeError,
    AssignmentNotFoundError, InvalidDateRangeError,
)

TODAY = date(2024, 1, 15)


@pytest.fixture
def stores():
    return EmployeeStore(), ParkingSpaceStore(), AssignmentStore()


def add_employee(employees, cedula, plate, vehicle_type=VehicleType.CAR):
    return employees.add(EmployeeCreate(name=f"Employee {cedula}", cedula=cedula, plate=plate,
                                        vehicle_type=vehicle_type), today=TODAY)


def add_space(spaces, number, space_type=VehicleType.CAR, status=SpaceStatus.AVAILABLE):
    return spaces.add(ParkingSpaceCreate(number=number, basement=BasementLevel.MINUS_ONE,
                                         space_type=space_type, status=status), today=TODAY)


class TestValidateAssignment:
    def test_unknown_employee(self, stores):
        employees, spaces, assignments = stores
        space = add_space(spaces, "S1-C001")
        with pytest.raises(EmployeeNotFoundError):
            assignment_service.validate_assignment(42, space.id, employees.items, spaces.items,
                                                   assignments.items)

    def test_unknown_space(self, stores):
        employees, spaces, assignments = stores
        employee = add_employee(employees, "10000001", "ABC123")
        with pytest.raises(ParkingSpaceNotFoundError):
            assignment_service.validate_assignment(employee.id, 42, employees.items, spaces.items,
                                                   assignments.items)

    def test_employee_checked_before_space(self, stores):
        employees, spaces, assignments = stores
        with pytest.raises(EmployeeNotFoundError):
            assignment_service.validate_assignment(1, 1, employees.items, spaces.items, assignments.items)

    def test_vehicle_type_mismatch(self, stores):
        employees, spaces, assignments = stores
        employee = add_employee(employees, "10000001", "ABC123", VehicleType.MOTORCYCLE)
        space = add_space(spaces, "S1-C001", VehicleType.CAR)
        with pytest.raises(VehicleTypeMismatchError):
            assignment_service.validate_assignment(employee.id, space.id, employees.items,
                                                   spaces.items, assignments.items)

    def test_rejects_when_either_party_is_assigned(self, stores):
        employees, spaces, assignments = stores
        e1 = add_employee(employees, "10000001", "ABC123")
        e2 = add_employee(employees, "10000002", "ABC124")
        s1 = add_space(spaces, "S1-C001")
        s2 = add_space(spaces, "S1-C002")
        assignment_service.assign(e1.id, s1.id, employees, spaces, assignments, today=TODAY)

        with pytest.raises(EmployeeAlreadyAssignedError):
            assignment_service.validate_assignment(e1.id, s2.id, employees.items, spaces.items,
                                                   assignments.items)
        with pytest.raises(ParkingSpaceAlreadyAssignedError):
            assignment_service.validate_assignment(e2.id, s1.id, employees.items, spaces.items,
                                                   assignments.items)


class TestAssign:
    def test_assign_marks_space_occupied(self, stores):
        employees, spaces, assignments = stores
        employee = add_employee(employees, "10000001", "ABC123")
        space = add_space(spaces, "S1-C001")

        assignment = assignment_service.assign(employee.id, space.id, employees, spaces, assignments,
                                               today=TODAY)

        assert assignment.active
        assert assignment.start_date == TODAY
        assert assignment.end_date is None
        assert space.status == SpaceStatus.OCCUPIED
        assert space.assigned_employee_id == employee.id

    def test_second_assign_fails_and_count_unchanged(self, stores):
        employees, spaces, assignments = stores
        employee = add_employee(employees, "10000001", "ABC123")
        space = add_space(spaces, "S1-C001")
        assignment_service.assign(employee.id, space.id, employees, spaces, assignments, today=TODAY)

        with pytest.raises(EmployeeAlreadyAssignedError) as exc:
            assignment_service.assign(employee.id, space.id, employees, spaces, assignments, today=TODAY)

        assert exc.value.message == "Employee already assigned to a parking space"
        assert len(assignments) == 1

    def test_explicit_start_date(self, stores):
        employees, spaces, assignments = stores
        employee = add_employee(employees, "10000001", "ABC123")
        space = add_space(spaces, "S1-C001")
        start = date(2024, 2, 1)
        assignment = assignment_service.assign(employee.id, space.id, employees, spaces, assignments,
                                               start_date=start, today=TODAY)
        assert assignment.start_date == start
        assert assignment.created_date == TODAY

    def test_end_date_before_start_date(self, stores):
        employees, spaces, assignments = stores
        employee = add_employee(employees, "10000001", "ABC123")
        space = add_space(spaces, "S1-C001")

        with pytest.raises(InvalidDateRangeError):
            assignment_service.assign(employee.id, space.id, employees, spaces, assignments,
                                      start_date=date(2024, 2, 1), end_date=date(2024, 1, 1),
                                      today=TODAY)

        assert len(assignments) == 0
        assert space.status == SpaceStatus.AVAILABLE


class TestEndAssignment:
    def test_end_frees_space(self, stores):
        employees, spaces, assignments = stores
        employee = add_employee(employees, "10000001", "ABC123")
        space = add_space(spaces, "S1-C001")
        created = assignment_service.assign(employee.id, space.id, employees, spaces, assignments,
                                            today=TODAY)

        ended, changed = assignment_service.end_assignment(created.id, spaces, assignments,
                                                           end_date=date(2024, 3, 1))

        assert changed
        assert not ended.active
        assert ended.end_date == date(2024, 3, 1)
        assert space.status == SpaceStatus.AVAILABLE
        assert space.assigned_employee_id is None

    def test_end_inactive_is_noop(self, stores):
        employees, spaces, assignments = stores
        employee = add_employee(employees, "10000001", "ABC123")
        space = add_space(spaces, "S1-C001")
        created = assignment_service.assign(employee.id, space.id, employees, spaces, assignments,
                                            today=TODAY)
        assignment_service.end_assignment(created.id, spaces, assignments, end_date=date(2024, 3, 1))

        again, changed = assignment_service.end_assignment(created.id, spaces, assignments,
                                                           end_date=date(2024, 4, 1))

        assert not changed
        assert again.end_date == date(2024, 3, 1)

    def test_end_before_start_is_rejected(self, stores):
        employees, spaces, assignments = stores
        employee = add_employee(employees, "10000001", "ABC123")
        space = add_space(spaces, "S1-C001")
        created = assignment_service.assign(employee.id, space.id, employees, spaces, assignments,
                                            today=TODAY)

        with pytest.raises(InvalidDateRangeError):
            assignment_service.end_assignment(created.id, spaces, assignments, end_date=date(2000, 1, 1))

        assert created.active and created.end_date is None
        assert space.status == SpaceStatus.OCCUPIED

    def test_end_unknown(self, stores):
        _, spaces, assignments = stores
        with pytest.raises(AssignmentNotFoundError):
            assignment_service.end_assignment(7, spaces, assignments)

    def test_space_can_be_reassigned_after_end(self, stores):
        employees, spaces, assignments = stores
        e1 = add_employee(employees, "10000001", "ABC123")
        e2 = add_employee(employees, "10000002", "ABC124")
        space = add_space(spaces, "S1-C001")
        first = assignment_service.assign(e1.id, space.id, employees, spaces, assignments, today=TODAY)
        assignment_service.end_assignment(first.id, spaces, assignments)

        second = assignment_service.assign(e2.id, space.id, employees, spaces, assignments, today=TODAY)

        assert second.id == first.id + 1
        assert space.assigned_employee_id == e2.id


class TestAutoAssign:
    def test_pairs_by_type_in_store_order(self, stores):
        employees, spaces, assignments = stores
        car1 = add_employee(employees, "10000001", "ABC121")
        moto = add_employee(employees, "10000002", "ABC122", VehicleType.MOTORCYCLE)
        car2 = add_employee(employees, "10000003", "ABC123")
        add_employee(employees, "10000004", "ABC124", VehicleType.BICYCLE)   # no bicycle space
        c1 = add_space(spaces, "S1-C001")
        m1 = add_space(spaces, "S1-M001", VehicleType.MOTORCYCLE)
        c2 = add_space(spaces, "S1-C002")

        created = assignment_service.auto_assign(employees, spaces, assignments, today=TODAY)

        pairs = [(a.employee_id, a.space_id) for a in created]
        assert pairs == [(car1.id, c1.id), (moto.id, m1.id), (car2.id, c2.id)]

    def test_skips_maintenance_and_assigned(self, stores):
        employees, spaces, assignments = stores
        e1 = add_employee(employees, "10000001", "ABC121")
        e2 = add_employee(employees, "10000002", "ABC122")
        e3 = add_employee(employees, "10000003", "ABC123")
        s1 = add_space(spaces, "S1-C001")
        add_space(spaces, "S1-C002", status=SpaceStatus.MAINTENANCE)
        s3 = add_space(spaces, "S1-C003")
        assignment_service.assign(e1.id, s1.id, employees, spaces, assignments, today=TODAY)

        created = assignment_service.auto_assign(employees, spaces, assignments, today=TODAY)

        assert [(a.employee_id, a.space_id) for a in created] == [(e2.id, s3.id)]
        assert assignments.active_for_employee(e3.id) is None

    def test_second_pass_creates_nothing(self, stores):
        employees, spaces, assignments = stores
        add_employee(employees, "10000001", "ABC121")
        add_space(spaces, "S1-C001")
        assignment_service.auto_assign(employees, spaces, assignments, today=TODAY)
        assert assignment_service.auto_assign(employees, spaces, assignments, today=TODAY) == []

    def test_exclusivity_holds_after_pass(self, stores):
        employees, spaces, assignments = stores
        for i in range(6):
            add_employee(employees, f"1000000{i}", f"ABC12{i}")
        for i in range(4):
            add_space(spaces, f"S1-C00{i}")

        assignment_service.auto_assign(employees, spaces, assignments, today=TODAY)

        active = assignments.find(active_only=True)
        assert len(active) == 4
        assert len({a.employee_id for a in active}) == 4
        assert len({a.space_id for a in active}) == 4


class TestQuickAssign:
    def test_first_compatible_unassigned_employee(self, stores):
        employees, spaces, assignments = stores
        add_employee(employees, "10000001", "ABC121", VehicleType.MOTORCYCLE)
        car = add_employee(employees, "10000002", "ABC122")
        space = add_space(spaces, "S1-C001")

        assignment = assignment_service.quick_assign(space.id, employees, spaces, assignments, today=TODAY)

        assert assignment.employee_id == car.id

    def test_no_compatible_employee(self, stores):
        employees, spaces, assignments = stores
        add_employee(employees, "10000001", "ABC121", VehicleType.BICYCLE)
        space = add_space(spaces, "S1-C001")
        with pytest.raises(NoCompatibleEmployeeError):
            assignment_service.quick_assign(space.id, employees, spaces, assignments, today=TODAY)

    def test_unknown_space(self, stores):
        employees, spaces, assignments = stores
        with pytest.raises(ParkingSpaceNotFoundError):
            assignment_service.quick_assign(3, employees, spaces, assignments, today=TODAY)
