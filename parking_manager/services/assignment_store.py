# parking_manager/services/assignment_store.py
from datetime import date
from typing import Optional
from parking_manager.schemas.assignment import Assignment
from parking_manager.services.record_store import RecordStore
from parking_manager.utils.errors import AssignmentNotFoundError


class AssignmentStore(RecordStore[Assignment]):
    not_found_error = AssignmentNotFoundError

    def add(self, employee_id: int, space_id: int, start_date: date,
            end_date: Optional[date] = None, today: Optional[date] = None) -> Assignment:
        assignment = Assignment(
            id=self.next_id(),
            employee_id=employee_id,
            space_id=space_id,
            start_date=start_date,
            end_date=end_date,
            active=True,
            created_date=today or date.today(),
        )
        self.items.append(assignment)
        return assignment

    def find(self, active_only: bool = False) -> list[Assignment]:
        if active_only:
            return [a for a in self.items if a.active]
        return list(self.items)

    def active_for_employee(self, employee_id: int) -> Optional[Assignment]:
        return next((a for a in self.items if a.active and a.employee_id == employee_id), None)

    def active_for_space(self, space_id: int) -> Optional[Assignment]:
        return next((a for a in self.items if a.active and a.space_id == space_id), None)
