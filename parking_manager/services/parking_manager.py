# parking_manager/services/parking_manager.py
"""
ParkingManager: the one object the API talks to.

Owns the employee, parking space and assignment stores plus the storage
service. Every mutation runs inside _transaction():
  1. take the write lock (one mutation at a time)
  2. snapshot the three lists
  3. validate + mutate in memory
  4. persist the whole document
If any step fails the lists are restored from the snapshot, so what is in
memory always matches what was last saved. Reads do not take the lock.
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Optional
from parking_manager.config import settings
from parking_manager.schemas.assignment import Assignment, AssignmentCreate
from parking_manager.schemas.availability import DailyAvailability, DashboardOut
from parking_manager.schemas.document import ParkingDocument, ImportResult
from parking_manager.schemas.employee import (
    Employee, EmployeeCreate, EmployeeUpdate, EmployeeAssignmentInfo,
)
from parking_manager.schemas.employee_import import ImportPreview, ImportCommitOut
from parking_manager.schemas.parking_space import (
    ParkingSpace, ParkingSpaceCreate, ParkingSpaceUpdate, BulkGenerateOut,
)
from parking_manager.services import assignment_service, employee_import
from parking_manager.services.assignment_store import AssignmentStore
from parking_manager.services.availability_service import calculate_daily_availability
from parking_manager.services.employee_store import EmployeeStore
from parking_manager.services.parking_generator import generate_parking_spaces, bucket_key
from parking_manager.services.parking_store import ParkingSpaceStore
from parking_manager.services.restriction_calendar import is_restricted_on
from parking_manager.services.stats_service import build_dashboard
from parking_manager.services.storage_service import StorageService, parse_document
from parking_manager.utils.logger import get_logger

logger = get_logger(__name__)


class _Transaction:
    persist = True


class ParkingManager:
    def __init__(self, storage: StorageService):
        self.storage = storage
        self.employees = EmployeeStore()
        self.spaces = ParkingSpaceStore()
        self.assignments = AssignmentStore()
        self.last_updated: Optional[datetime] = None
        self._lock = asyncio.Lock()

    # ── Document ─────────────────────────────────────────────────────────────
    async def load(self):
        document = await self.storage.load()
        self._apply_document(document)
        logger.info(f"Loaded {len(self.employees)} employees, {len(self.spaces)} spaces, "
                    f"{len(self.assignments)} assignments")

    def document(self) -> ParkingDocument:
        return ParkingDocument(
            employees=self.employees.items,
            parking_spaces=self.spaces.items,
            assignments=self.assignments.items,
            version=settings.APP_VERSION,
            last_updated=self.last_updated,
        )

    def _apply_document(self, document: ParkingDocument):
        self.employees.replace(document.employees)
        self.spaces.replace(document.parking_spaces)
        self.assignments.replace(document.assignments)
        self.last_updated = document.last_updated

    def _snapshot(self) -> tuple:
        return (self.employees.snapshot(), self.spaces.snapshot(),
                self.assignments.snapshot(), self.last_updated)

    def _restore(self, snapshot: tuple):
        employees, spaces, assignments, last_updated = snapshot
        self.employees.replace(employees)
        self.spaces.replace(spaces)
        self.assignments.replace(assignments)
        self.last_updated = last_updated

    @asynccontextmanager
    async def _transaction(self, action: str):
        async with self._lock:
            snapshot = self._snapshot()
            tx = _Transaction()
            try:
                yield tx
                if tx.persist:
                    saved = await self.storage.save(self.document())
                    self.last_updated = saved.last_updated
            except Exception as e:
                self._restore(snapshot)
                logger.warning(f"{action} rejected, state restored: {e}")
                raise

    # ── Employees ────────────────────────────────────────────────────────────
    def list_employees(self, **filters) -> list[Employee]:
        return self.employees.find(**filters)

    def get_employee(self, employee_id: int) -> Employee:
        return self.employees.require(employee_id)

    async def add_employee(self, data: EmployeeCreate) -> Employee:
        async with self._transaction("add employee"):
            return self.employees.add(data)

    async def update_employee(self, employee_id: int, data: EmployeeUpdate) -> Employee:
        async with self._transaction("update employee"):
            employee = self.employees.require(employee_id)
            active = self.assignments.active_for_employee(employee_id)
            space = self.spaces.get(active.space_id) if active else None
            assignment_service.check_employee_update(employee, data, space)
            return self.employees.update(employee_id, data)

    async def delete_employee(self, employee_id: int) -> Employee:
        """Remove the employee; an active assignment is ended and its space freed."""
        async with self._transaction("delete employee"):
            employee = self.employees.require(employee_id)
            active = self.assignments.active_for_employee(employee_id)
            if active:
                assignment_service.end_assignment(active.id, self.spaces, self.assignments)
            self.employees.remove(employee_id)
            logger.info(f"Employee deleted: {employee_id} {employee.name}")
            return employee

    def assignment_info(self, employee_id: int,
                        target_date: Optional[date] = None) -> EmployeeAssignmentInfo:
        employee = self.employees.require(employee_id)
        active = self.assignments.active_for_employee(employee_id)
        if active is None:
            return EmployeeAssignmentInfo(employee_id=employee_id, assigned=False)
        space = self.spaces.get(active.space_id)
        return EmployeeAssignmentInfo(
            employee_id=employee_id,
            assigned=True,
            assignment_id=active.id,
            space_id=active.space_id,
            space_number=space.number if space else None,
            basement=space.basement.value if space else None,
            start_date=active.start_date,
            restricted_today=is_restricted_on(employee.plate, target_date or date.today()),
        )

    # ── Spreadsheet import ───────────────────────────────────────────────────
    def preview_import(self, filename: str, content: bytes) -> ImportPreview:
        rows = employee_import.read_rows(filename, content)
        return employee_import.preview_import(rows, self.employees)

    async def commit_import(self, filename: str, content: bytes) -> ImportCommitOut:
        rows = employee_import.read_rows(filename, content)
        async with self._transaction("import employees") as tx:
            preview = employee_import.preview_import(rows, self.employees)
            added = [self.employees.add(data) for data in preview.valid]
            tx.persist = bool(added)
        logger.info(f"Imported {len(added)} employees from {filename}")
        return ImportCommitOut(imported=len(added), employees=added,
                               errors=preview.errors, duplicates=preview.duplicates)

    # ── Parking spaces ───────────────────────────────────────────────────────
    def list_spaces(self, **filters) -> list[ParkingSpace]:
        return self.spaces.find(**filters)

    def get_space(self, space_id: int) -> ParkingSpace:
        return self.spaces.require(space_id)

    async def add_space(self, data: ParkingSpaceCreate) -> ParkingSpace:
        async with self._transaction("add parking space"):
            return self.spaces.add(data)

    async def update_space(self, space_id: int, data: ParkingSpaceUpdate) -> ParkingSpace:
        async with self._transaction("update parking space"):
            space = self.spaces.require(space_id)
            active = self.assignments.active_for_space(space_id)
            holder = self.employees.get(active.employee_id) if active else None
            assignment_service.check_space_update(space, data, holder)
            return self.spaces.update(space_id, data)

    async def delete_space(self, space_id: int) -> ParkingSpace:
        """Remove the space; an active assignment on it is ended first."""
        async with self._transaction("delete parking space"):
            space = self.spaces.require(space_id)
            active = self.assignments.active_for_space(space_id)
            if active:
                assignment_service.end_assignment(active.id, self.spaces, self.assignments)
            self.spaces.remove(space_id)
            logger.info(f"Parking space deleted: {space_id} {space.number}")
            return space

    async def generate_spaces(self, max_spaces: Optional[int] = None) -> BulkGenerateOut:
        max_spaces = max_spaces or settings.MAX_PARKING_SPACES
        async with self._transaction("generate parking spaces") as tx:
            batch = generate_parking_spaces(self.spaces.items, max_spaces,
                                            start_id=self.spaces.next_id())
            self.spaces.extend(batch)
            tx.persist = bool(batch)

        by_bucket = {}
        for space in batch:
            key = bucket_key(space.basement, space.space_type)
            by_bucket[key] = by_bucket.get(key, 0) + 1
        return BulkGenerateOut(created=len(batch), total=len(self.spaces), by_bucket=by_bucket)

    # ── Assignments ──────────────────────────────────────────────────────────
    def list_assignments(self, active_only: bool = False) -> list[Assignment]:
        return self.assignments.find(active_only=active_only)

    async def assign(self, data: AssignmentCreate) -> Assignment:
        async with self._transaction("assign"):
            return assignment_service.assign(
                data.employee_id, data.space_id, self.employees, self.spaces, self.assignments,
                start_date=data.start_date, end_date=data.end_date,
            )

    async def end_assignment(self, assignment_id: int, end_date: Optional[date] = None) -> Assignment:
        async with self._transaction("end assignment") as tx:
            assignment, changed = assignment_service.end_assignment(
                assignment_id, self.spaces, self.assignments, end_date=end_date)
            tx.persist = changed
            return assignment

    async def auto_assign(self) -> list[Assignment]:
        async with self._transaction("auto-assign") as tx:
            created = assignment_service.auto_assign(self.employees, self.spaces, self.assignments)
            tx.persist = bool(created)
            return created

    async def quick_assign(self, space_id: int) -> Assignment:
        async with self._transaction("quick assign"):
            return assignment_service.quick_assign(space_id, self.employees, self.spaces,
                                                   self.assignments)

    # ── Queries ──────────────────────────────────────────────────────────────
    def availability(self, target_date: Optional[date] = None) -> DailyAvailability:
        return calculate_daily_availability(self.spaces.items, self.employees.items,
                                            target_date or date.today())

    def dashboard(self, target_date: Optional[date] = None) -> DashboardOut:
        return build_dashboard(self.employees.items, self.spaces.items, self.assignments.items,
                               target_date or date.today())

    # ── Import / export ──────────────────────────────────────────────────────
    def export_document(self) -> dict:
        data = self.document().to_json_dict()
        data["exportedAt"] = datetime.utcnow().isoformat()
        return data

    async def import_document(self, data) -> ImportResult:
        document = parse_document(data)
        async with self._transaction("import document"):
            self._apply_document(document)
        logger.info(f"Document imported: {len(document.employees)} employees, "
                    f"{len(document.parking_spaces)} spaces, {len(document.assignments)} assignments")
        return ImportResult(employees=len(document.employees),
                            parking_spaces=len(document.parking_spaces),
                            assignments=len(document.assignments))

    async def clear(self):
        async with self._transaction("clear data") as tx:
            self._apply_document(ParkingDocument())
            tx.persist = False
            await self.storage.clear()
        logger.info("All data cleared")
