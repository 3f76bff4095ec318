# parking_manager/services/parking_store.py
from datetime import date
from typing import Optional
from parking_manager.schemas.enums import BasementLevel, SpaceStatus, VehicleType
from parking_manager.schemas.parking_space import ParkingSpace, ParkingSpaceCreate, ParkingSpaceUpdate
from parking_manager.services.record_store import RecordStore
from parking_manager.utils.errors import ParkingSpaceNotFoundError, DuplicateSpaceNumberError
from parking_manager.utils.logger import get_logger

logger = get_logger(__name__)


class ParkingSpaceStore(RecordStore[ParkingSpace]):
    not_found_error = ParkingSpaceNotFoundError

    def check_unique(self, number: str, exclude_id: Optional[int] = None):
        wanted = number.upper()
        if any(s.number.upper() == wanted and s.id != exclude_id for s in self.items):
            raise DuplicateSpaceNumberError(number)

    def add(self, data: ParkingSpaceCreate, today: Optional[date] = None) -> ParkingSpace:
        self.check_unique(data.number)
        space = ParkingSpace(id=self.next_id(), created_date=today or date.today(), **data.model_dump())
        self.items.append(space)
        logger.info(f"Parking space added: {space.id} {space.number}")
        return space

    def extend(self, spaces: list[ParkingSpace]):
        self.items.extend(spaces)

    def update(self, space_id: int, data: ParkingSpaceUpdate) -> ParkingSpace:
        space = self.require(space_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "number" in changes:
            self.check_unique(changes["number"], exclude_id=space_id)
        for field, value in changes.items():
            setattr(space, field, value)
        logger.info(f"Parking space updated: {space_id} fields={sorted(changes)}")
        return space

    def find(self, search: Optional[str] = None, basement: Optional[BasementLevel] = None,
             space_type: Optional[VehicleType] = None,
             status: Optional[SpaceStatus] = None) -> list[ParkingSpace]:
        results = self.items
        if search:
            term = search.strip().lower()
            results = [s for s in results if term in s.number.lower()]
        if basement:
            results = [s for s in results if s.basement == basement]
        if space_type:
            results = [s for s in results if s.space_type == space_type]
        if status:
            results = [s for s in results if s.status == status]
        return sorted(results, key=lambda s: s.number)

    def available(self, vehicle_type: Optional[VehicleType] = None) -> list[ParkingSpace]:
        return [s for s in self.items
                if s.status == SpaceStatus.AVAILABLE and s.assigned_employee_id is None
                and (vehicle_type is None or s.space_type == vehicle_type)]
