# parking_manager/schemas/parking_space.py
from pydantic import BaseModel, Field, field_validator
from datetime import date
from typing import Optional
from parking_manager.schemas.enums import VehicleType, SpaceStatus, BasementLevel
from parking_manager.utils.validators import sanitize_string


class ParkingSpace(BaseModel):
    id: int
    number: str                              # e.g. S1-C001
    basement: BasementLevel
    space_type: VehicleType
    status: SpaceStatus = SpaceStatus.AVAILABLE
    assigned_employee_id: Optional[int] = None
    created_date: date


class ParkingSpaceCreate(BaseModel):
    number: str
    basement: BasementLevel
    space_type: VehicleType
    status: SpaceStatus = SpaceStatus.AVAILABLE

    @field_validator("number")
    @classmethod
    def _check_number(cls, v):
        v = sanitize_string(v)
        if not v:
            raise ValueError("Parking space number is required")
        return v


class ParkingSpaceUpdate(BaseModel):
    number: Optional[str] = None
    basement: Optional[BasementLevel] = None
    space_type: Optional[VehicleType] = None
    status: Optional[SpaceStatus] = None

    @field_validator("number")
    @classmethod
    def _check_number(cls, v):
        if v is None:
            return None
        v = sanitize_string(v)
        if not v:
            raise ValueError("Parking space number cannot be empty")
        return v


class BulkGenerateRequest(BaseModel):
    max_spaces: Optional[int] = Field(default=None, ge=1)   # defaults to settings.MAX_PARKING_SPACES


class BulkGenerateOut(BaseModel):
    created: int
    total: int
    by_bucket: dict[str, int]
