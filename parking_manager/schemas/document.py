# parking_manager/schemas/document.py
"""
The persisted document: the single JSON object holding every record.
Top-level keys keep the names used by the existing backups
(empleados / parqueaderos / asignaciones / version / lastUpdated).
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from parking_manager.schemas.assignment import Assignment
from parking_manager.schemas.employee import Employee
from parking_manager.schemas.parking_space import ParkingSpace

REQUIRED_ARRAYS = ("empleados", "parqueaderos", "asignaciones")


class ParkingDocument(BaseModel):
    employees: list[Employee] = Field(default_factory=list, alias="empleados")
    parking_spaces: list[ParkingSpace] = Field(default_factory=list, alias="parqueaderos")
    assignments: list[Assignment] = Field(default_factory=list, alias="asignaciones")
    version: Optional[str] = None
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdated")

    class Config:
        populate_by_name = True

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ImportResult(BaseModel):
    employees: int
    parking_spaces: int
    assignments: int
