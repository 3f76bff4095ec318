# parking_manager/routers/data.py
"""Whole-document export, import and reset."""

from typing import Any
from fastapi import APIRouter, Body, Depends
from parking_manager.schemas.document import ImportResult
from parking_manager.services.parking_manager import ParkingManager
from parking_manager.utils.dependencies import get_manager

router = APIRouter()


@router.get("/data", summary="Export every record as one JSON document")
def export_data(manager: ParkingManager = Depends(get_manager)):
    return manager.export_document()


@router.post("/data", response_model=ImportResult, summary="Replace every record from a JSON document")
async def import_data(document: Any = Body(...), manager: ParkingManager = Depends(get_manager)):
    """Requires `empleados`, `parqueaderos` and `asignaciones` arrays."""
    return await manager.import_document(document)


@router.delete("/data", summary="Delete every record")
async def clear_data(manager: ParkingManager = Depends(get_manager)):
    await manager.clear()
    return {"status": "cleared"}
