# parking_manager/routers/parking_spaces.py
"""Parking spaces: CRUD and bulk generation of the building layout."""

from typing import Optional
from fastapi import APIRouter, Depends
from parking_manager.schemas.enums import BasementLevel, SpaceStatus, VehicleType
from parking_manager.schemas.parking_space import (
    ParkingSpace, ParkingSpaceCreate, ParkingSpaceUpdate, BulkGenerateRequest, BulkGenerateOut,
)
from parking_manager.services.parking_manager import ParkingManager
from parking_manager.utils.dependencies import get_manager

router = APIRouter()


@router.get("/parking-spaces", response_model=list[ParkingSpace], summary="List parking spaces")
def list_spaces(search: Optional[str] = None,
                basement: Optional[BasementLevel] = None,
                space_type: Optional[VehicleType] = None,
                status: Optional[SpaceStatus] = None,
                manager: ParkingManager = Depends(get_manager)):
    return manager.list_spaces(search=search, basement=basement, space_type=space_type, status=status)


@router.post("/parking-spaces", response_model=ParkingSpace, status_code=201,
             summary="Create a parking space")
async def create_space(body: ParkingSpaceCreate, manager: ParkingManager = Depends(get_manager)):
    return await manager.add_space(body)


@router.post("/parking-spaces/bulk", response_model=BulkGenerateOut,
             summary="Generate spaces up to the building capacity")
async def generate_spaces(body: Optional[BulkGenerateRequest] = None,
                          manager: ParkingManager = Depends(get_manager)):
    """
    Tops up car -1 (40%), car -3 (40%), motorcycle -1 (15%) and bicycle -1 (5%)
    until max_spaces exist. Does nothing when the capacity is already reached.
    """
    return await manager.generate_spaces(body.max_spaces if body else None)


@router.get("/parking-spaces/{space_id}", response_model=ParkingSpace, summary="Get a parking space")
def get_space(space_id: int, manager: ParkingManager = Depends(get_manager)):
    return manager.get_space(space_id)


@router.put("/parking-spaces/{space_id}", response_model=ParkingSpace, summary="Update a parking space")
async def update_space(space_id: int, body: ParkingSpaceUpdate,
                       manager: ParkingManager = Depends(get_manager)):
    return await manager.update_space(space_id, body)


@router.delete("/parking-spaces/{space_id}", summary="Delete a parking space")
async def delete_space(space_id: int, manager: ParkingManager = Depends(get_manager)):
    space = await manager.delete_space(space_id)
    return {"status": "deleted", "id": space.id}
