# parking_manager/routers/assignments.py
"""Assignments: manual, quick and automatic pairing of employees to spaces."""

from typing import Optional
from fastapi import APIRouter, Depends
from parking_manager.schemas.assignment import (
    Assignment, AssignmentCreate, AssignmentEnd, AutoAssignOut,
)
from parking_manager.services.parking_manager import ParkingManager
from parking_manager.utils.dependencies import get_manager

router = APIRouter()


@router.get("/assignments", response_model=list[Assignment], summary="List assignments")
def list_assignments(active_only: bool = False, manager: ParkingManager = Depends(get_manager)):
    return manager.list_assignments(active_only=active_only)


@router.post("/assignments", response_model=Assignment, status_code=201,
             summary="Assign a parking space to an employee")
async def create_assignment(body: AssignmentCreate, manager: ParkingManager = Depends(get_manager)):
    return await manager.assign(body)


@router.post("/assignments/auto-assign", response_model=AutoAssignOut,
             summary="Pair every unassigned employee with a compatible open space")
async def auto_assign(manager: ParkingManager = Depends(get_manager)):
    created = await manager.auto_assign()
    return AutoAssignOut(created=len(created), assignments=created)


@router.post("/assignments/quick/{space_id}", response_model=Assignment, status_code=201,
             summary="Assign a space to the first compatible unassigned employee")
async def quick_assign(space_id: int, manager: ParkingManager = Depends(get_manager)):
    return await manager.quick_assign(space_id)


@router.post("/assignments/{assignment_id}/end", response_model=Assignment,
             summary="End an assignment and free its space")
async def end_assignment(assignment_id: int, body: Optional[AssignmentEnd] = None,
                         manager: ParkingManager = Depends(get_manager)):
    return await manager.end_assignment(assignment_id, body.end_date if body else None)
