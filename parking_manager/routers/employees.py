# parking_manager/routers/employees.py
"""Employee records: CRUD, current assignment and spreadsheet import."""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, File, Query, UploadFile
from parking_manager.schemas.employee import (
    Employee, EmployeeCreate, EmployeeUpdate, EmployeeAssignmentInfo,
)
from parking_manager.schemas.employee_import import ImportPreview, ImportCommitOut
from parking_manager.schemas.enums import VehicleType, EmploymentStatus
from parking_manager.services.parking_manager import ParkingManager
from parking_manager.utils.dependencies import get_manager

router = APIRouter()


@router.get("/employees", response_model=list[Employee], summary="List employees")
def list_employees(search: Optional[str] = None,
                   vehicle_type: Optional[VehicleType] = None,
                   department: Optional[str] = None,
                   employment_status: Optional[EmploymentStatus] = None,
                   manager: ParkingManager = Depends(get_manager)):
    """Sorted by name. `search` matches name, cedula, plate, department, role or email."""
    return manager.list_employees(search=search, vehicle_type=vehicle_type,
                                  department=department, employment_status=employment_status)


@router.post("/employees", response_model=Employee, status_code=201, summary="Register an employee")
async def create_employee(body: EmployeeCreate, manager: ParkingManager = Depends(get_manager)):
    return await manager.add_employee(body)


@router.get("/employees/{employee_id}", response_model=Employee, summary="Get an employee")
def get_employee(employee_id: int, manager: ParkingManager = Depends(get_manager)):
    return manager.get_employee(employee_id)


@router.put("/employees/{employee_id}", response_model=Employee, summary="Update an employee")
async def update_employee(employee_id: int, body: EmployeeUpdate,
                          manager: ParkingManager = Depends(get_manager)):
    return await manager.update_employee(employee_id, body)


@router.delete("/employees/{employee_id}", summary="Delete an employee")
async def delete_employee(employee_id: int, manager: ParkingManager = Depends(get_manager)):
    employee = await manager.delete_employee(employee_id)
    return {"status": "deleted", "id": employee.id}


@router.get("/employees/{employee_id}/assignment", response_model=EmployeeAssignmentInfo,
            summary="Current parking assignment of an employee")
def get_employee_assignment(employee_id: int, on: Optional[date] = Query(None, alias="date"),
                            manager: ParkingManager = Depends(get_manager)):
    return manager.assignment_info(employee_id, on)


@router.post("/employees/import/preview", response_model=ImportPreview,
             summary="Validate a .csv/.xlsx employee file without saving")
async def preview_import(file: UploadFile = File(...), manager: ParkingManager = Depends(get_manager)):
    content = await file.read()
    return manager.preview_import(file.filename, content)


@router.post("/employees/import", response_model=ImportCommitOut,
             summary="Import the valid rows of a .csv/.xlsx employee file")
async def import_employees(file: UploadFile = File(...), manager: ParkingManager = Depends(get_manager)):
    content = await file.read()
    return await manager.commit_import(file.filename, content)
