# parking_manager/schemas/assignment.py
from pydantic import BaseModel
from datetime import date
from typing import Optional


class Assignment(BaseModel):
    id: int
    employee_id: int
    space_id: int
    start_date: date
    end_date: Optional[date] = None
    active: bool = True
    created_date: date


class AssignmentCreate(BaseModel):
    employee_id: int
    space_id: int
    start_date: Optional[date] = None       # today when omitted
    end_date: Optional[date] = None


class AssignmentEnd(BaseModel):
    end_date: Optional[date] = None         # today when omitted


class AutoAssignOut(BaseModel):
    created: int
    assignments: list[Assignment]
