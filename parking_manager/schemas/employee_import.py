# parking_manager/schemas/employee_import.py
from pydantic import BaseModel
from parking_manager.schemas.employee import Employee, EmployeeCreate


class ImportPreview(BaseModel):
    total_rows: int
    valid: list[EmployeeCreate]
    errors: list[str]          # required field / format problems, row excluded
    duplicates: list[str]      # cedula or plate conflicts, row excluded


class ImportCommitOut(BaseModel):
    imported: int
    employees: list[Employee]
    errors: list[str]
    duplicates: list[str]
