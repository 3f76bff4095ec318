"""
Error hierarchy for the parking domain.

Three families, each mapped to an HTTP status in main.py:
  - ParkingValidationError → 400, the operation was rejected before any mutation
  - NotFoundError          → 404, an id referenced by the action does not exist
  - PersistenceError       → 500, the document could not be read or written
"""


class ParkingError(Exception):
    """Base error for every rejected parking operation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ── Validation ────────────────────────────────────────────────────────────────
class ParkingValidationError(ParkingError):
    pass


class DuplicateCedulaError(ParkingValidationError):
    def __init__(self, cedula: str):
        super().__init__(f"An employee with cedula {cedula} already exists")
        self.cedula = cedula


class DuplicatePlateError(ParkingValidationError):
    def __init__(self, plate: str):
        super().__init__(f"An employee with plate {plate} already exists")
        self.plate = plate


class DuplicateSpaceNumberError(ParkingValidationError):
    def __init__(self, number: str):
        super().__init__(f"A parking space with number {number} already exists")
        self.number = number


class EmployeeAlreadyAssignedError(ParkingValidationError):
    def __init__(self, employee_id: int):
        super().__init__("Employee already assigned to a parking space")
        self.employee_id = employee_id


class ParkingSpaceAlreadyAssignedError(ParkingValidationError):
    def __init__(self, space_id: int):
        super().__init__("Parking space already assigned to another employee")
        self.space_id = space_id


class VehicleTypeMismatchError(ParkingValidationError):
    def __init__(self, vehicle_type: str, space_type: str):
        super().__init__(
            f"Employee vehicle type '{vehicle_type}' does not match parking space type '{space_type}'"
        )
        self.vehicle_type = vehicle_type
        self.space_type = space_type


class NoCompatibleEmployeeError(ParkingValidationError):
    def __init__(self, space_id: int):
        super().__init__("No unassigned employee with a compatible vehicle")
        self.space_id = space_id


class InvalidDateRangeError(ParkingValidationError):
    def __init__(self, start_date, end_date):
        super().__init__(f"End date {end_date} is before start date {start_date}")
        self.start_date = start_date
        self.end_date = end_date


class SpaceStatusConflictError(ParkingValidationError):
    pass


class InvalidDocumentError(ParkingValidationError):
    pass


class ImportFileError(ParkingValidationError):
    pass


# ── Not found ─────────────────────────────────────────────────────────────────
class NotFoundError(ParkingError):
    pass


class EmployeeNotFoundError(NotFoundError):
    def __init__(self, employee_id: int):
        super().__init__(f"Employee {employee_id} not found")
        self.employee_id = employee_id


class ParkingSpaceNotFoundError(NotFoundError):
    def __init__(self, space_id: int):
        super().__init__(f"Parking space {space_id} not found")
        self.space_id = space_id


class AssignmentNotFoundError(NotFoundError):
    def __init__(self, assignment_id: int):
        super().__init__(f"Assignment {assignment_id} not found")
        self.assignment_id = assignment_id


# ── Persistence ───────────────────────────────────────────────────────────────
class PersistenceError(ParkingError):
    pass
