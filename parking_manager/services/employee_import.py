# parking_manager/services/employee_import.py
"""
Employee spreadsheet import.

Accepted files: .csv (UTF-8) and .xlsx (first sheet). Row 1 is the header,
data starts on row 2 and the 19 columns are read by position:

   0 name             5 plate            10 status            15 emergency contact
   1 cedula           6 vehicle type     11 today status      16 hire date
   2 department       7 color            12 phone             17 restriction exemption
   3 role             8 brand            13 email             18 notes
   4 employee code    9 model            14 supervisor

The import is two-step: preview_import() classifies every row as valid,
erroneous or duplicate; the manager then commits only the valid rows.
Values from the original Spanish template (carro, moto, activo, presente...)
are accepted alongside the English ones.
"""

import csv
import io
import zipfile
from datetime import date, datetime
from typing import Optional
from openpyxl import load_workbook
from openpyxl.utils.datetime import from_excel
from openpyxl.utils.exceptions import InvalidFileException
from pydantic import ValidationError
from parking_manager.config import settings
from parking_manager.schemas.employee import EmployeeCreate
from parking_manager.schemas.employee_import import ImportPreview
from parking_manager.schemas.enums import VehicleType, EmploymentStatus, PresenceStatus
from parking_manager.services.employee_store import EmployeeStore
from parking_manager.utils.errors import ImportFileError
from parking_manager.utils.logger import get_logger
from parking_manager.utils.validators import normalize_plate

logger = get_logger(__name__)

COLUMNS = (
    "name", "cedula", "department", "role", "employee_code", "plate", "vehicle_type",
    "vehicle_color", "vehicle_brand", "vehicle_model", "employment_status", "today_status",
    "phone", "email", "supervisor", "emergency_contact", "hire_date",
    "restriction_exemption", "notes",
)
MIN_ROW_CELLS = 6
SUPPORTED_EXTENSIONS = (".csv", ".xlsx")

VEHICLE_TYPE_ALIASES = {
    "carro": VehicleType.CAR, "auto": VehicleType.CAR, "automovil": VehicleType.CAR,
    "automóvil": VehicleType.CAR, "car": VehicleType.CAR,
    "moto": VehicleType.MOTORCYCLE, "motocicleta": VehicleType.MOTORCYCLE,
    "motorcycle": VehicleType.MOTORCYCLE,
    "bicicleta": VehicleType.BICYCLE, "bici": VehicleType.BICYCLE, "bicycle": VehicleType.BICYCLE,
}

EMPLOYMENT_STATUS_ALIASES = {
    "activo": EmploymentStatus.ACTIVE,
    "vacaciones": EmploymentStatus.VACATION,
    "incapacidad": EmploymentStatus.SICK_LEAVE,
    "licencia": EmploymentStatus.LEAVE,
    "suspendido": EmploymentStatus.SUSPENDED,
    "inactivo": EmploymentStatus.INACTIVE,
    **{s.value: s for s in EmploymentStatus},
}

PRESENCE_STATUS_ALIASES = {
    "presente": PresenceStatus.PRESENT,
    "ausente": PresenceStatus.ABSENT,
    "vacaciones": PresenceStatus.VACATION,
    "incapacidad": PresenceStatus.SICK_LEAVE,
    "licencia": PresenceStatus.LEAVE,
    "tarde": PresenceStatus.LATE,
    "remoto": PresenceStatus.REMOTE,
    **{s.value: s for s in PresenceStatus},
}

DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y", "%Y/%m/%d")


# ── File reading ──────────────────────────────────────────────────────────────
def read_rows(filename: str, content: bytes) -> list[tuple[int, list]]:
    """Return (sheet row number, cells) for every data row of the file."""
    name = (filename or "").lower()
    if not name.endswith(SUPPORTED_EXTENSIONS):
        raise ImportFileError("Unsupported file type, use .csv or .xlsx")
    if len(content) > settings.IMPORT_MAX_BYTES:
        raise ImportFileError(f"File exceeds {settings.IMPORT_MAX_BYTES // (1024 * 1024)} MB limit")
    if not content:
        raise ImportFileError("File is empty")

    rows = _read_csv(content) if name.endswith(".csv") else _read_xlsx(content)
    logger.info(f"Read {max(len(rows) - 1, 0)} data rows from {filename}")
    return [(number, list(cells)) for number, cells in enumerate(rows, start=1) if number > 1]


def _read_csv(content: bytes) -> list:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ImportFileError("CSV file must be UTF-8 encoded") from e
    return list(csv.reader(io.StringIO(text)))


def _read_xlsx(content: bytes) -> list:
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, OSError) as e:
        raise ImportFileError("Could not read the Excel file") from e
    try:
        if not workbook.worksheets:
            raise ImportFileError("Excel file has no sheets")
        return [list(row) for row in workbook.worksheets[0].iter_rows(values_only=True)]
    finally:
        workbook.close()


# ── Cell conversion ───────────────────────────────────────────────────────────
def cell_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def parse_cell_date(value) -> Optional[date]:
    """Dates arrive as datetime (xlsx), Excel serial numbers or text."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        return from_excel(value).date()
    text = str(value).strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"unrecognized date '{text}'")


def is_blank_row(cells: list) -> bool:
    return len(cells) < MIN_ROW_CELLS or not any(cell_text(c) for c in cells)


def map_row(cells: list) -> tuple[dict, list[str]]:
    """Turn one row into EmployeeCreate fields. Returns (fields, problems)."""
    cells = list(cells) + [None] * (len(COLUMNS) - len(cells))
    raw = dict(zip(COLUMNS, cells))
    problems = []
    fields = {key: cell_text(raw[key]) or None for key in COLUMNS if key != "hire_date"}

    fields["plate"] = normalize_plate(fields["plate"]) or None

    vehicle_type = (fields["vehicle_type"] or "carro").lower()
    fields["vehicle_type"] = VEHICLE_TYPE_ALIASES.get(vehicle_type)
    if fields["vehicle_type"] is None:
        problems.append(f"Invalid vehicle type '{vehicle_type}'")

    status = (fields["employment_status"] or "activo").lower()
    fields["employment_status"] = EMPLOYMENT_STATUS_ALIASES.get(status)
    if fields["employment_status"] is None:
        problems.append(f"Invalid employee status '{status}'")

    today_status = (fields["today_status"] or "presente").lower()
    fields["today_status"] = PRESENCE_STATUS_ALIASES.get(today_status)
    if fields["today_status"] is None:
        problems.append(f"Invalid today status '{today_status}'")

    fields["restriction_exemption"] = (fields["restriction_exemption"] or "no").lower()

    try:
        fields["hire_date"] = parse_cell_date(raw["hire_date"])
    except (ValueError, OverflowError) as e:
        problems.append(f"Invalid hire date: {e}")
        fields["hire_date"] = None

    return fields, problems


# ── Preview ───────────────────────────────────────────────────────────────────
def _validation_messages(exc: ValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"])
        messages.append(f"{field}: {err['msg'].removeprefix('Value error, ')}")
    return messages


def preview_import(rows: list[tuple[int, list]], employees: EmployeeStore) -> ImportPreview:
    """
    Classify rows without touching the store. A row is a duplicate when its
    cedula or plate already belongs to a stored employee or to an earlier
    valid row of the same file; duplicates are reported and left out.
    """
    existing_cedulas = {e.cedula for e in employees.items}
    existing_plates = {e.plate for e in employees.items}
    seen_cedulas, seen_plates = set(), set()
    valid, errors, duplicates = [], [], []
    total = 0

    for row_number, cells in rows:
        if is_blank_row(cells):
            continue
        total += 1
        fields, problems = map_row(cells)

        for key, label in (("name", "Name"), ("cedula", "Cedula"), ("plate", "Plate")):
            if not fields[key]:
                problems.append(f"{label} is required")

        candidate = None
        if not problems:
            try:
                candidate = EmployeeCreate.model_validate(fields)
            except ValidationError as e:
                problems.extend(_validation_messages(e))

        if problems:
            errors.extend(f"Row {row_number}: {p}" for p in problems)
            continue

        conflicts = []
        if candidate.cedula in existing_cedulas:
            conflicts.append(f"Row {row_number}: Cedula {candidate.cedula} already exists")
        elif candidate.cedula in seen_cedulas:
            conflicts.append(f"Row {row_number}: Cedula {candidate.cedula} repeated in file")
        if candidate.plate in existing_plates:
            conflicts.append(f"Row {row_number}: Plate {candidate.plate} already exists")
        elif candidate.plate in seen_plates:
            conflicts.append(f"Row {row_number}: Plate {candidate.plate} repeated in file")

        if conflicts:
            duplicates.extend(conflicts)
            continue

        seen_cedulas.add(candidate.cedula)
        seen_plates.add(candidate.plate)
        valid.append(candidate)

    logger.info(f"Import preview: {total} rows, {len(valid)} valid, "
                f"{len(errors)} errors, {len(duplicates)} duplicates")
    return ImportPreview(total_rows=total, valid=valid, errors=errors, duplicates=duplicates)
