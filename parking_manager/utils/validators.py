"""
Field rules for employee records, shared by the request schemas and the
spreadsheet importer so both reject the same values.
"""

import re
from typing import Optional

PLATE_REGEX = re.compile(r"^[A-Z]{3}[0-9]{3}$")
PHONE_REGEX = re.compile(r"^[0-9]{10}$")

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50
MIN_CEDULA_LENGTH = 6
MAX_CEDULA_LENGTH = 15


def sanitize_string(value: Optional[str]) -> str:
    """Trim and strip angle brackets. Non-strings become ''."""
    if not value or not isinstance(value, str):
        return ""
    return value.strip().replace("<", "").replace(">", "")


def normalize_plate(plate: Optional[str]) -> str:
    return sanitize_string(plate).upper()


def is_valid_plate(plate: Optional[str]) -> bool:
    return bool(plate) and PLATE_REGEX.match(plate) is not None


def is_valid_phone(phone: Optional[str]) -> bool:
    return bool(phone) and PHONE_REGEX.match(phone) is not None


def check_name(name: str) -> str:
    name = sanitize_string(name)
    if not name:
        raise ValueError("Name is required")
    if not MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH:
        raise ValueError(f"Name must be between {MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters")
    return name


def check_cedula(cedula: str) -> str:
    cedula = sanitize_string(cedula)
    if not cedula:
        raise ValueError("Cedula is required")
    if not MIN_CEDULA_LENGTH <= len(cedula) <= MAX_CEDULA_LENGTH:
        raise ValueError(f"Cedula must be between {MIN_CEDULA_LENGTH} and {MAX_CEDULA_LENGTH} characters")
    return cedula


def check_plate(plate: str) -> str:
    plate = normalize_plate(plate)
    if not plate:
        raise ValueError("Plate is required")
    if not is_valid_plate(plate):
        raise ValueError("Plate format must be ABC123")
    return plate


def check_phone(phone: Optional[str]) -> Optional[str]:
    phone = sanitize_string(phone)
    if not phone:
        return None
    if not is_valid_phone(phone):
        raise ValueError("Phone must have 10 digits")
    return phone
