"""
Bulk parking space generation.

The building layout is fixed: of the total capacity, 40% are car spaces in
basement -1, 40% car spaces in basement -3, 15% motorcycle spaces and 5%
bicycle spaces, both in basement -1. Generation tops each bucket up to its
share without exceeding the total capacity.
"""

import re
from datetime import date
from typing import Optional
from parking_manager.schemas.enums import BasementLevel, SpaceStatus, VehicleType
from parking_manager.schemas.parking_space import ParkingSpace
from parking_manager.utils.logger import get_logger

logger = get_logger(__name__)

# (basement, type, percent of capacity)
DISTRIBUTION = (
    (BasementLevel.MINUS_ONE, VehicleType.CAR, 40),
    (BasementLevel.MINUS_THREE, VehicleType.CAR, 40),
    (BasementLevel.MINUS_ONE, VehicleType.MOTORCYCLE, 15),
    (BasementLevel.MINUS_ONE, VehicleType.BICYCLE, 5),
)

TYPE_CODES = {
    VehicleType.CAR: "C",
    VehicleType.MOTORCYCLE: "M",
    VehicleType.BICYCLE: "B",
}

NUMBER_PATTERN = re.compile(r"^S(\d+)-([CMB])(\d+)$")


def bucket_key(basement: BasementLevel, space_type: VehicleType) -> str:
    return f"{space_type.value}/{basement.value}"


def format_space_number(basement: BasementLevel, space_type: VehicleType, sequence: int) -> str:
    """S1-C001 style: basement level without sign, type code, 3-digit sequence."""
    return f"S{abs(int(basement.value))}-{TYPE_CODES[space_type]}{sequence:03d}"


def distribution_quotas(max_spaces: int) -> dict[str, int]:
    """Split max_spaces across the buckets with largest-remainder rounding."""
    exact = [(bucket_key(b, t), max_spaces * pct) for b, t, pct in DISTRIBUTION]
    quotas = {key: value // 100 for key, value in exact}
    leftover = max_spaces - sum(quotas.values())
    # stable sort keeps DISTRIBUTION order on ties
    by_remainder = sorted(exact, key=lambda item: item[1] % 100, reverse=True)
    for key, _ in by_remainder[:leftover]:
        quotas[key] += 1
    return quotas


def _last_sequence(existing: list[ParkingSpace], basement: BasementLevel, space_type: VehicleType) -> int:
    level = str(abs(int(basement.value)))
    code = TYPE_CODES[space_type]
    last = 0
    for space in existing:
        match = NUMBER_PATTERN.match(space.number.upper())
        if match and match.group(1) == level and match.group(2) == code:
            last = max(last, int(match.group(3)))
    return last


def generate_parking_spaces(existing: list[ParkingSpace], max_spaces: int,
                            start_id: Optional[int] = None,
                            today: Optional[date] = None) -> list[ParkingSpace]:
    """
    Build the spaces missing from the distribution. Existing spaces are
    counted against their bucket; nothing is created once the total reaches
    max_spaces. The returned batch is not stored; the caller appends it.
    """
    headroom = max_spaces - len(existing)
    if headroom <= 0:
        logger.info(f"Bulk generation skipped: {len(existing)} spaces already exist (max {max_spaces})")
        return []

    today = today or date.today()
    next_id = start_id if start_id is not None else max((s.id for s in existing), default=0) + 1
    taken = {s.number.upper() for s in existing}
    quotas = distribution_quotas(max_spaces)
    batch = []

    for basement, space_type, _ in DISTRIBUTION:
        if headroom <= 0:
            break
        present = sum(1 for s in existing if s.basement == basement and s.space_type == space_type)
        missing = min(max(0, quotas[bucket_key(basement, space_type)] - present), headroom)

        sequence = _last_sequence(existing, basement, space_type)
        for _ in range(missing):
            sequence += 1
            number = format_space_number(basement, space_type, sequence)
            while number in taken:
                sequence += 1
                number = format_space_number(basement, space_type, sequence)
            taken.add(number)
            batch.append(ParkingSpace(
                id=next_id,
                number=number,
                basement=basement,
                space_type=space_type,
                status=SpaceStatus.AVAILABLE,
                assigned_employee_id=None,
                created_date=today,
            ))
            next_id += 1
        headroom -= missing

    logger.info(f"Bulk generation built {len(batch)} spaces (existing={len(existing)}, max={max_spaces})")
    return batch
