# tests/test_parking_generator.py
"""Unit tests for bulk parking space generation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from collections import Counter
from datetime import date
from parking_manager.schemas.enums import BasementLevel, SpaceStatus, VehicleType
from parking_manager.schemas.parking_space import ParkingSpace
from parking_manager.services.parking_generator import (
    generate_parking_spaces, format_space_number, distribution_quotas,
)

TODAY = date(2024, 1, 10)


def bucket_counts(spaces):
    return Counter((s.space_type, s.basement) for s in spaces)


class TestFormatSpaceNumber:
    def test_formats(self):
        assert format_space_number(BasementLevel.MINUS_ONE, VehicleType.CAR, 1) == "S1-C001"
        assert format_space_number(BasementLevel.MINUS_THREE, VehicleType.CAR, 120) == "S3-C120"
        assert format_space_number(BasementLevel.MINUS_ONE, VehicleType.MOTORCYCLE, 7) == "S1-M007"
        assert format_space_number(BasementLevel.MINUS_ONE, VehicleType.BICYCLE, 15) == "S1-B015"


class TestDistribution:
    def test_quotas_for_300(self):
        assert distribution_quotas(300) == {"car/-1": 120, "car/-3": 120,
                                            "motorcycle/-1": 45, "bicycle/-1": 15}

    def test_quotas_always_sum_to_total(self):
        for total in (1, 7, 13, 99, 301):
            assert sum(distribution_quotas(total).values()) == total


class TestGenerateParkingSpaces:
    def test_generate_300_from_empty(self):
        batch = generate_parking_spaces([], 300, today=TODAY)

        counts = bucket_counts(batch)
        assert len(batch) == 300
        assert counts[(VehicleType.CAR, BasementLevel.MINUS_ONE)] == 120
        assert counts[(VehicleType.CAR, BasementLevel.MINUS_THREE)] == 120
        assert counts[(VehicleType.MOTORCYCLE, BasementLevel.MINUS_ONE)] == 45
        assert counts[(VehicleType.BICYCLE, BasementLevel.MINUS_ONE)] == 15
        assert len({s.number for s in batch}) == 300
        assert [s.id for s in batch] == list(range(1, 301))
        assert all(s.status == SpaceStatus.AVAILABLE and s.assigned_employee_id is None for s in batch)

    def test_generate_again_creates_nothing(self):
        first = generate_parking_spaces([], 300, today=TODAY)
        assert generate_parking_spaces(first, 300, today=TODAY) == []

    def test_over_capacity_creates_nothing(self):
        first = generate_parking_spaces([], 10, today=TODAY)
        assert generate_parking_spaces(first, 5, today=TODAY) == []

    def test_numbering_continues_after_existing(self):
        existing = [ParkingSpace(id=5, number="S1-C003", basement=BasementLevel.MINUS_ONE,
                                 space_type=VehicleType.CAR, created_date=TODAY)]

        batch = generate_parking_spaces(existing, 300, today=TODAY)

        car_s1 = [s.number for s in batch
                  if s.space_type == VehicleType.CAR and s.basement == BasementLevel.MINUS_ONE]
        assert len(batch) == 299
        assert len(car_s1) == 119
        assert car_s1[0] == "S1-C004"
        assert "S1-C003" not in car_s1
        assert batch[0].id == 6

    def test_never_exceeds_headroom(self):
        existing = generate_parking_spaces([], 50, today=TODAY)
        batch = generate_parking_spaces(existing, 60, today=TODAY)
        assert len(existing) + len(batch) <= 60

    def test_numbers_unique_with_foreign_existing(self):
        existing = [ParkingSpace(id=1, number="VISITOR-1", basement=BasementLevel.MINUS_THREE,
                                 space_type=VehicleType.MOTORCYCLE, created_date=TODAY)]
        batch = generate_parking_spaces(existing, 20, today=TODAY)
        numbers = [s.number for s in batch] + ["VISITOR-1"]
        assert len(numbers) == len(set(numbers))
