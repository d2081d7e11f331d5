"""
Shared fixtures for the roster analytics tests
"""

from datetime import date
from itertools import count

import pytest

from core.clock import FixedClock
from core.config import Settings
from core.models import StudentRecord


MARCH_2024 = date(2024, 3, 1)
AUGUST_2024 = date(2024, 8, 1)


@pytest.fixture
def make_student():
    """Factory for StudentRecord built from portal-style (camelCase) documents."""
    ids = count(1)

    def _make(**overrides) -> StudentRecord:
        doc = {
            "_id": f"s{next(ids)}",
            "name": "Student",
            "department": "CS",
            "enrollmentYear": 2022,
            "graduationYear": 2026,
            "cgpa": 80,
        }
        doc.update(overrides)
        return StudentRecord.model_validate(doc)

    return _make


@pytest.fixture
def march_2024() -> date:
    return MARCH_2024


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(MARCH_2024)
