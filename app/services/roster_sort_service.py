"""
Roster Sorter

Orders students "most current, most advanced first":

1. Current students before students whose graduation year has passed
2. Current students: higher year of study first, then later graduation year
3. Passed-out students: later graduation year first (missing sorts last)

Python's sort is stable, so students with equal keys keep their input order.
"""

from datetime import date
from typing import List, Sequence, Tuple

from core.models import StudentRecord
from services.academic_year_service import DEFAULT_CUTOVER_MONTH, get_numeric_year


def is_graduated(student: StudentRecord, current_date: date) -> bool:
    """True once the calendar year is past the student's graduation year."""
    return (
        student.graduation_year is not None
        and current_date.year > student.graduation_year
    )


def progress_sort_key(
    student: StudentRecord,
    current_date: date,
    cutover_month: int = DEFAULT_CUTOVER_MONTH,
) -> Tuple[int, int, int]:
    """Ascending key implementing the descending progress order."""
    graduation_year = student.graduation_year or 0

    if is_graduated(student, current_date):
        return (1, -graduation_year, 0)

    numeric_year = get_numeric_year(
        student.enrollment_year, student.graduation_year, current_date, cutover_month
    )
    return (0, -numeric_year, -graduation_year)


def sort_roster(
    roster: Sequence[StudentRecord],
    current_date: date,
    cutover_month: int = DEFAULT_CUTOVER_MONTH,
) -> List[StudentRecord]:
    """Return a new list of students in progress order."""
    return sorted(
        roster, key=lambda s: progress_sort_key(s, current_date, cutover_month)
    )
