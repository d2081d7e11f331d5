"""
Roster Filter

Selects students by department and year of study. Filtering is a stable
predicate selection: input order is kept and the input list is never
touched.
"""

from datetime import date
from typing import Dict, Iterable, List, Sequence

from core.models import StudentRecord
from services.academic_year_service import (
    DEFAULT_CUTOVER_MONTH,
    AcademicYear,
    resolve_student_year,
)


ALL = "All"

YEAR_SELECTORS: Dict[str, AcademicYear] = {
    "1st": AcademicYear.YEAR_1,
    "2nd": AcademicYear.YEAR_2,
    "3rd": AcademicYear.YEAR_3,
    "4th": AcademicYear.YEAR_4,
}

YEAR_OPTIONS: List[str] = [ALL, *YEAR_SELECTORS]


def matches_department(student: StudentRecord, department: str) -> bool:
    return department == ALL or student.department == department


def matches_year(
    student: StudentRecord,
    year: str,
    current_date: date,
    cutover_month: int = DEFAULT_CUTOVER_MONTH,
) -> bool:
    if year == ALL:
        return True

    target = YEAR_SELECTORS.get(year)
    if target is None:
        return False

    return resolve_student_year(student, current_date, cutover_month).classification == target


def filter_roster(
    roster: Sequence[StudentRecord],
    current_date: date,
    department: str = ALL,
    year: str = ALL,
    cutover_month: int = DEFAULT_CUTOVER_MONTH,
) -> List[StudentRecord]:
    """
    Filter students by department and year of study.

    Args:
        roster: Students in their original order
        current_date: Date used to classify years of study
        department: "All" or an exact department name
        year: "All", "1st", "2nd", "3rd" or "4th"
        cutover_month: First month of the academic year

    Returns:
        New list of matching students, in input order
    """
    return [
        student
        for student in roster
        if matches_department(student, department)
        and matches_year(student, year, current_date, cutover_month)
    ]


def search_by_name(roster: Sequence[StudentRecord], query: str) -> List[StudentRecord]:
    """Case-insensitive substring match on the student name."""
    q = (query or "").lower()
    if not q:
        return list(roster)
    return [student for student in roster if q in student.name.lower()]


def department_options(
    roster: Iterable[StudentRecord], college_departments: Iterable[str] = ()
) -> List[str]:
    """
    Department dropdown values.

    "All" first, then the college's configured departments, then any other
    department found on the roster, each once in first-seen order.
    """
    seen: Dict[str, None] = {}
    for name in college_departments:
        seen.setdefault(name, None)
    for student in roster:
        seen.setdefault(student.department, None)
    seen.pop(ALL, None)
    return [ALL, *seen]
