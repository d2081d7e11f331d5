"""
Academic Year Service

Resolves a student's current year of study from enrollment and graduation
years plus the current date.

Rules:
- Past the graduation year -> Passed Out
- Years since joining counts calendar years, plus one once the academic
  year has rolled over (July by default)
- More years than the programme length -> Passed Out
- 1..4 map to 1st..4th year
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from core.models import StudentRecord


DEFAULT_CUTOVER_MONTH = 7  # July


class AcademicYear(str, Enum):
    YEAR_1 = "Year1"
    YEAR_2 = "Year2"
    YEAR_3 = "Year3"
    YEAR_4 = "Year4"
    PASSED_OUT = "PassedOut"
    NOT_YET_ENROLLED = "NotYetEnrolled"
    UNCLASSIFIED = "Unclassified"


_YEAR_BY_INDEX = {
    1: AcademicYear.YEAR_1,
    2: AcademicYear.YEAR_2,
    3: AcademicYear.YEAR_3,
    4: AcademicYear.YEAR_4,
}

YEAR_LABELS = {
    AcademicYear.YEAR_1: "1st Year",
    AcademicYear.YEAR_2: "2nd Year",
    AcademicYear.YEAR_3: "3rd Year",
    AcademicYear.YEAR_4: "4th Year",
    AcademicYear.PASSED_OUT: "Passed Out",
    AcademicYear.NOT_YET_ENROLLED: "Not Yet Enrolled",
    AcademicYear.UNCLASSIFIED: "N/A",
}


@dataclass(frozen=True)
class YearOfStudy:
    """Classification plus the unclamped years-since-joining it came from."""

    classification: AcademicYear
    years_since_joining: Optional[int] = None

    @property
    def is_passed_out(self) -> bool:
        return self.classification == AcademicYear.PASSED_OUT

    @property
    def label(self) -> str:
        # Long programmes still show "5th Year" even though no filter selects them
        if (
            self.classification == AcademicYear.UNCLASSIFIED
            and self.years_since_joining is not None
        ):
            return f"{ordinal(self.years_since_joining)} Year"
        return YEAR_LABELS[self.classification]


def ordinal(num: int) -> str:
    """1 -> "1st", 12 -> "12th", 23 -> "23rd"."""
    if 11 <= num % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(num % 10, "th")
    return f"{num}{suffix}"


def _years_since_joining(
    enrollment_year: int, current_date: date, cutover_month: int
) -> int:
    years = current_date.year - enrollment_year
    if current_date.month >= cutover_month:
        years += 1
    return years


def resolve_academic_year(
    enrollment_year: Optional[int],
    graduation_year: Optional[int],
    current_date: date,
    cutover_month: int = DEFAULT_CUTOVER_MONTH,
) -> YearOfStudy:
    """
    Classify a student's year of study.

    Args:
        enrollment_year: Calendar year the student joined
        graduation_year: Calendar year the student is expected to graduate
        current_date: Date to classify against
        cutover_month: First month (1-12) of the new academic year

    Returns:
        YearOfStudy with the classification and raw years since joining
    """
    if graduation_year is not None and current_date.year > graduation_year:
        return YearOfStudy(AcademicYear.PASSED_OUT)

    if enrollment_year is None or graduation_year is None:
        return YearOfStudy(AcademicYear.UNCLASSIFIED)

    years = _years_since_joining(enrollment_year, current_date, cutover_month)

    # Malformed pairs (e.g. graduation before enrollment) fall through here
    if years > (graduation_year - enrollment_year + 1):
        return YearOfStudy(AcademicYear.PASSED_OUT, years)

    if years <= 0:
        return YearOfStudy(AcademicYear.NOT_YET_ENROLLED, years)

    classification = _YEAR_BY_INDEX.get(years, AcademicYear.UNCLASSIFIED)
    return YearOfStudy(classification, years)


def get_numeric_year(
    enrollment_year: Optional[int],
    graduation_year: Optional[int],
    current_date: date,
    cutover_month: int = DEFAULT_CUTOVER_MONTH,
) -> int:
    """
    Numeric year used as a sort key.

    Years since joining for current students; the graduation year itself
    once the student has passed out. Missing years give 0.
    """
    if enrollment_year is None or graduation_year is None:
        return graduation_year or 0

    if current_date.year > graduation_year:
        return graduation_year

    years = _years_since_joining(enrollment_year, current_date, cutover_month)
    if years > (graduation_year - enrollment_year + 1):
        return graduation_year

    return years


def resolve_student_year(
    student: StudentRecord,
    current_date: date,
    cutover_month: int = DEFAULT_CUTOVER_MONTH,
) -> YearOfStudy:
    """Classify a roster record."""
    return resolve_academic_year(
        student.enrollment_year, student.graduation_year, current_date, cutover_month
    )


def year_of_study_label(classification: AcademicYear) -> str:
    """Ordinal display label, e.g. "3rd Year"."""
    return YEAR_LABELS[classification]


def batch_label(student: StudentRecord) -> str:
    """
    Batch column text.

    "2022-26" when both years are known, otherwise the stored batch label,
    otherwise "N/A".
    """
    if student.enrollment_year and student.graduation_year:
        return f"{student.enrollment_year}-{str(student.graduation_year)[-2:]}"
    return student.batch or "N/A"
