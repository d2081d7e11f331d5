"""
Campus Score Calculator

Single source of the composite "campus score" shown on every dashboard
card. Summary averages, department averages and the on/off-campus
comparison all call calculate_campus_score(); nothing recomputes it inline.

Score = 40% internship performance + 40% interview performance
        + 20% normalized CGPA, on a 0-100 scale.
"""

from typing import Sequence

from core.models import ApplicationEntry, StudentRecord


INTERNSHIP_WEIGHT = 0.4
INTERVIEW_WEIGHT = 0.4
CGPA_WEIGHT = 0.2

MAX_SCORE = 100.0
TEN_POINT_SCALE_MAX = 10.0


def selection_percentage(entries: Sequence[ApplicationEntry]) -> float:
    """Share of entries that ended in selection, as a percentage."""
    if not entries:
        return 0.0
    selected = sum(1 for entry in entries if entry.is_selected)
    return selected / len(entries) * 100


def normalize_cgpa(cgpa: float) -> float:
    """
    Bring a CGPA onto the 0-100 scale.

    Values up to 10 are read as a 10-point CGPA, larger values as a
    percentage. Result is clamped to [0, 100].
    """
    value = cgpa * 10 if cgpa <= TEN_POINT_SCALE_MAX else cgpa
    return max(0.0, min(MAX_SCORE, value))


def calculate_campus_score(student: StudentRecord) -> float:
    """Composite placement-readiness score for one student (0-100)."""
    internship = selection_percentage(student.internships)
    interview = selection_percentage(student.applications)
    cgpa = normalize_cgpa(student.cgpa)

    return (
        INTERNSHIP_WEIGHT * internship
        + INTERVIEW_WEIGHT * interview
        + CGPA_WEIGHT * cgpa
    )
