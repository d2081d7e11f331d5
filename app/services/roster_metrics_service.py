"""
Roster Metrics Calculator Service

Reduces a (filtered) roster into the numbers behind the college dashboard
summary cards and charts.

Features:
- Overall stats (student count, average CGPA, average campus score)
- Department-wise statistics with job/internship selection rates
- On-campus vs off-campus campus score comparison
- CGPA-threshold selection rate cards
- Raw floats on the dataclasses, rounded strings from to_dict()
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence, TypedDict

from core.models import StudentRecord
from services.academic_year_service import DEFAULT_CUTOVER_MONTH
from services.campus_score_service import calculate_campus_score
from services.roster_filter_service import ALL, filter_roster


DEFAULT_JOB_CGPA_THRESHOLD = 85.0
DEFAULT_INTERN_CGPA_THRESHOLD = 80.0


# =============================================================================
# Rounding / Degenerate Value Helpers
# =============================================================================


def safe_average(total: float, count: int) -> float:
    """Average that is 0 for an empty group."""
    return total / count if count else 0.0


def selection_rate(selected: int, applied: int) -> float:
    """selected / applied as a percentage; 0 when nothing was applied for."""
    return (selected / applied) * 100 if applied else 0.0


def format_cgpa(value: float) -> str:
    return f"{value:.2f}"


def format_score(value: float) -> str:
    return f"{value:.1f}"


# =============================================================================
# Data Models
# =============================================================================


@dataclass
class DepartmentStats:
    """Statistics for a single department."""

    department: str
    count: int = 0
    total_cgpa: float = 0.0
    total_campus_score: float = 0.0
    jobs_applied: int = 0
    jobs_selected: int = 0
    interns_applied: int = 0
    interns_selected: int = 0
    avg_cgpa: float = 0.0
    avg_campus_score: float = 0.0
    job_selection_rate: float = 0.0
    intern_selection_rate: float = 0.0

    def to_dict(self) -> Dict[str, object]:
        return {
            "department": self.department,
            "count": self.count,
            "avg_cgpa": format_cgpa(self.avg_cgpa),
            "avg_campus_score": format_score(self.avg_campus_score),
            "jobs_applied": self.jobs_applied,
            "jobs_selected": self.jobs_selected,
            "interns_applied": self.interns_applied,
            "interns_selected": self.interns_selected,
            "job_selection_rate": format_score(self.job_selection_rate),
            "intern_selection_rate": format_score(self.intern_selection_rate),
        }


@dataclass
class CampusChannelStats:
    """Campus score totals for one placement channel."""

    count: int = 0
    total_score: float = 0.0
    avg_score: float = 0.0

    def to_dict(self) -> Dict[str, object]:
        return {"count": self.count, "avg_score": format_score(self.avg_score)}


@dataclass
class RosterMetrics:
    """Everything the dashboard summary needs for one roster snapshot."""

    total_students: int = 0
    jobs_applied: int = 0
    jobs_selected: int = 0
    interns_applied: int = 0
    interns_selected: int = 0
    avg_cgpa: float = 0.0
    avg_campus_score: float = 0.0
    on_campus: CampusChannelStats = field(default_factory=CampusChannelStats)
    off_campus: CampusChannelStats = field(default_factory=CampusChannelStats)
    companies_visited: int = 0
    job_selection_rate: float = 0.0
    intern_selection_rate: float = 0.0
    department_stats: Dict[str, DepartmentStats] = field(default_factory=dict)

    def to_dict(self) -> "RosterMetricsDisplay":
        return RosterMetricsDisplay(
            total_students=self.total_students,
            jobs_applied=self.jobs_applied,
            jobs_selected=self.jobs_selected,
            interns_applied=self.interns_applied,
            interns_selected=self.interns_selected,
            avg_cgpa=format_cgpa(self.avg_cgpa),
            avg_campus_score=format_score(self.avg_campus_score),
            campus_comparison={
                "on_campus": self.on_campus.to_dict(),
                "off_campus": self.off_campus.to_dict(),
            },
            companies_visited=self.companies_visited,
            job_selection_rate=format_score(self.job_selection_rate),
            intern_selection_rate=format_score(self.intern_selection_rate),
            department_stats={
                name: stats.to_dict() for name, stats in self.department_stats.items()
            },
        )


class RosterMetricsDisplay(TypedDict, total=False):
    """Rounded, display-ready metrics."""

    total_students: int
    jobs_applied: int
    jobs_selected: int
    interns_applied: int
    interns_selected: int
    avg_cgpa: str
    avg_campus_score: str
    campus_comparison: Dict[str, Dict[str, object]]
    companies_visited: int
    job_selection_rate: str
    intern_selection_rate: str
    department_stats: Dict[str, Dict[str, object]]


# =============================================================================
# Roster Metrics Calculator Service
# =============================================================================


class RosterMetricsCalculatorService:
    """
    Service for calculating dashboard metrics over a roster.

    Supports:
    - Overall statistics (counts, CGPA and campus score averages)
    - Department-wise breakdowns with selection rates
    - On/off-campus comparison
    - Filtering by department and year of study before aggregation
    """

    def __init__(
        self,
        job_cgpa_threshold: Optional[float] = None,
        intern_cgpa_threshold: Optional[float] = None,
        cutover_month: int = DEFAULT_CUTOVER_MONTH,
    ):
        """
        Initialize the metrics calculator.

        Args:
            job_cgpa_threshold: CGPA above which a student counts toward the
                job selection card (85 if None)
            intern_cgpa_threshold: Same for the internship card (80 if None)
            cutover_month: First month of the academic year, for filtering
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self.job_cgpa_threshold = (
            DEFAULT_JOB_CGPA_THRESHOLD if job_cgpa_threshold is None else job_cgpa_threshold
        )
        self.intern_cgpa_threshold = (
            DEFAULT_INTERN_CGPA_THRESHOLD
            if intern_cgpa_threshold is None
            else intern_cgpa_threshold
        )
        self.cutover_month = cutover_month

        self.logger.info("RosterMetricsCalculatorService initialized")

    def _calculate_department_stats(
        self, students: Sequence[StudentRecord], scores: List[float]
    ) -> Dict[str, DepartmentStats]:
        """
        Calculate statistics per department.

        Args:
            students: Filtered students
            scores: Campus score for each student, index-aligned

        Returns:
            Dict mapping department name to DepartmentStats
        """
        stats: Dict[str, DepartmentStats] = {}

        for student, score in zip(students, scores):
            dept = stats.get(student.department)
            if dept is None:
                dept = stats[student.department] = DepartmentStats(
                    department=student.department
                )

            dept.count += 1
            dept.total_cgpa += student.cgpa
            dept.total_campus_score += score
            dept.jobs_applied += len(student.applications)
            dept.jobs_selected += student.selected_applications
            dept.interns_applied += len(student.internships)
            dept.interns_selected += student.selected_internships

        for dept in stats.values():
            dept.avg_cgpa = safe_average(dept.total_cgpa, dept.count)
            dept.avg_campus_score = safe_average(dept.total_campus_score, dept.count)
            dept.job_selection_rate = selection_rate(dept.jobs_selected, dept.jobs_applied)
            dept.intern_selection_rate = selection_rate(
                dept.interns_selected, dept.interns_applied
            )

        return stats

    def _calculate_campus_comparison(
        self, students: Sequence[StudentRecord], scores: List[float]
    ) -> Dict[str, CampusChannelStats]:
        on_campus = CampusChannelStats()
        off_campus = CampusChannelStats()

        for student, score in zip(students, scores):
            channel = on_campus if student.is_on_campus else off_campus
            channel.count += 1
            channel.total_score += score

        for channel in (on_campus, off_campus):
            channel.avg_score = safe_average(channel.total_score, channel.count)

        return {"on_campus": on_campus, "off_campus": off_campus}

    def _calculate_threshold_rates(self, students: Sequence[StudentRecord]) -> Dict[str, float]:
        """Share of students above the job / internship CGPA thresholds."""
        total = len(students)
        above_job = sum(1 for s in students if s.cgpa > self.job_cgpa_threshold)
        above_intern = sum(1 for s in students if s.cgpa > self.intern_cgpa_threshold)
        return {
            "job": selection_rate(above_job, total),
            "intern": selection_rate(above_intern, total),
        }

    def calculate_metrics(self, students: Sequence[StudentRecord]) -> RosterMetrics:
        """
        Calculate dashboard metrics for an already filtered roster.

        Args:
            students: Filtered students

        Returns:
            RosterMetrics with raw values; call to_dict() for display strings
        """
        if not students:
            return RosterMetrics()

        # One score per student, shared by every aggregate below
        scores = [calculate_campus_score(s) for s in students]
        total = len(students)

        department_stats = self._calculate_department_stats(students, scores)
        comparison = self._calculate_campus_comparison(students, scores)
        threshold_rates = self._calculate_threshold_rates(students)

        metrics = RosterMetrics(
            total_students=total,
            jobs_applied=sum(1 for s in students if s.applications),
            jobs_selected=sum(1 for s in students if s.selected_applications),
            interns_applied=sum(1 for s in students if s.internships),
            interns_selected=sum(1 for s in students if s.selected_internships),
            avg_cgpa=safe_average(sum(s.cgpa for s in students), total),
            avg_campus_score=safe_average(sum(scores), total),
            on_campus=comparison["on_campus"],
            off_campus=comparison["off_campus"],
            # Students with any company engagement, not distinct companies
            companies_visited=sum(1 for s in students if s.companies),
            job_selection_rate=threshold_rates["job"],
            intern_selection_rate=threshold_rates["intern"],
            department_stats=department_stats,
        )

        self.logger.debug(
            f"Aggregated {total} students across {len(department_stats)} departments"
        )
        return metrics

    def calculate_filtered_metrics(
        self,
        roster: Sequence[StudentRecord],
        current_date: date,
        department: str = ALL,
        year: str = ALL,
    ) -> RosterMetrics:
        """
        Calculate metrics with the department / year filters applied.

        Args:
            roster: Full roster
            current_date: Date used to classify years of study
            department: "All" or an exact department name
            year: "All", "1st", "2nd", "3rd" or "4th"

        Returns:
            RosterMetrics for the filtered students
        """
        filtered = filter_roster(
            roster,
            current_date,
            department=department,
            year=year,
            cutover_month=self.cutover_month,
        )
        return self.calculate_metrics(filtered)
