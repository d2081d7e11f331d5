"""
College Dashboard Service

Runs the roster pipeline for one dashboard render:

    raw roster -> filter -> sort -> (metrics, name search + page)

Every call produces a fresh, immutable DashboardView. Nothing is cached or
mutated between calls; after an upstream change (e.g. a student being
verified) the caller passes the updated roster back in.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from core.clock import Clock, get_clock
from core.config import Settings, get_settings
from core.models import CollegeProfile, StudentRecord
from services.academic_year_service import batch_label, resolve_student_year
from services.campus_score_service import calculate_campus_score
from services.pagination_service import paginate
from services.roster_filter_service import (
    ALL,
    YEAR_OPTIONS,
    department_options,
    filter_roster,
)
from services.roster_metrics_service import RosterMetricsCalculatorService, format_score
from services.roster_sort_service import sort_roster


COLLEGE_ADMIN_ROLE = "College Admin"


class SidebarProfile(BaseModel):
    """Who the sidebar says is signed in."""

    model_config = ConfigDict(frozen=True)

    initials: str
    name: str
    role: str = COLLEGE_ADMIN_ROLE

    @classmethod
    def from_college(cls, college: CollegeProfile) -> "SidebarProfile":
        return cls(initials=college.name[:2].upper(), name=college.name)


class StudentRow(BaseModel):
    """One line of the student table."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    department: str
    year_of_study: str
    is_passed_out: bool
    batch: str
    cgpa: float
    campus_score: str
    is_verified: bool


class PageInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    page_number: int
    total_pages: int
    total_items: int
    has_previous: bool
    has_next: bool
    previous_page: int
    next_page: int


class DashboardView(BaseModel):
    """Everything the rendering layer needs, computed for one snapshot."""

    model_config = ConfigDict(frozen=True)

    as_of: date
    sidebar: Optional[SidebarProfile] = None
    department_options: List[str]
    year_options: List[str]
    selected_department: str
    selected_year: str
    filtered_count: int
    metrics: Dict[str, Any]
    rows: List[StudentRow]
    page: PageInfo


class CollegeDashboardService:
    """
    Builds dashboard view-models from a roster snapshot.

    Uses dependency injection for the clock and the metrics calculator so
    tests can pin the date.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        metrics_service: Optional[RosterMetricsCalculatorService] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the dashboard service.

        Args:
            clock: Source of the current date (system clock if None)
            metrics_service: Metrics calculator (built from settings if None)
            settings: Settings instance (get_settings() if None)
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self.settings = settings or get_settings()
        self.clock = clock or get_clock(self.settings.timezone)
        self.cutover_month = self.settings.academic_year_cutover_month
        self.page_size = self.settings.students_per_page
        self.metrics_service = metrics_service or RosterMetricsCalculatorService(
            job_cgpa_threshold=self.settings.job_cgpa_threshold,
            intern_cgpa_threshold=self.settings.intern_cgpa_threshold,
            cutover_month=self.cutover_month,
        )

    def sorted_roster(
        self,
        roster: Sequence[StudentRecord],
        current_date: date,
        department: str = ALL,
        year: str = ALL,
    ) -> List[StudentRecord]:
        """Filter then sort, the order the student table shows."""
        filtered = filter_roster(
            roster,
            current_date,
            department=department,
            year=year,
            cutover_month=self.cutover_month,
        )
        return sort_roster(filtered, current_date, self.cutover_month)

    def student_row(self, student: StudentRecord, current_date: date) -> StudentRow:
        """
        Table row for a student.

        Passed-out students show their batch label in the year column.
        """
        year = resolve_student_year(student, current_date, self.cutover_month)
        batch = batch_label(student)

        return StudentRow(
            id=student.id,
            name=student.name,
            department=student.department,
            year_of_study=(student.batch or batch) if year.is_passed_out else year.label,
            is_passed_out=year.is_passed_out,
            batch=batch,
            cgpa=student.cgpa,
            campus_score=format_score(calculate_campus_score(student)),
            is_verified=student.is_verified,
        )

    def build_dashboard(
        self,
        roster: Sequence[StudentRecord],
        department: str = ALL,
        year: str = ALL,
        name_query: str = "",
        page_number: int = 1,
        college: Optional[CollegeProfile] = None,
    ) -> DashboardView:
        """
        Build the complete dashboard for one roster snapshot.

        Args:
            roster: All students of the college
            department: Department filter ("All" for every department)
            year: Year filter ("All", "1st" .. "4th")
            name_query: Student table search box
            page_number: Requested table page (clamped)
            college: College profile for the sidebar and department list

        Returns:
            DashboardView
        """
        current_date = self.clock.today()

        ordered = self.sorted_roster(roster, current_date, department, year)
        metrics = self.metrics_service.calculate_metrics(ordered)
        page = paginate(ordered, name_query, self.page_size, page_number)

        college_departments = college.department_names if college else []

        self.logger.info(
            f"Dashboard built for {current_date}: {len(ordered)}/{len(roster)} students "
            f"(department={department}, year={year}), page {page.page_number}/{page.total_pages}"
        )

        return DashboardView(
            as_of=current_date,
            sidebar=SidebarProfile.from_college(college) if college else None,
            department_options=department_options(roster, college_departments),
            year_options=list(YEAR_OPTIONS),
            selected_department=department,
            selected_year=year,
            filtered_count=len(ordered),
            metrics=dict(metrics.to_dict()),
            rows=[self.student_row(s, current_date) for s in page.items],
            page=PageInfo(
                page_number=page.page_number,
                total_pages=page.total_pages,
                total_items=page.total_items,
                has_previous=page.has_previous,
                has_next=page.has_next,
                previous_page=page.previous_page(),
                next_page=page.next_page(),
            ),
        )

    @staticmethod
    def replace_student(
        roster: Sequence[StudentRecord], updated: StudentRecord
    ) -> Tuple[StudentRecord, ...]:
        """
        New roster with the record sharing updated.id swapped in.

        Used after an external update (such as college verification); the
        given roster is left untouched.
        """
        return tuple(updated if s.id == updated.id else s for s in roster)
