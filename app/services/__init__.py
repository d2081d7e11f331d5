# Services Layer
# Roster classification, scoring, filtering, sorting and aggregation

from .academic_year_service import AcademicYear, YearOfStudy, resolve_academic_year
from .campus_score_service import calculate_campus_score
from .roster_filter_service import filter_roster
from .roster_sort_service import sort_roster
from .roster_metrics_service import RosterMetrics, RosterMetricsCalculatorService
from .pagination_service import Page, paginate
from .dashboard_service import CollegeDashboardService, DashboardView

__all__ = [
    "AcademicYear",
    "YearOfStudy",
    "resolve_academic_year",
    "calculate_campus_score",
    "filter_roster",
    "sort_roster",
    "RosterMetrics",
    "RosterMetricsCalculatorService",
    "Page",
    "paginate",
    "CollegeDashboardService",
    "DashboardView",
]
