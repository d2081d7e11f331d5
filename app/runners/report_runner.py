"""
Report Runner

Loads a roster snapshot from a roster client, builds the college dashboard
and renders it as a plain-text report.
Uses dependency injection for testability.
"""

import logging
from typing import List, Optional

from clients.roster_client import JsonRosterClient, MongoRosterClient, RosterClient
from core.config import Settings, get_settings, safe_print
from services.dashboard_service import CollegeDashboardService, DashboardView
from services.roster_filter_service import ALL


logger = logging.getLogger(__name__)


class ReportRunner:
    """
    Service for producing dashboard reports.

    Uses dependency injection for the roster client and dashboard service.
    """

    def __init__(
        self,
        roster_client: Optional[RosterClient] = None,
        dashboard_service: Optional[CollegeDashboardService] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize ReportRunner with dependencies.

        Args:
            roster_client: Roster source (JSON file from settings if configured,
                otherwise MongoDB)
            dashboard_service: Dashboard builder (created if not provided)
            settings: Settings instance (get_settings() if None)
        """
        self.settings = settings or get_settings()
        self._owns_client = False

        if roster_client:
            self.roster_client = roster_client
        elif self.settings.roster_file:
            self.roster_client = JsonRosterClient(self.settings.roster_file)
        else:
            self.roster_client = MongoRosterClient()
            self._owns_client = True

        self.dashboard = dashboard_service or CollegeDashboardService(
            settings=self.settings
        )

    def build(
        self,
        college_id: Optional[str] = None,
        department: str = ALL,
        year: str = ALL,
        name_query: str = "",
        page_number: int = 1,
    ) -> DashboardView:
        """Fetch the roster and build the dashboard view."""
        students = self.roster_client.get_students(college_id)
        college = self.roster_client.get_college(college_id)

        logger.info(f"Building report for college={college_id} ({len(students)} students)")
        return self.dashboard.build_dashboard(
            students,
            department=department,
            year=year,
            name_query=name_query,
            page_number=page_number,
            college=college,
        )

    def run(self, **kwargs) -> DashboardView:
        """Build the dashboard and print the text report."""
        view = self.build(**kwargs)
        safe_print(format_report(view))
        return view

    def close(self):
        """Close resources if we own them."""
        if self._owns_client:
            self.roster_client.db_client.close_connection()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - cleanup resources."""
        self.close()
        return False


def format_report(view: DashboardView) -> str:
    """Render a DashboardView as plain text."""
    metrics = view.metrics
    lines: List[str] = []

    title = view.sidebar.name if view.sidebar else "College"
    lines.append("=" * 60)
    lines.append(f"{title} DASHBOARD (as of {view.as_of.isoformat()})")
    lines.append("=" * 60)
    lines.append(
        f"Filters: department={view.selected_department}, year={view.selected_year}"
    )
    lines.append(f"Students: {metrics['total_students']}")
    lines.append(f"Average CGPA: {metrics['avg_cgpa']}")
    lines.append(f"Overall Campus Score: {metrics['avg_campus_score']}")

    comparison = metrics["campus_comparison"]
    on_campus = comparison["on_campus"]
    off_campus = comparison["off_campus"]
    lines.append(
        f"On-Campus: {on_campus['avg_score']} ({on_campus['count']} students) | "
        f"Off-Campus: {off_campus['avg_score']} ({off_campus['count']} students)"
    )
    lines.append(f"Companies Visited: {metrics['companies_visited']}")
    lines.append(
        f"Selection Rate - Jobs: {metrics['job_selection_rate']}% | "
        f"Interns: {metrics['intern_selection_rate']}%"
    )
    lines.append(
        f"Jobs applied/selected: {metrics['jobs_applied']}/{metrics['jobs_selected']} | "
        f"Internships applied/selected: "
        f"{metrics['interns_applied']}/{metrics['interns_selected']}"
    )

    lines.append("")
    lines.append("DEPARTMENTS")
    lines.append("-" * 60)
    for name, dept in metrics["department_stats"].items():
        lines.append(
            f"{name}: {dept['count']} students | CGPA {dept['avg_cgpa']} | "
            f"Score {dept['avg_campus_score']} | "
            f"Job sel. {dept['job_selection_rate']}% | "
            f"Intern sel. {dept['intern_selection_rate']}%"
        )

    lines.append("")
    lines.append("STUDENTS")
    lines.append("-" * 60)
    if not view.rows:
        lines.append("No students found.")
    for row in view.rows:
        status = "Verified" if row.is_verified else "Not Verified"
        passed = " [Passed Out]" if row.is_passed_out else ""
        lines.append(
            f"{row.name} | {row.department} | {row.year_of_study}{passed} | "
            f"{row.batch} | CGPA {row.cgpa} | Score {row.campus_score} | {status}"
        )

    page = view.page
    lines.append("")
    lines.append(f"Page {page.page_number} of {page.total_pages}")

    return "\n".join(lines)


def generate_report(
    roster_client: Optional[RosterClient] = None,
    dashboard_service: Optional[CollegeDashboardService] = None,
    **kwargs,
) -> DashboardView:
    """
    Convenience function to build and print a report.

    Args:
        roster_client: Optional roster source
        dashboard_service: Optional dashboard service
        **kwargs: Forwarded to ReportRunner.run (college_id, department, ...)

    Returns:
        The DashboardView that was printed
    """
    with ReportRunner(
        roster_client=roster_client, dashboard_service=dashboard_service
    ) as runner:
        return runner.run(**kwargs)
