"""
College Roster Analytics

Builds the college dashboard report from a roster snapshot.

Modules:
- services: academic year resolution, campus score, filtering, sorting,
  metrics aggregation and pagination
- clients: roster sources (JSON export, MongoDB)
- runners: report generation
"""

import argparse
import logging
import sys
from datetime import date
from typing import List, Optional

from pydantic import ValidationError

from clients.roster_client import JsonRosterClient
from core.clock import FixedClock
from core.config import get_settings, safe_print, set_daemon_mode, setup_logging
from core.models import RosterValidationError
from runners.report_runner import ReportRunner
from services.dashboard_service import CollegeDashboardService
from services.roster_filter_service import ALL, YEAR_OPTIONS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="College roster dashboard report")
    parser.add_argument("--file", help="JSON roster export (defaults to ROSTER_FILE or MongoDB)")
    parser.add_argument("--college", help="College id to report on")
    parser.add_argument("--department", default=ALL, help="Department filter")
    parser.add_argument("--year", default=ALL, choices=YEAR_OPTIONS, help="Year of study filter")
    parser.add_argument("--search", default="", help="Student name search")
    parser.add_argument("--page", type=int, default=1, help="Student table page")
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        help="Report date (YYYY-MM-DD); defaults to today",
    )
    parser.add_argument("--json", action="store_true", help="Print the dashboard as JSON")
    parser.add_argument("--daemon", action="store_true", help="Run in daemon mode")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns a process exit code."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    set_daemon_mode(args.daemon)
    setup_logging(settings)
    logger = logging.getLogger(__name__)

    clock = FixedClock(args.as_of) if args.as_of else None
    dashboard = CollegeDashboardService(clock=clock, settings=settings)
    roster_client = JsonRosterClient(args.file) if args.file else None

    try:
        with ReportRunner(
            roster_client=roster_client, dashboard_service=dashboard, settings=settings
        ) as runner:
            options = dict(
                college_id=args.college,
                department=args.department,
                year=args.year,
                name_query=args.search,
                page_number=args.page,
            )
            if args.json:
                view = runner.build(**options)
                safe_print(view.model_dump_json(indent=2))
            else:
                runner.run(**options)

    except (RosterValidationError, ValidationError) as e:
        error_msg = f"Roster rejected: {e}"
        logger.error(error_msg)
        safe_print(error_msg)
        return 2
    except Exception as e:
        error_msg = f"Report failed: {e}"
        logger.error(error_msg, exc_info=True)
        safe_print(error_msg)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
