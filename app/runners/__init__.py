from .report_runner import ReportRunner, format_report, generate_report

__all__ = [
    "ReportRunner",
    "format_report",
    "generate_report",
]
