"""Time Tracking Report feature module."""

from jira_rates.features.report.context import ReportContext, build_report_context

__all__ = ["ReportContext", "build_report_context"]
