"""Time Tracking Report page.

Prices the most recently updated issues with their stored rates and shows
per-issue hours and costs plus totals.
"""

from __future__ import annotations

import logging

import streamlit as st

from jira_rates.app import register_page
from jira_rates.core.column_config import get_columns
from jira_rates.core.config import REPORT_PAGE_SIZE, SETTINGS
from jira_rates.core.models import RateReport
from jira_rates.core.service import ReportService
from jira_rates.features.report import ReportContext, build_report_context
from jira_rates.visual.column_metadata import apply_column_metadata
from jira_rates.visual.progress import ProgressReporter
from jira_rates.visual.tables import prepare_report_table

logger = logging.getLogger(__name__)

PAGE_KEY = "time_report"


def render_report(ctx: ReportContext, server: str) -> None:
    if ctx.error:
        st.error(ctx.error)
        return
    if ctx.empty:
        st.info("No issues found.")
        return

    if ctx.failed_rows:
        st.caption(f"{ctx.failed_rows} issue(s) could not be priced and are shown as zero.")

    st.subheader("Issues")
    prepared, display_cols, cfg = prepare_report_table(ctx.table, server)
    column_config = apply_column_metadata(display_cols, cfg)
    st.dataframe(
        prepared[display_cols].head(SETTINGS.max_table_rows),
        hide_index=True,
        column_config=column_config,
    )

    st.subheader("Totals")
    for label, value in ctx.totals_lines:
        st.markdown(f"**{label}:** {value}")
    st.dataframe(
        ctx.totals,
        hide_index=True,
        column_config=apply_column_metadata(ctx.totals.columns),
    )

    if ctx.chart is not None:
        st.subheader("Spent vs Remaining Cost")
        st.altair_chart(ctx.chart, use_container_width=True)

    export_cols = [c for c in get_columns("export") if c in ctx.table.columns]
    csv = ctx.table[export_cols].to_csv(index=False).encode(SETTINGS.download_encoding)
    st.download_button(
        "Download Report CSV",
        data=csv,
        file_name="time_tracking_report.csv",
        mime="text/csv",
    )


@register_page("Time Tracking Report")
def report_page():
    st.title("Time Tracking Report")
    st.caption(f"Cost figures for the {REPORT_PAGE_SIZE} most recently updated issues.")
    service: ReportService | None = st.session_state.get("report_service")
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return

    data_key = f"{PAGE_KEY}_report"
    if st.button("Build Report", type="primary") or data_key not in st.session_state:
        reporter = ProgressReporter("Building time tracking report")
        report = service.build_report(progress=reporter.callback)
        if report.error:
            reporter.error("Report could not be built.")
        else:
            warning = None
            if report.failed_rows:
                warning = f"{report.failed_rows} issue(s) could not be priced."
            reporter.complete(f"Priced {len(report.issues)} issue(s).", warning=warning)
        st.session_state[data_key] = report

    report: RateReport = st.session_state[data_key]
    st.caption(f"Generated {report.generated_at:%Y-%m-%d %H:%M %Z}")
    render_report(build_report_context(report), st.session_state.get("jira_server", ""))
