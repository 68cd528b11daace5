"""Pure helpers to build the report page context for testing (no Streamlit calls)."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from jira_rates.analytics.totals import issues_to_dataframe, totals_to_dataframe
from jira_rates.core.config import EXPORT_COLUMNS, SETTINGS
from jira_rates.core.models import RateReport
from jira_rates.visual.charts import cost_breakdown_chart
from jira_rates.visual.tables import totals_lines


@dataclass(slots=True)
class ReportContext:
    table: pd.DataFrame
    totals: pd.DataFrame
    totals_lines: list[tuple[str, str]]
    error: str | None = None
    failed_rows: int = 0
    chart: object | None = None

    @property
    def empty(self) -> bool:
        return self.table.empty


def build_report_context(report: RateReport, top_n: int | None = None) -> ReportContext:
    if report.error:
        return ReportContext(
            table=pd.DataFrame(),
            totals=pd.DataFrame(),
            totals_lines=[],
            error=report.error,
        )
    table = issues_to_dataframe(report.issues, columns=EXPORT_COLUMNS)
    chart, _ = cost_breakdown_chart(table, top_n=top_n or SETTINGS.chart_top_n)
    return ReportContext(
        table=table,
        totals=totals_to_dataframe(report.totals),
        totals_lines=totals_lines(report.totals),
        failed_rows=report.failed_rows,
        chart=chart,
    )
