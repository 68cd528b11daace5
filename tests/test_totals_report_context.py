import pytest

from jira_rates.analytics.time_tracking import enrich_issue, zeroed_issue
from jira_rates.analytics.totals import compute_totals, issues_to_dataframe, totals_to_dataframe
from jira_rates.core.models import IssueTimeFacts, RateReport, ReportTotals
from jira_rates.features.report import build_report_context
from jira_rates.visual.charts import cost_breakdown_chart
from jira_rates.visual.tables import totals_lines


def _issues():
    return [
        enrich_issue("ABC-1", "One", 50.0, IssueTimeFacts(36000, 18000, None)),
        enrich_issue("ABC-2", "Two", 10.0, IssueTimeFacts(7200, 0, 3600)),
        zeroed_issue("ABC-3", "Three"),
    ]


def test_totals_are_field_sums():
    issues = _issues()
    totals = compute_totals(issues)
    assert totals.original_estimate_hours == pytest.approx(12)
    assert totals.time_spent_hours == pytest.approx(5)
    assert totals.remaining_hours == pytest.approx(6)
    assert totals.original_estimate_cost == pytest.approx(520)
    assert totals.time_spent_cost == pytest.approx(250)
    assert totals.remaining_cost == pytest.approx(260)


def test_totals_of_nothing_are_zero():
    assert compute_totals([]) == ReportTotals()


def test_dataframe_keeps_report_order_and_columns():
    df = issues_to_dataframe(_issues())
    assert df["key"].tolist() == ["ABC-1", "ABC-2", "ABC-3"]
    assert list(df.columns)[:3] == ["key", "summary", "rate"]
    assert "failed" not in df.columns


def test_empty_dataframe_has_columns():
    df = issues_to_dataframe([])
    assert df.empty
    assert "remaining_cost" in df.columns


def test_totals_dataframe_shape():
    df = totals_to_dataframe(compute_totals(_issues()))
    assert df["category"].tolist() == ["Original Estimate", "Time Spent", "Remaining"]
    assert df.loc[0, "cost"] == pytest.approx(520)


def test_totals_lines_format():
    lines = dict(totals_lines(compute_totals(_issues()[:1])))
    assert lines["Total Original Estimate"] == "10.00h ($500.00)"
    assert lines["Total Time Spent"] == "5.00h ($250.00)"
    assert lines["Total Remaining"] == "5.00h ($250.00)"


def test_cost_chart_skips_zero_cost_rows():
    df = issues_to_dataframe(_issues())
    chart, chart_df = cost_breakdown_chart(df, top_n=5)
    assert chart is not None
    assert set(chart_df["key"]) == {"ABC-1", "ABC-2"}
    assert set(chart_df["series"]) == {"Spent", "Remaining"}


def test_cost_chart_none_when_nothing_priced():
    chart, _ = cost_breakdown_chart(issues_to_dataframe([zeroed_issue("ABC-9", None)]))
    assert chart is None


def test_report_context_with_rows():
    issues = _issues()
    ctx = build_report_context(RateReport(issues=issues, totals=compute_totals(issues)))
    assert not ctx.empty
    assert ctx.error is None
    assert ctx.failed_rows == 1
    assert "failed" in ctx.table.columns
    assert ctx.chart is not None


def test_report_context_error():
    ctx = build_report_context(RateReport(error="Search failed (500): boom"))
    assert ctx.error == "Search failed (500): boom"
    assert ctx.empty
    assert ctx.totals_lines == []


def test_report_context_empty():
    ctx = build_report_context(RateReport())
    assert ctx.empty
    assert ctx.error is None
    assert ctx.chart is None
