"""Report totals and DataFrame conversions for enriched issues."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import asdict

import pandas as pd

from jira_rates.core.config import REPORT_COLUMNS, TOTAL_FIELDS
from jira_rates.core.models import EnrichedIssue, ReportTotals


def compute_totals(issues: Iterable[EnrichedIssue]) -> ReportTotals:
    """Sum every hour/cost field across the batch, degraded rows included."""
    sums = dict.fromkeys(TOTAL_FIELDS, 0.0)
    for issue in issues:
        for name in TOTAL_FIELDS:
            sums[name] += getattr(issue, name)
    return ReportTotals(**sums)


def issues_to_dataframe(
    issues: Iterable[EnrichedIssue],
    columns: Sequence[str] | None = None,
) -> pd.DataFrame:
    """One row per issue, in report order, restricted to ``columns`` when given."""
    cols = list(columns or REPORT_COLUMNS)
    rows = [asdict(i) for i in issues]
    if not rows:
        return pd.DataFrame(columns=cols)
    df = pd.DataFrame(rows)
    return df[[c for c in cols if c in df.columns]]


def totals_to_dataframe(totals: ReportTotals) -> pd.DataFrame:
    """Reshape totals into an Original / Spent / Remaining x hours / cost table."""
    return pd.DataFrame(
        [
            {
                "category": "Original Estimate",
                "hours": totals.original_estimate_hours,
                "cost": totals.original_estimate_cost,
            },
            {"category": "Time Spent", "hours": totals.time_spent_hours, "cost": totals.time_spent_cost},
            {"category": "Remaining", "hours": totals.remaining_hours, "cost": totals.remaining_cost},
        ]
    )
