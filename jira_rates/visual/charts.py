"""Chart builders (Altair) for report costs."""

from __future__ import annotations

import altair as alt
import pandas as pd

COST_SERIES = {
    "time_spent_cost": "Spent",
    "remaining_cost": "Remaining",
}


def cost_breakdown_chart(df: pd.DataFrame, top_n: int = 20):
    """Stacked spent/remaining cost per issue for the ``top_n`` costliest issues.

    Returns ``(chart, chart_df)``; the chart is None when nothing has a cost.
    """
    needed = {"key", "summary", *COST_SERIES}
    if df.empty or not needed.issubset(df.columns):
        return None, pd.DataFrame()
    tmp = df.copy()
    tmp["total_cost"] = tmp["time_spent_cost"] + tmp["remaining_cost"]
    tmp = tmp[tmp["total_cost"] > 0]
    if tmp.empty:
        return None, tmp
    top = tmp.nlargest(top_n, "total_cost")
    order = top["key"].tolist()
    chart_df = top.melt(
        id_vars=["key", "summary"],
        value_vars=list(COST_SERIES),
        var_name="series",
        value_name="cost",
    )
    chart_df["series"] = chart_df["series"].map(COST_SERIES)

    chart = (
        alt.Chart(chart_df)
        .mark_bar()
        .encode(
            x=alt.X("cost:Q", title="Cost ($)", stack="zero"),
            y=alt.Y("key:N", title="Issue", sort=order),
            color=alt.Color(
                "series:N",
                title="Cost",
                scale=alt.Scale(domain=["Spent", "Remaining"], range=["#d62728", "#1f77b4"]),
            ),
            tooltip=[
                alt.Tooltip("key:N", title="Issue"),
                alt.Tooltip("summary:N", title="Summary"),
                alt.Tooltip("series:N", title="Cost"),
                alt.Tooltip("cost:Q", title="Amount ($)", format=",.2f"),
            ],
        )
        .properties(height=max(120, 24 * len(order)))
    )
    return chart, chart_df
