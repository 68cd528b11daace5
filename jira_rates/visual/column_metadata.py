"""Central column metadata and helpers for report table rendering."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import streamlit as st

# Mapping of raw column keys to (label, help text, format key)
# format key: "money" -> $ with 2 decimals, "hours" -> 2 decimals, None -> default text column
COLUMN_METADATA: dict[str, tuple[str, str, str | None]] = {
    "key": ("Issue Key", "Jira issue key.", None),
    "summary": ("Summary", "Issue summary from Jira.", None),
    "rate": ("Rate ($/hr)", "Hourly rate stored on the issue.", "money"),
    "original_estimate_hours": ("Original Est. (h)", "Original estimate in hours.", "hours"),
    "original_estimate_cost": ("Original Cost ($)", "Rate times original estimate.", "money"),
    "time_spent_hours": ("Time Spent (h)", "Logged work in hours.", "hours"),
    "time_spent_cost": ("Spent Cost ($)", "Rate times time spent.", "money"),
    "remaining_hours": (
        "Remaining (h)",
        "Remaining estimate in hours, or original estimate minus time spent when Jira has none.",
        "hours",
    ),
    "remaining_cost": ("Remaining Cost ($)", "Rate times remaining hours.", "money"),
    "failed": ("Lookup Failed", "Rate lookup failed; the row is shown as zero.", "flag"),
    # Totals table
    "category": ("Category", "Original estimate, time spent, or remaining work.", None),
    "hours": ("Hours", "Hours summed across all issues in the report.", "hours"),
    "cost": ("Cost ($)", "Cost summed across all issues in the report.", "money"),
}


def column_label(col: str) -> str:
    meta = COLUMN_METADATA.get(col)
    return meta[0] if meta else col


def apply_column_metadata(
    columns: Iterable[str],
    existing: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Return a column_config dictionary with human labels and hover help."""

    config: dict[str, Any] = dict(existing or {})
    for col in columns:
        if col in config:
            continue
        meta = COLUMN_METADATA.get(col)
        if not meta:
            continue
        label, help_text, fmt = meta
        if fmt == "money":
            config[col] = st.column_config.NumberColumn(label, help=help_text, format="$%.2f")
        elif fmt == "hours":
            config[col] = st.column_config.NumberColumn(label, help=help_text, format="%.2f")
        elif fmt == "flag":
            config[col] = st.column_config.CheckboxColumn(label, help=help_text)
        else:
            config[col] = st.column_config.Column(label, help=help_text)
    return config
