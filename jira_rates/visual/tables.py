"""Reusable table and text helpers for rendering the cost report."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from jira_rates.core.column_config import get_columns
from jira_rates.core.models import EnrichedIssue, ReportTotals


def format_money(value: float | None) -> str:
    return f"${float(value or 0):.2f}"


def format_hours(value: float | None) -> str:
    return f"{float(value or 0):.2f}"


def add_ticket_link(df: pd.DataFrame, server: str, key_col: str = "key", label: str = "Ticket"):
    if df.empty or key_col not in df.columns or not server:
        return df, {}
    out = df.copy()
    base = server.rstrip("/")
    out[label] = out[key_col].astype(str).apply(lambda k: f"{base}/browse/{k}" if k and k != "nan" else "")
    cfg = {
        label: st.column_config.LinkColumn(
            "Issue Key",
            display_text=r"browse/(.*)$",
            help="Open in Jira",
            width="small",
        )
    }
    return out, cfg


def prepare_report_table(
    df: pd.DataFrame,
    server: str,
    *,
    set_name: str = "report",
) -> tuple[pd.DataFrame, list[str], dict[str, object]]:
    """Report rows plus the columns to show, with the key rendered as a Jira link."""
    if df.empty:
        return df, [], {}

    table, cfg = add_ticket_link(df, server)
    display_cols = [col for col in get_columns(set_name) if col in table.columns]
    if "Ticket" in table.columns:
        display_cols = ["Ticket" if col == "key" else col for col in display_cols]
        if "Ticket" not in display_cols:
            display_cols.insert(0, "Ticket")
    if not display_cols:
        display_cols = list(table.columns)
    return table, display_cols, cfg


def issue_cost_lines(issue: EnrichedIssue) -> list[str]:
    return [
        f"Original estimate: {format_hours(issue.original_estimate_hours)}h "
        f"· Cost: {format_money(issue.original_estimate_cost)}",
        f"Time spent: {format_hours(issue.time_spent_hours)}h · Cost spent: {format_money(issue.time_spent_cost)}",
        f"Remaining: {format_hours(issue.remaining_hours)}h · Remaining cost: {format_money(issue.remaining_cost)}",
    ]


def totals_lines(totals: ReportTotals) -> list[tuple[str, str]]:
    """(label, value) pairs for the totals summary."""
    return [
        (
            "Total Original Estimate",
            f"{format_hours(totals.original_estimate_hours)}h ({format_money(totals.original_estimate_cost)})",
        ),
        (
            "Total Time Spent",
            f"{format_hours(totals.time_spent_hours)}h ({format_money(totals.time_spent_cost)})",
        ),
        (
            "Total Remaining",
            f"{format_hours(totals.remaining_hours)}h ({format_money(totals.remaining_cost)})",
        ),
    ]
