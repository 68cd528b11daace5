"""Issue Rate page.

Shows the hourly rate stored on one issue together with the original
estimate, spent, and remaining costs it implies, and lets the user replace the
rate. The issue key comes from the text box, the embedding host context, or
the page URL (``?issueKey=ABC-1``), in that order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import streamlit as st

from jira_rates.analytics.time_tracking import reprice_issue
from jira_rates.app import register_page
from jira_rates.core.context import from_host_context, from_query_params, from_value, resolve_issue_key
from jira_rates.core.models import IssueCostSnapshot
from jira_rates.core.rates import format_rate_input
from jira_rates.core.service import ReportService
from jira_rates.visual.tables import format_money, issue_cost_lines

logger = logging.getLogger(__name__)

PAGE_KEY = "issue_rate"  # namespace for session keys to avoid collisions


@dataclass(slots=True)
class IssuePanelState:
    issue_key: str
    snapshot: IssueCostSnapshot
    editing: bool = False
    status: str = ""
    status_ok: bool = True


def _panel_state(service: ReportService, issue_key: str, refresh: bool) -> IssuePanelState:
    state: IssuePanelState | None = st.session_state.get(f"{PAGE_KEY}_state")
    if refresh or state is None or state.issue_key != issue_key:
        with st.spinner(f"Loading {issue_key}..."):
            snapshot = service.fetch_issue_costs(issue_key)
        state = IssuePanelState(issue_key=issue_key, snapshot=snapshot)
        st.session_state[f"{PAGE_KEY}_state"] = state
    return state


def apply_save(state: IssuePanelState, service: ReportService, text: str) -> IssuePanelState:
    """Persist ``text`` as the issue's rate; the held rate only changes on success."""
    result = service.save_rate(state.issue_key, text)
    if result.ok and result.rate is not None:
        state.snapshot = IssueCostSnapshot(
            rate=result.rate,
            costs=reprice_issue(state.snapshot.costs, result.rate.amount),
        )
        state.editing = False
    else:
        logger.warning("Rate save for %s did not succeed: %s", state.issue_key, result.message)
    state.status = result.message
    state.status_ok = result.ok
    return state


@register_page("Issue Rate")
def issue_rate_page():
    st.title("Issue Rate")
    st.caption("Hourly rate and cost figures for a single issue.")
    service: ReportService | None = st.session_state.get("report_service")
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return

    typed = st.text_input("Issue key", key=f"{PAGE_KEY}_typed", placeholder="ABC-123")
    issue_key = resolve_issue_key(
        [
            from_value(typed),
            from_host_context(st.session_state.get("host_context")),
            from_query_params(st.query_params),
        ]
    )
    if not issue_key:
        st.info("No issue key found. Enter one above or open this page with ?issueKey=ABC-123.")
        return

    refresh = st.button("Reload", key=f"{PAGE_KEY}_reload")
    state = _panel_state(service, issue_key, refresh)
    snapshot = state.snapshot

    if not state.editing:
        cols = st.columns([3, 1])
        amount = snapshot.rate.amount if snapshot.rate else 0.0
        cols[0].markdown(f"**{issue_key}** · Rate: {format_money(amount)}")
        if cols[1].button("Set rate", key=f"{PAGE_KEY}_open"):
            state.editing = True
            st.session_state[f"{PAGE_KEY}_input"] = format_rate_input(snapshot.rate)
            st.rerun()
        for line in issue_cost_lines(snapshot.costs):
            st.write(line)
    else:
        text = st.text_input("Rate ($/hr)", key=f"{PAGE_KEY}_input")
        save_col, cancel_col = st.columns(2)
        if save_col.button("Save", type="primary", key=f"{PAGE_KEY}_save"):
            with st.spinner("Saving..."):
                apply_save(state, service, text)
            st.rerun()
        if cancel_col.button("Cancel", key=f"{PAGE_KEY}_cancel"):
            state.editing = False
            state.status = ""
            st.rerun()

    if state.status:
        if state.status_ok:
            st.success(state.status)
        else:
            st.error(state.status)
