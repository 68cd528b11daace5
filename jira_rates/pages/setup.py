"""Connection setup page: collect Jira credentials and initialize ReportService."""

from __future__ import annotations

import logging

import requests
import streamlit as st
from jira import JIRAError

from jira_rates.app import register_page
from jira_rates.core.config import JIRA_DEFAULT_SERVER, REQUEST_TIMEOUT_SECONDS
from jira_rates.core.jira_client import JiraAPI
from jira_rates.core.service import ReportService

logger = logging.getLogger(__name__)


def read_secret_credentials(secrets) -> tuple[str | None, str | None, str | None]:
    """(server, email, token) from a ``[jira]`` section, falling back to top-level keys."""
    jira_secrets = secrets.get("jira", {})
    server = jira_secrets.get("JIRA_SERVER") or secrets.get("JIRA_SERVER")
    email = jira_secrets.get("JIRA_EMAIL") or secrets.get("JIRA_EMAIL")
    token = (
        jira_secrets.get("JIRA_API_TOKEN")
        or secrets.get("JIRA_API_TOKEN")
        or jira_secrets.get("JIRA_TOKEN")
        or secrets.get("JIRA_TOKEN")
    )
    return server, email, token


def connect(server: str, email: str, token: str, timeout: float = REQUEST_TIMEOUT_SECONDS) -> ReportService:
    api = JiraAPI(server, email, token, timeout=timeout)
    st.session_state["jira_server"] = api.server
    st.session_state["jira_email"] = email
    st.session_state["report_service"] = ReportService(api)
    return st.session_state["report_service"]


@register_page("Setup / Connection")
def setup_page():
    st.title("Jira Connection Setup")
    st.caption("Enter credentials (use secrets manager in production).")

    secret_server, secret_email, secret_token = read_secret_credentials(st.secrets)

    server = st.text_input(
        "Jira Server URL",
        value=st.session_state.get("jira_server") or secret_server or JIRA_DEFAULT_SERVER,
    )
    email = st.text_input(
        "Email / Username",
        value=st.session_state.get("jira_email") or secret_email or "",
    )
    token = st.text_input(
        "API Token",
        type="password",
        value=secret_token or "",
    )
    timeout = st.number_input(
        "Request timeout (seconds)",
        min_value=1.0,
        max_value=300.0,
        value=float(REQUEST_TIMEOUT_SECONDS),
    )
    init_btn = st.button("Initialize Connection", type="primary")

    if init_btn:
        if not (server and email and token):
            st.error("All fields required.")
            return
        try:
            connect(server, email, token, timeout=float(timeout))
            st.success("Connection initialized.")
        except (JIRAError, requests.RequestException) as exc:
            logger.error("Jira connection failed: %s", exc)
            st.error(f"Failed to initialize Jira client: {exc}")

    if "report_service" in st.session_state:
        st.info("ReportService ready.")
