"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``jira_rates/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from jira_rates.app import main

logger = logging.getLogger(__name__)

st.set_page_config(page_title="Issue Rates", layout="wide")


def _auto_init_report_service():
    """Initialize the Jira-backed report service from Streamlit secrets if available."""
    if "report_service" in st.session_state:
        return

    from jira_rates.pages.setup import connect, read_secret_credentials

    server, email, token = read_secret_credentials(st.secrets)
    if server and email and token:
        st.sidebar.info("Secrets found, attempting to connect to Jira...")
        try:
            connect(server, email, token)
            st.sidebar.success("Jira connection successful!")
        except Exception as e:
            logger.error("Jira connection from secrets failed: %s", e)
            st.sidebar.error(f"Jira connection failed: {e}")
            # Clear any partial state to ensure user is directed to setup
            if "report_service" in st.session_state:
                del st.session_state["report_service"]
    else:
        st.sidebar.warning("Jira secrets not found. Please use the Setup page.")


PAGES_DIR = Path(__file__).parent / "jira_rates" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"jira_rates.pages.{py.stem}"
    try:
        import_module(mod_name)
    except Exception as e:  # pragma: no cover
        logger.error("Failed importing page %s: %s", mod_name, e)

_auto_init_report_service()

if __name__ == "__main__":
    main()
