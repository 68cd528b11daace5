"""Application entry point: page registry and router."""

from __future__ import annotations

import streamlit as st

PAGES = {}

PREFERRED_ORDER = [
    "Time Tracking Report",  # aggregate costs across issues
    "Issue Rate",  # per-issue rate panel
    "Setup / Connection",  # configuration
]


def register_page(label):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


def ordered_pages(pages) -> list[str]:
    ordered = [name for name in PREFERRED_ORDER if name in pages]
    trailing = sorted(name for name in pages if name not in PREFERRED_ORDER)
    return ordered + trailing


def main():
    st.sidebar.title("Issue Rates")
    pages = ordered_pages(PAGES)
    if not pages:
        st.write("No pages registered yet.")
        return
    # If setup exists and no report_service yet, default to setup page
    if "Setup / Connection" in pages and "report_service" not in st.session_state:
        default = pages.index("Setup / Connection")
    else:
        default = 0
    page = st.sidebar.selectbox("Page", pages, index=default)
    PAGES[page]()


if __name__ == "__main__":
    main()
