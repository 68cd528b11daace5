"""Central configuration, constants, tuning knobs, and shared column definitions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Jira Connection Settings
# =============================================================================
JIRA_DEFAULT_SERVER = "https://your-domain.atlassian.net"
JIRA_REST_PREFIX = "/rest/api/3"
TIMEZONE = "UTC"

# Upper bound for every HTTP call issued by JiraAPI (seconds)
REQUEST_TIMEOUT_SECONDS: float = 30.0

# =============================================================================
# Rate Property
# =============================================================================
# Issue property key holding the {"currency", "amount"} payload
RATE_PROPERTY_KEY = "rate"
DEFAULT_CURRENCY = "USD"

# Status codes Jira returns for a successful property write
RATE_SAVE_SUCCESS_STATUSES: frozenset[int] = frozenset({200, 201, 204})

# =============================================================================
# Time Tracking Report
# =============================================================================
SECONDS_PER_HOUR: int = 3600

REPORT_JQL = "project IS NOT EMPTY ORDER BY updated DESC"
REPORT_PAGE_SIZE: int = 100

# Canonical field list for the report search (order matters for the query string)
REPORT_FIELDS: Sequence[str] = (
    "key",
    "summary",
    "timeoriginalestimate",
    "timetracking",
    "timespent",
    "timeestimate",
)

# Fields needed to price a single issue (no summary/key needed there)
ISSUE_TIME_FIELDS: Sequence[str] = (
    "timeoriginalestimate",
    "timetracking",
    "timespent",
    "timeestimate",
)

UNKNOWN_SUMMARY = "Unknown"

# Parallel rate lookups
# Use threads because jira client calls are I/O bound (HTTP) and the
# library is synchronous. Keep worker count moderate to avoid hitting
# Jira rate limits.
RATE_FETCH_MAX_WORKERS = 8
RATE_FETCH_MIN_PARALLEL = 4  # below this, stay sequential to reduce overhead

# =============================================================================
# Report Columns
# =============================================================================
# Numeric fields summed into the report totals
TOTAL_FIELDS: Sequence[str] = (
    "original_estimate_hours",
    "time_spent_hours",
    "remaining_hours",
    "original_estimate_cost",
    "time_spent_cost",
    "remaining_cost",
)

REPORT_COLUMNS: Sequence[str] = (
    "key",
    "summary",
    "rate",
    "original_estimate_hours",
    "original_estimate_cost",
    "time_spent_hours",
    "time_spent_cost",
    "remaining_hours",
    "remaining_cost",
)

EXPORT_COLUMNS: Sequence[str] = (*REPORT_COLUMNS, "failed")


@dataclass(slots=True)
class AppSettings:
    max_table_rows: int = 1000
    download_encoding: str = "utf-8"
    chart_top_n: int = 20


SETTINGS = AppSettings()
