"""ReportService: orchestrates issue search, rate lookups, and cost aggregation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any

import pytz

from jira_rates.analytics.time_tracking import enrich_issue, extract_time_facts, zeroed_issue
from jira_rates.analytics.totals import compute_totals

from .config import (
    ISSUE_TIME_FIELDS,
    RATE_FETCH_MAX_WORKERS,
    RATE_FETCH_MIN_PARALLEL,
    REPORT_FIELDS,
    REPORT_JQL,
    REPORT_PAGE_SIZE,
    TIMEZONE,
)
from .exceptions import RowFailure, SearchFailure
from .jira_client import JiraAPI
from .models import EnrichedIssue, IssueCostSnapshot, RateReport, ReportTotals, SaveResult
from .rates import RateStore

logger = logging.getLogger(__name__)

DEFAULT_FIELDS: Sequence[str] = tuple(REPORT_FIELDS)
ProgressCallback = Callable[[str, int | None, int | None], None]


class ReportService:
    def __init__(self, api: JiraAPI, rates: RateStore | None = None):
        self.api = api
        self.rates = rates or RateStore(api)
        self._tz = pytz.timezone(TIMEZONE)

    # ------------------ Report ------------------
    def build_report(
        self,
        *,
        jql: str = REPORT_JQL,
        progress: ProgressCallback | None = None,
    ) -> RateReport:
        """Price the most recently updated issues and total their costs.

        A failed search is the only fatal path: the report then has no rows,
        zero totals, and ``error`` set. Any single issue that cannot be priced
        shows up as a zeroed row instead.
        """
        now = datetime.now(self._tz)
        if progress:
            progress("Searching issues", None, None)
        try:
            raw = self.api.search_jql(jql, fields=list(DEFAULT_FIELDS), max_results=REPORT_PAGE_SIZE)
        except SearchFailure as exc:
            logger.error("Time tracking report search failed: %s", exc)
            return RateReport(issues=[], totals=ReportTotals(), error=str(exc), generated_at=now)

        issues = self._enrich_all(raw, progress=progress)
        return RateReport(issues=issues, totals=compute_totals(issues), generated_at=now)

    def _enrich_all(
        self,
        raw_issues: list[dict[str, Any]],
        *,
        progress: ProgressCallback | None = None,
    ) -> list[EnrichedIssue]:
        total = len(raw_issues)
        if not total:
            return []
        if progress:
            progress("Loading issue rates", 0, total)

        # Sequential short-circuit
        if total < RATE_FETCH_MIN_PARALLEL:
            out: list[EnrichedIssue] = []
            for idx, raw in enumerate(raw_issues, start=1):
                out.append(self._enrich_single(raw))
                if progress:
                    progress("Loading issue rates", idx, total)
            return out

        # Parallel fetch using threads (I/O bound HTTP calls); results keep search order
        with ThreadPoolExecutor(max_workers=RATE_FETCH_MAX_WORKERS) as pool:
            futures = [pool.submit(self._enrich_single, raw) for raw in raw_issues]
            out = []
            for idx, fut in enumerate(futures, start=1):
                out.append(fut.result())
                if progress:
                    progress("Loading issue rates", idx, total)
        return out

    def _enrich_single(self, raw: Any) -> EnrichedIssue:
        raw_fields = raw.get("fields") if isinstance(raw, dict) else None
        fields = raw_fields if isinstance(raw_fields, dict) else {}
        key = str(raw.get("key") or "") if isinstance(raw, dict) else ""
        summary = fields.get("summary")
        try:
            if not key or (raw_fields is not None and not isinstance(raw_fields, dict)):
                raise RowFailure(key, None, "Malformed search result entry")
            rate = self.rates.fetch_rate_for_report(key)
            return enrich_issue(key, summary, rate, extract_time_facts(fields))
        except Exception as exc:
            logger.warning("Failed to price issue %s: %s", key or "<unknown>", exc)
            return zeroed_issue(key, summary)

    # ------------------ Single Issue ------------------
    def fetch_issue_costs(self, issue_key: str) -> IssueCostSnapshot:
        """Stored rate and derived figures for one issue; failures price it at zero."""
        try:
            with ThreadPoolExecutor(max_workers=2) as pool:
                rate_future = pool.submit(self.rates.get_rate, issue_key)
                issue_future = pool.submit(self.api.fetch_issue_fields, issue_key, list(ISSUE_TIME_FIELDS))
                rate = rate_future.result()
                detail = issue_future.result()
        except Exception as exc:
            logger.warning("Failed to load cost figures for %s: %s", issue_key, exc)
            return IssueCostSnapshot(rate=None, costs=zeroed_issue(issue_key, None))
        fields = detail.get("fields")
        if not isinstance(fields, dict):
            fields = {}
        amount = rate.amount if rate else 0.0
        costs = enrich_issue(issue_key, fields.get("summary"), amount, extract_time_facts(fields))
        return IssueCostSnapshot(rate=rate, costs=costs)

    def save_rate(self, issue_key: str | None, text: str | None) -> SaveResult:
        if not issue_key:
            return SaveResult(ok=False, message="No issue key found; cannot save.")
        return self.rates.save_rate_text(issue_key, text)
