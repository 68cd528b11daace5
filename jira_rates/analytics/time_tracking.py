"""Time tracking arithmetic: seconds to hours, remaining fallback, per-issue costs."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from jira_rates.core.config import SECONDS_PER_HOUR, UNKNOWN_SUMMARY
from jira_rates.core.models import EnrichedIssue, IssueTimeFacts


def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _as_seconds(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def hours(seconds: float | None) -> float:
    """Convert Jira seconds to hours; missing values count as zero."""
    if seconds is None:
        return 0.0
    return float(seconds) / SECONDS_PER_HOUR


def extract_time_facts(fields: dict[str, Any] | None) -> IssueTimeFacts:
    """Read the time tracking fields of a raw Jira issue.

    Top-level fields win over the ``timetracking`` block; a present ``0`` is an
    explicit value, only ``None``/missing falls through.
    """
    fields = fields or {}
    tracking = fields.get("timetracking") or {}
    if not isinstance(tracking, dict):
        tracking = {}
    return IssueTimeFacts(
        original_estimate_seconds=_as_seconds(
            _first_present(fields.get("timeoriginalestimate"), tracking.get("originalEstimateSeconds"))
        ),
        time_spent_seconds=_as_seconds(fields.get("timespent")),
        remaining_estimate_seconds=_as_seconds(
            _first_present(fields.get("timeestimate"), tracking.get("remainingEstimateSeconds"))
        ),
    )


def remaining_hours(facts: IssueTimeFacts) -> float:
    if facts.remaining_estimate_seconds is not None:
        return hours(facts.remaining_estimate_seconds)
    # No explicit remaining estimate: whatever is left of the original, floored at zero.
    return max(0.0, hours(facts.original_estimate_seconds) - hours(facts.time_spent_seconds))


def enrich_issue(key: str, summary: str | None, rate: float, facts: IssueTimeFacts) -> EnrichedIssue:
    original = hours(facts.original_estimate_seconds)
    spent = hours(facts.time_spent_seconds)
    remaining = remaining_hours(facts)
    return EnrichedIssue(
        key=key,
        summary=summary or UNKNOWN_SUMMARY,
        rate=rate,
        original_estimate_hours=original,
        time_spent_hours=spent,
        remaining_hours=remaining,
        original_estimate_cost=rate * original,
        time_spent_cost=rate * spent,
        remaining_cost=rate * remaining,
    )


def zeroed_issue(key: str, summary: str | None) -> EnrichedIssue:
    return EnrichedIssue(key=key, summary=summary or UNKNOWN_SUMMARY, failed=True)


def reprice_issue(issue: EnrichedIssue, rate: float) -> EnrichedIssue:
    """Same hours, new rate; used after a rate save without refetching the issue."""
    return replace(
        issue,
        rate=rate,
        original_estimate_cost=rate * issue.original_estimate_hours,
        time_spent_cost=rate * issue.time_spent_hours,
        remaining_cost=rate * issue.remaining_hours,
    )
