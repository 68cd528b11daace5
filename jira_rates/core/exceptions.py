"""Error types raised while talking to Jira for rate and report data."""

from __future__ import annotations


class RateReportError(Exception):
    """Base class for report and rate store failures."""


class SearchFailure(RateReportError):
    """The issue search backing a report failed; the whole report is abandoned."""

    def __init__(self, status: int | None, message: str):
        self.status = status
        self.message = message
        label = status if status is not None else "unreachable"
        super().__init__(f"Search failed ({label}): {message}")


class RowFailure(RateReportError):
    """A single issue could not be priced; its report row degrades to zero."""

    def __init__(self, issue_key: str, status: int | None, message: str):
        self.issue_key = issue_key
        self.status = status
        self.message = message
        super().__init__(f"Rate fetch failed for {issue_key} ({status}): {message}")
