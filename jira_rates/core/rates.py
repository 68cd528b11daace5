"""Per-issue rate storage backed by the Jira issue property API."""

from __future__ import annotations

import logging
import re

import requests

from .config import DEFAULT_CURRENCY, RATE_PROPERTY_KEY, RATE_SAVE_SUCCESS_STATUSES
from .exceptions import RowFailure
from .jira_client import ApiResponse, JiraAPI
from .models import Rate, SaveResult

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_rate_text(text: str | None) -> float:
    """Turn free-form rate input into a non-negative amount.

    Everything except digits and ``.`` is dropped and the leading number is
    parsed; anything that does not yield a number becomes ``0.0``.

    >>> parse_rate_text("$12.5abc")
    12.5
    >>> parse_rate_text("abc")
    0.0
    """
    cleaned = _NON_NUMERIC.sub("", text or "")
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return 0.0
    return float(match.group(0))


def format_rate_input(rate: Rate | None) -> str:
    """Pre-fill value for the rate editor."""
    return f"{(rate.amount if rate else 0.0):.2f}"


def _property_value(resp: ApiResponse):
    body = resp.json()
    if not isinstance(body, dict):
        return None
    return body.get("value")


class RateStore:
    def __init__(self, api: JiraAPI, property_key: str = RATE_PROPERTY_KEY):
        self.api = api
        self.property_key = property_key

    def get_rate(self, issue_key: str) -> Rate | None:
        """Stored rate for ``issue_key``; None when absent, unreadable, or unreachable."""
        try:
            resp = self.api.get_issue_property(issue_key, self.property_key)
        except (requests.RequestException, RuntimeError) as exc:
            logger.warning("Failed to read rate for %s: %s", issue_key, exc)
            return None
        if not resp.ok:
            if resp.status != 404:
                logger.warning("Rate lookup for %s returned %s", issue_key, resp.status)
            return None
        return Rate.from_payload(_property_value(resp))

    def fetch_rate_for_report(self, issue_key: str) -> float:
        """Rate amount for a report row.

        A missing property prices the row at zero. Any other failure raises
        ``RowFailure`` so the caller can degrade the row.
        """
        try:
            resp = self.api.get_issue_property(issue_key, self.property_key)
        except requests.RequestException as exc:
            raise RowFailure(issue_key, None, str(exc)) from exc
        if resp.status == 404:
            return 0.0
        if not resp.ok:
            raise RowFailure(issue_key, resp.status, resp.text[:200] or "Unknown error")
        rate = Rate.from_payload(_property_value(resp))
        return rate.amount if rate else 0.0

    def set_rate(self, issue_key: str, rate: Rate) -> SaveResult:
        """Replace the stored rate wholesale."""
        try:
            resp = self.api.set_issue_property(issue_key, self.property_key, rate.to_payload())
        except (requests.RequestException, RuntimeError) as exc:
            logger.error("Failed to save rate for %s: %s", issue_key, exc)
            return SaveResult(ok=False, message=f"Save error: {exc}")
        if resp.status in RATE_SAVE_SUCCESS_STATUSES:
            return SaveResult(ok=True, message="Saved.", status=resp.status, rate=rate)
        status = resp.status if resp.status is not None else "unknown"
        logger.warning("Saving rate for %s returned %s", issue_key, status)
        return SaveResult(ok=False, message=f"Save failed (status {status})", status=resp.status)

    def save_rate_text(self, issue_key: str, text: str | None, currency: str = DEFAULT_CURRENCY) -> SaveResult:
        return self.set_rate(issue_key, Rate(amount=parse_rate_text(text), currency=currency))
