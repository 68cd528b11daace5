"""Domain data models for issue rates, time tracking facts, and cost reports."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from .config import DEFAULT_CURRENCY


@dataclass(slots=True, frozen=True)
class Rate:
    amount: float
    currency: str = DEFAULT_CURRENCY

    def to_payload(self) -> dict[str, Any]:
        return {"currency": self.currency, "amount": self.amount}

    @classmethod
    def from_payload(cls, value: Any) -> Rate | None:
        """Build a Rate from a stored property value, or None if it is not usable.

        Negative amounts are clamped to zero; NaN and infinities are unusable.
        """
        if not isinstance(value, dict):
            return None
        try:
            amount = float(value.get("amount") or 0)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(amount):
            return None
        currency = value.get("currency") or DEFAULT_CURRENCY
        return cls(amount=max(0.0, amount), currency=str(currency))


@dataclass(slots=True, frozen=True)
class IssueTimeFacts:
    original_estimate_seconds: float | None = None
    time_spent_seconds: float | None = None
    remaining_estimate_seconds: float | None = None


@dataclass(slots=True, frozen=True)
class EnrichedIssue:
    key: str
    summary: str
    rate: float = 0.0
    original_estimate_hours: float = 0.0
    time_spent_hours: float = 0.0
    remaining_hours: float = 0.0
    original_estimate_cost: float = 0.0
    time_spent_cost: float = 0.0
    remaining_cost: float = 0.0
    failed: bool = False


@dataclass(slots=True, frozen=True)
class ReportTotals:
    original_estimate_hours: float = 0.0
    time_spent_hours: float = 0.0
    remaining_hours: float = 0.0
    original_estimate_cost: float = 0.0
    time_spent_cost: float = 0.0
    remaining_cost: float = 0.0


@dataclass(slots=True)
class RateReport:
    issues: list[EnrichedIssue] = field(default_factory=list)
    totals: ReportTotals = field(default_factory=ReportTotals)
    error: str | None = None
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def failed_rows(self) -> int:
        return sum(1 for issue in self.issues if issue.failed)


@dataclass(slots=True, frozen=True)
class SaveResult:
    ok: bool
    message: str
    status: int | None = None
    rate: Rate | None = None


@dataclass(slots=True, frozen=True)
class IssueCostSnapshot:
    """Stored rate plus derived figures for a single issue panel."""

    rate: Rate | None
    costs: EnrichedIssue
