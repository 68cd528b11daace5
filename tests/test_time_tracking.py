import pytest

from jira_rates.analytics.time_tracking import (
    enrich_issue,
    extract_time_facts,
    hours,
    remaining_hours,
    reprice_issue,
    zeroed_issue,
)
from jira_rates.core.models import IssueTimeFacts


def test_hours_conversion():
    assert hours(None) == 0
    assert hours(0) == 0
    assert hours(3600) == 1
    assert hours(5400) == pytest.approx(1.5)


def test_remaining_uses_explicit_value():
    facts = IssueTimeFacts(original_estimate_seconds=36000, time_spent_seconds=18000, remaining_estimate_seconds=7200)
    assert remaining_hours(facts) == 2


def test_remaining_falls_back_to_estimate_minus_spent():
    facts = IssueTimeFacts(original_estimate_seconds=36000, time_spent_seconds=18000)
    assert remaining_hours(facts) == 5


def test_remaining_fallback_floors_at_zero():
    facts = IssueTimeFacts(original_estimate_seconds=3600, time_spent_seconds=18000)
    assert remaining_hours(facts) == 0


def test_explicit_zero_remaining_is_not_missing():
    facts = IssueTimeFacts(original_estimate_seconds=36000, time_spent_seconds=0, remaining_estimate_seconds=0)
    assert remaining_hours(facts) == 0


def test_extract_prefers_top_level_fields():
    facts = extract_time_facts(
        {
            "timeoriginalestimate": 7200,
            "timespent": 3600,
            "timeestimate": 1800,
            "timetracking": {"originalEstimateSeconds": 99, "remainingEstimateSeconds": 99},
        }
    )
    assert facts == IssueTimeFacts(7200, 3600, 1800)


def test_extract_falls_back_to_timetracking_block():
    facts = extract_time_facts(
        {
            "timeoriginalestimate": None,
            "timetracking": {"originalEstimateSeconds": 7200, "remainingEstimateSeconds": 3600},
        }
    )
    assert facts.original_estimate_seconds == 7200
    assert facts.remaining_estimate_seconds == 3600
    assert facts.time_spent_seconds is None


def test_extract_handles_missing_fields():
    assert extract_time_facts(None) == IssueTimeFacts()
    assert extract_time_facts({"timetracking": None}) == IssueTimeFacts()


def test_estimate_spent_scenario():
    raw = {
        "key": "ABC-1",
        "fields": {"summary": "Build it", "timeoriginalestimate": 36000, "timespent": 18000},
    }
    fields = raw["fields"]
    issue = enrich_issue(raw["key"], fields["summary"], 50.0, extract_time_facts(fields))
    assert issue.original_estimate_hours == 10
    assert issue.time_spent_hours == 5
    assert issue.remaining_hours == 5
    assert issue.original_estimate_cost == 500
    assert issue.time_spent_cost == 250
    assert issue.remaining_cost == 250
    assert not issue.failed


def test_missing_summary_defaults_to_unknown():
    issue = enrich_issue("ABC-2", None, 10.0, IssueTimeFacts())
    assert issue.summary == "Unknown"
    assert issue.remaining_hours == 0


def test_zeroed_issue_keeps_identity():
    issue = zeroed_issue("ABC-3", "Broken")
    assert (issue.key, issue.summary, issue.failed) == ("ABC-3", "Broken", True)
    assert issue.rate == 0
    assert issue.original_estimate_cost == issue.time_spent_cost == issue.remaining_cost == 0


def test_reprice_keeps_hours():
    issue = enrich_issue("ABC-4", "x", 10.0, IssueTimeFacts(7200, 3600, None))
    repriced = reprice_issue(issue, 20.0)
    assert repriced.time_spent_hours == issue.time_spent_hours
    assert repriced.original_estimate_cost == 40
    assert repriced.time_spent_cost == 20
    assert repriced.remaining_cost == 20
