from jira_rates.core.context import from_host_context, from_query_params, from_value, resolve_issue_key


def _boom():
    raise RuntimeError("resolver unavailable")


def test_first_non_empty_wins():
    key = resolve_issue_key([from_value(""), from_value("  "), from_value("ABC-2"), from_value("ABC-3")])
    assert key == "ABC-2"


def test_host_context_paths():
    assert from_host_context({"extension": {"issue": {"key": "EXT-1"}}})() == "EXT-1"
    assert from_host_context({"issue": {"key": "ISS-1"}})() == "ISS-1"
    assert from_host_context({"issueKey": "FLAT-1"})() == "FLAT-1"
    assert from_host_context(None)() is None


def test_query_params_order():
    assert from_query_params({"issue": "B-1", "issueKey": "A-1"})() == "A-1"
    assert from_query_params({"issue": ["B-2"]})() == "B-2"
    assert from_query_params({})() is None


def test_failing_lookup_falls_through():
    key = resolve_issue_key([_boom, from_host_context(None), from_query_params({"issueKey": "URL-9"})])
    assert key == "URL-9"


def test_nothing_found():
    assert resolve_issue_key([from_value(None), from_query_params(None)]) is None
