import pytest
import requests
from jira import JIRAError

from jira_rates.core.exceptions import SearchFailure
from jira_rates.core.jira_client import ApiResponse, JiraAPI


class FakeResponse:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text


class FakeSession:
    def __init__(self, outcome):
        self.outcome = outcome
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class FakeClient:
    def __init__(self, session):
        self._session = session


def _api(outcome):
    api = JiraAPI.__new__(JiraAPI)
    api.server = "https://example.atlassian.net"
    api.timeout = 7
    api.client = FakeClient(FakeSession(outcome))
    return api


def test_api_response_json_tolerates_garbage():
    assert ApiResponse(status=200, text='{"a": 1}').json() == {"a": 1}
    assert ApiResponse(status=200, text="not json").json() is None
    assert ApiResponse(status=204).json() is None


def test_api_response_ok():
    assert ApiResponse(status=204).ok
    assert not ApiResponse(status=404).ok
    assert not ApiResponse(status=None).ok


def test_request_builds_v3_url_with_timeout():
    api = _api(FakeResponse(200, "{}"))
    api.request("GET", "/issue/ABC-1/properties/rate")
    method, url, kwargs = api.client._session.calls[0]
    assert method == "GET"
    assert url == "https://example.atlassian.net/rest/api/3/issue/ABC-1/properties/rate"
    assert kwargs["timeout"] == 7


def test_request_put_sends_json_body():
    api = _api(FakeResponse(201))
    resp = api.set_issue_property("ABC-1", "rate", {"currency": "USD", "amount": 5.0})
    assert resp.status == 201
    _, _, kwargs = api.client._session.calls[0]
    assert kwargs["data"] == '{"currency": "USD", "amount": 5.0}'
    assert kwargs["headers"]["Content-Type"] == "application/json"


def test_request_converts_jira_error_to_response():
    api = _api(JIRAError(status_code=404, text="Property not found"))
    resp = api.get_issue_property("ABC-1", "rate")
    assert resp.status == 404
    assert resp.text == "Property not found"


def test_request_propagates_transport_errors():
    api = _api(requests.ConnectionError("down"))
    with pytest.raises(requests.ConnectionError):
        api.get_issue_property("ABC-1", "rate")


def test_search_jql_returns_issues():
    api = _api(FakeResponse(200, '{"issues": [{"key": "ABC-1"}]}'))
    assert api.search_jql("project = ABC", fields=["summary"], max_results=100) == [{"key": "ABC-1"}]
    _, _, kwargs = api.client._session.calls[0]
    assert kwargs["params"] == {"jql": "project = ABC", "maxResults": 100, "fields": "summary"}


def test_search_jql_unparsable_body_is_empty():
    assert _api(FakeResponse(200, "oops")).search_jql("x") == []


def test_search_jql_failure_raises():
    with pytest.raises(SearchFailure) as excinfo:
        _api(FakeResponse(410, "gone")).search_jql("x")
    assert excinfo.value.status == 410
    assert str(excinfo.value) == "Search failed (410): gone"


def test_fetch_issue_fields_failure_raises():
    with pytest.raises(RuntimeError):
        _api(FakeResponse(404, "missing")).fetch_issue_fields("ABC-1", ["timespent"])
