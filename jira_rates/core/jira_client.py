"""Jira API client wrapper (REST v3 search, issue fetch, and issue properties)."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests
from jira import JIRA, JIRAError

from .config import JIRA_REST_PREFIX, REQUEST_TIMEOUT_SECONDS
from .exceptions import SearchFailure


@dataclass(slots=True)
class ApiResponse:
    status: int | None
    text: str = ""

    @property
    def ok(self) -> bool:
        return self.status is not None and 200 <= self.status < 300

    def json(self) -> Any:
        """Decoded body, or None when the body is empty or not JSON."""
        if not self.text:
            return None
        try:
            return json.loads(self.text)
        except ValueError:
            return None


class JiraAPI:
    def __init__(self, server: str, email: str, token: str, *, timeout: float = REQUEST_TIMEOUT_SECONDS):
        self.server = server.rstrip("/")
        self.timeout = timeout
        # Failed calls are terminal for the current unit of work: no library retries.
        self.client = JIRA(
            basic_auth=(email, token),
            options={"server": self.server, "rest_api_version": "3"},
            timeout=timeout,
            max_retries=0,
        )

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        payload: Any = None,
    ) -> ApiResponse:
        """Issue a REST v3 call and return its status and body.

        Jira error statuses come back as an ``ApiResponse`` rather than an
        exception so callers can tell "not found" from other failures.
        Transport errors (``requests.RequestException``) propagate.
        """
        session = getattr(self.client, "_session", None)
        if session is None:
            raise RuntimeError("JIRA session unavailable")
        url = f"{self.server}{JIRA_REST_PREFIX}{path}"
        kwargs: dict[str, Any] = {"params": params, "timeout": self.timeout}
        if payload is not None:
            kwargs["data"] = json.dumps(payload)
            kwargs["headers"] = {"Content-Type": "application/json"}
        try:
            resp = session.request(method, url, **kwargs)
        except JIRAError as exc:
            return ApiResponse(status=exc.status_code, text=exc.text or str(exc))
        return ApiResponse(status=resp.status_code, text=resp.text or "")

    def search_jql(
        self,
        jql: str,
        fields: Sequence[str] | None = None,
        max_results: int = 100,
    ) -> list[dict[str, Any]]:
        """Return a single page of raw issues for ``jql``.

        Raises ``SearchFailure`` on any non-success status or transport error.
        """
        params: dict[str, Any] = {"jql": jql, "maxResults": max_results}
        if fields:
            params["fields"] = ",".join(fields)
        try:
            resp = self.request("GET", "/search/jql", params=params)
        except requests.RequestException as exc:
            raise SearchFailure(None, str(exc)) from exc
        if not resp.ok:
            raise SearchFailure(resp.status, resp.text[:200] or "Unknown error")
        data = resp.json() or {}
        issues = data.get("issues") if isinstance(data, dict) else None
        return list(issues or [])

    def get_issue_property(self, issue_key: str, property_key: str) -> ApiResponse:
        return self.request("GET", f"/issue/{quote(issue_key)}/properties/{quote(property_key)}")

    def set_issue_property(self, issue_key: str, property_key: str, value: Any) -> ApiResponse:
        return self.request(
            "PUT",
            f"/issue/{quote(issue_key)}/properties/{quote(property_key)}",
            payload=value,
        )

    def fetch_issue_fields(self, issue_key: str, fields: Sequence[str]) -> dict[str, Any]:
        try:
            resp = self.request("GET", f"/issue/{quote(issue_key)}", params={"fields": ",".join(fields)})
        except requests.RequestException as exc:  # pragma: no cover - network error path
            raise RuntimeError(f"Failed to fetch issue {issue_key}: {exc}") from exc
        if not resp.ok:
            raise RuntimeError(f"Failed to fetch issue {issue_key} ({resp.status}): {resp.text[:200]}")
        body = resp.json()
        if isinstance(body, dict):
            return body
        raise RuntimeError(f"Unexpected issue payload type for {issue_key}: {type(body)!r}")
