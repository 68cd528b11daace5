"""Resolve the issue key for the rate panel from an ordered list of lookups."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

IssueKeyStrategy = Callable[[], Any]

QUERY_PARAM_NAMES = ("issueKey", "issue")


def _dig(data: Any, *path: str) -> Any:
    node = data
    for part in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(part)
    return node


def from_value(value: str | None) -> IssueKeyStrategy:
    return lambda: value


def from_host_context(context: Mapping[str, Any] | None) -> IssueKeyStrategy:
    """Issue key carried by the embedding host (issue panel extension context)."""

    def lookup():
        return (
            _dig(context, "extension", "issue", "key")
            or _dig(context, "issue", "key")
            or _dig(context, "issueKey")
        )

    return lookup


def from_query_params(params: Mapping[str, Any] | None) -> IssueKeyStrategy:
    def lookup():
        if not params:
            return None
        for name in QUERY_PARAM_NAMES:
            value = params.get(name)
            if isinstance(value, list | tuple):
                value = value[0] if value else None
            if value:
                return value
        return None

    return lookup


def resolve_issue_key(strategies: Iterable[IssueKeyStrategy]) -> str | None:
    """First non-empty key wins; a lookup that raises counts as empty."""
    for strategy in strategies:
        try:
            value = strategy()
        except Exception as exc:
            logger.debug("Issue key lookup failed: %s", exc)
            continue
        if value is None:
            continue
        key = str(value).strip()
        if key:
            return key
    return None
