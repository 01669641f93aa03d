"""Convert raw GitHub issue payloads into ``NormalizedIssue`` records."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from site_issues.core.models import (
    Label,
    Milestone,
    NormalizedIssue,
    Person,
    RawIssue,
    SpecialFilterSet,
)
from site_issues.core.special_filters import extract_special_filters


class IssueFormatError(ValueError):
    """Raised when a raw issue lacks a field the page model requires."""


def normalize_issue(raw: RawIssue, filters: SpecialFilterSet | None = None) -> NormalizedIssue:
    """Normalize one raw issue, extracting the configured special filters."""
    number = _require(raw, "number")
    user = _parse_person(_require(raw, "user"), field="user")
    if user is None:
        raise IssueFormatError(f"Issue #{number}: 'user' must be a mapping")

    labels = [_parse_label(raw_label) for raw_label in raw.get("labels") or ()]
    remaining, filter_values = extract_special_filters(labels, filters or SpecialFilterSet())

    return NormalizedIssue(
        number=int(number),
        title=_optional_str(raw.get("title")),
        state=_optional_str(raw.get("state")),
        body=raw.get("body"),
        url=_optional_str(raw.get("html_url")),
        date=parse_timestamp(raw.get("created_at")),
        closed_at=parse_timestamp(raw.get("closed_at")),
        user=user,
        assignee=_parse_person(raw.get("assignee"), field="assignee"),
        milestone=_parse_milestone(raw.get("milestone")),
        labels=remaining,
        special_filter_value=filter_values,
    )


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp; ``datetime`` values pass through."""
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise IssueFormatError(f"Unsupported timestamp value: {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise IssueFormatError(f"Invalid timestamp {value!r}: {exc}") from exc


def _require(raw: RawIssue, key: str) -> Any:
    value = raw.get(key)
    if value is None:
        raise IssueFormatError(f"Raw issue is missing required field {key!r}")
    return value


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def _parse_person(raw: object, *, field: str) -> Person | None:
    if not raw:
        return None
    if not isinstance(raw, Mapping):
        raise IssueFormatError(f"Field {field!r} must be a mapping, got {type(raw).__name__}")
    return Person(
        login=_optional_str(raw.get("login")),
        avatar_url=_optional_str(raw.get("avatar_url")),
        html_url=_optional_str(raw.get("html_url")),
    )


def _parse_milestone(raw: object) -> Milestone | None:
    if not raw:
        return None
    if not isinstance(raw, Mapping):
        raise IssueFormatError(f"Field 'milestone' must be a mapping, got {type(raw).__name__}")
    return Milestone(
        id=raw.get("id"),
        number=raw.get("number"),
        state=raw.get("state"),
        title=raw.get("title"),
        description=raw.get("description"),
        due_on=parse_timestamp(raw.get("due_on")),
    )


def _parse_label(raw: Mapping[str, Any]) -> Label:
    return Label(
        name=str(raw.get("name") or ""),
        color=str(raw.get("color") or "").lower(),
    )
